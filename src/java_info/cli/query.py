"""CLI command implementations for class documentation and source queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from java_info import presentation
from java_info.cli.errors import CLIError, cli_error_handler
from java_info.config import JavaInfoConfig
from java_info.engine import JavaInfo
from java_info.failures import Failure
from java_info.logging import setup_logging

logger = logging.getLogger(__name__)
console = Console()


@dataclass(frozen=True)
class EngineOptions:
    """Command-line overrides for the engine configuration.

    Attributes:
        classpath: Path-separator delimited classpath (overrides CLASSPATH)
        java_home: Java installation directory (overrides JAVA_HOME)
        local_repository: Local Maven repository root

    """

    classpath: str | None = None
    java_home: Path | None = None
    local_repository: Path | None = None


def build_engine(options: EngineOptions) -> JavaInfo:
    """Build an engine from the environment and command-line overrides.

    Args:
        options: Overrides taking precedence over the environment

    Returns:
        Configured engine

    Raises:
        JavaInfoConfigError: If the resulting configuration is invalid

    """
    config = JavaInfoConfig.from_environment(
        {
            "classpath": options.classpath,
            "java_home": options.java_home,
            "local_repository": options.local_repository,
        }
    )
    logger.debug(
        "Using %d classpath entries, java home %s",
        len(config.classpath),
        config.resolved_java_home(),
    )
    return JavaInfo(config)


def _print(text: str) -> None:
    # Java source is full of [brackets]; never interpret it as Rich markup
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def javadoc_command(
    class_name: str,
    method: str | None,
    options: EngineOptions,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for printing documentation.

    Args:
        class_name: Fully-qualified class name
        method: Optional method name
        options: Engine configuration overrides
        log_level: Logging level

    Raises:
        typer.Exit: With a non-zero status if the class cannot be described

    """
    setup_logging(level=log_level)
    with cli_error_handler("javadoc", "Failed to get documentation"):
        engine = build_engine(options)
        descriptor = engine.describe_class(class_name)
        if isinstance(descriptor, Failure):
            raise CLIError.from_failure(descriptor, "javadoc")
        _print(presentation.render_javadoc(descriptor, class_name, method))


def javasrc_command(
    class_name: str,
    method: str | None,
    options: EngineOptions,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for printing source."""
    setup_logging(level=log_level)
    with cli_error_handler("javasrc", "Failed to get source"):
        engine = build_engine(options)
        if method is None:
            source = engine.class_source(class_name)
        else:
            source = engine.method_source(class_name, method)
        if isinstance(source, Failure):
            raise CLIError.from_failure(source, "javasrc")
        _print(presentation.render_source(source, class_name, method))


def find_classes_command(
    simple_name: str,
    options: EngineOptions,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for finding classes by simple name."""
    setup_logging(level=log_level)
    with cli_error_handler("find-classes", "Failed to search the classpath"):
        engine = build_engine(options)
        names = presentation.find_classes(engine, simple_name)
        if not names:
            console.print(
                f"[yellow]No classes named '{simple_name}' found on the classpath[/yellow]"
            )
            return
        _print("\n".join(names))


def methods_of_command(
    class_name: str,
    pattern: str | None,
    options: EngineOptions,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for listing public method declarations."""
    setup_logging(level=log_level)
    with cli_error_handler("methods-of", "Failed to list methods"):
        engine = build_engine(options)
        methods = engine.matching_methods(class_name, pattern)
        if isinstance(methods, Failure):
            raise CLIError.from_failure(methods, "methods-of")
        listing = "\n".join(method.declaration for method in methods)
        _print(presentation.render_methods(listing, class_name, pattern))


def param_doc_command(
    class_name: str,
    method: str,
    param: str,
    options: EngineOptions,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for printing one parameter's documentation."""
    setup_logging(level=log_level)
    with cli_error_handler("param-doc", "Failed to get parameter documentation"):
        engine = build_engine(options)
        text = engine.parameter_doc(class_name, method, param)
        if text is None:
            _print(
                f"No documentation for parameter '{param}' of method "
                f"'{method}' in class {class_name}"
            )
            return
        _print(text)
