"""Main entry point for java-info.

Commands:
- javadoc: documentation of a class or one of its methods
- javasrc: source of a class or one of its methods
- find-classes: fully-qualified names for a simple class name
- methods-of: public method declarations of a class
- param-doc: documentation of a single method parameter
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from java_info.cli import (
    EngineOptions,
    find_classes_command,
    javadoc_command,
    javasrc_command,
    methods_of_command,
    param_doc_command,
)

# Environment variables (CLASSPATH, JAVA_HOME, JAVA_INFO_*) may come from a
# .env file in the working directory
load_dotenv()

app = typer.Typer(name="java-info", no_args_is_help=True)

ClasspathOption = Annotated[
    str | None,
    typer.Option(
        "--classpath",
        "-cp",
        help="Classpath to search (overrides CLASSPATH); dir/* adds every jar in dir",
        rich_help_panel="Environment",
    ),
]
JavaHomeOption = Annotated[
    Path | None,
    typer.Option(
        "--java-home",
        help="Java installation directory (overrides JAVA_HOME)",
        file_okay=False,
        dir_okay=True,
        rich_help_panel="Environment",
    ),
]
LocalRepositoryOption = Annotated[
    Path | None,
    typer.Option(
        "--local-repository",
        help="Local Maven repository root",
        file_okay=False,
        dir_okay=True,
        rich_help_panel="Environment",
        show_default="~/.m2/repository",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]


@app.command()
def javadoc(  # noqa: PLR0913 - CLI entry point with many options
    class_name: Annotated[str, typer.Argument(help="Fully-qualified class name")],
    method: Annotated[
        str | None, typer.Argument(help="Method name (all overloads are shown)")
    ] = None,
    classpath: ClasspathOption = None,
    java_home: JavaHomeOption = None,
    local_repository: LocalRepositoryOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show documentation for a class or one of its methods.

    Example:
        java-info javadoc java.util.ArrayList add

    """
    javadoc_command(
        class_name,
        method,
        EngineOptions(classpath, java_home, local_repository),
        log_level,
    )


@app.command()
def javasrc(  # noqa: PLR0913 - CLI entry point with many options
    class_name: Annotated[str, typer.Argument(help="Fully-qualified class name")],
    method: Annotated[
        str | None, typer.Argument(help="Method name (all overloads are shown)")
    ] = None,
    classpath: ClasspathOption = None,
    java_home: JavaHomeOption = None,
    local_repository: LocalRepositoryOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show source for a class or one of its methods, Javadoc removed."""
    javasrc_command(
        class_name,
        method,
        EngineOptions(classpath, java_home, local_repository),
        log_level,
    )


@app.command(name="find-classes")
def find_classes(
    simple_name: Annotated[str, typer.Argument(help="Simple class name, e.g. File")],
    classpath: ClasspathOption = None,
    java_home: JavaHomeOption = None,
    local_repository: LocalRepositoryOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """List fully-qualified classes with the given simple name."""
    find_classes_command(
        simple_name, EngineOptions(classpath, java_home, local_repository), log_level
    )


@app.command(name="methods-of")
def methods_of(  # noqa: PLR0913 - CLI entry point with many options
    class_name: Annotated[str, typer.Argument(help="Fully-qualified class name")],
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", "-p", help="Method name wildcard, e.g. 'get*'"),
    ] = None,
    classpath: ClasspathOption = None,
    java_home: JavaHomeOption = None,
    local_repository: LocalRepositoryOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """List public method declarations of a class."""
    methods_of_command(
        class_name,
        pattern,
        EngineOptions(classpath, java_home, local_repository),
        log_level,
    )


@app.command(name="param-doc")
def param_doc(  # noqa: PLR0913 - CLI entry point with many options
    class_name: Annotated[str, typer.Argument(help="Fully-qualified class name")],
    method: Annotated[str, typer.Argument(help="Method name")],
    param: Annotated[str, typer.Argument(help="Parameter name")],
    classpath: ClasspathOption = None,
    java_home: JavaHomeOption = None,
    local_repository: LocalRepositoryOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show documentation for a single method parameter."""
    param_doc_command(
        class_name,
        method,
        param,
        EngineOptions(classpath, java_home, local_repository),
        log_level,
    )


if __name__ == "__main__":
    app()
