"""CLI command implementations for java-info."""

from java_info.cli.errors import CLIError
from java_info.cli.query import (
    EngineOptions,
    build_engine,
    find_classes_command,
    javadoc_command,
    javasrc_command,
    methods_of_command,
    param_doc_command,
)

__all__ = [
    "CLIError",
    "EngineOptions",
    "build_engine",
    "find_classes_command",
    "javadoc_command",
    "javasrc_command",
    "methods_of_command",
    "param_doc_command",
]
