"""Error classes for java-info.

Lookup problems (missing classes, failed downloads, unparseable sources) are
reported as ``Failure`` values, not exceptions. The exceptions here cover
misconfiguration only:

- JavaInfoError: Base exception class for all java-info errors
- JavaInfoConfigError: Invalid configuration
"""


class JavaInfoError(Exception):
    """Base exception for all java-info errors."""

    pass


class JavaInfoConfigError(JavaInfoError):
    """Raised when java-info configuration is invalid."""

    pass
