"""CodeCommander exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
project and by tests.
"""


class CodeCommanderError(Exception):
    """Base exception for all CodeCommander errors."""


class CodeCommanderConfigError(CodeCommanderError):
    """Raised for invalid user configuration."""


class CodeCommanderInputError(CodeCommanderError):
    """Raised when a tool input (usually a file) is missing or unreadable."""


class CodeCommanderInputTooLargeError(CodeCommanderInputError):
    """Raised when inputs exceed the configured size guard."""


class CodeCommanderPatternError(CodeCommanderError):
    """Raised for an invalid regular expression or flag string."""
