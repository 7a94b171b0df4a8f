"""Custom exception hierarchy for termtree definitions and lookups."""

from collections.abc import Sequence


class TermTreeError(Exception):
    """Base exception for all termtree errors.

    All termtree-specific exceptions inherit from this class, enabling
    centralized exception handling in callers and the CLI.
    """

    pass


class ConfigError(TermTreeError):
    """Exception raised for configuration errors.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class ValidationError(TermTreeError):
    """Exception raised when a builder setting carries a value of the wrong type.

    Attributes:
        field: The setting that failed validation, as ``term.setting``
        message: Description of the validation failure
        expected: Human description of expected value/type
        actual: The actual value that failed validation
    """

    def __init__(
        self,
        field: str,
        message: str,
        expected: str,
        actual: str,
    ) -> None:
        """Initialize ValidationError with detailed information.

        Args:
            field: Setting that failed validation
            message: Description of what went wrong
            expected: Human-readable description of expected value
            actual: The actual value that failed
        """
        self.field = field
        self.message = message
        self.expected = expected
        self.actual = actual
        full_message = (
            f"Validation error in '{field}': {message}\n"
            f"  Expected: {expected}\n"
            f"  Got: {actual}"
        )
        super().__init__(full_message)


class FileNotFoundError(TermTreeError):
    """Exception raised when a definition or config file cannot be read.

    Attributes:
        path: Path to the file that was not found
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize FileNotFoundError with path and message."""
        self.path = path
        self.message = message
        super().__init__(f"File not found: {path}\n{message}")


class MalformedDefinitionError(TermTreeError):
    """Exception raised when a definition record cannot be turned into a term.

    Raised for records without a ``name``, for field values that fail
    validation, and for definition text that cannot be parsed at all.

    Attributes:
        message: Description of the problem
        record_name: Name of the offending record, when it has one
    """

    def __init__(self, message: str, record_name: str | None = None) -> None:
        """Create a malformed definition error with optional record context."""
        self.message = message
        self.record_name = record_name
        if record_name:
            super().__init__(f"Malformed definition '{record_name}': {message}")
        else:
            super().__init__(f"Malformed definition: {message}")


class UnrecognizedSettingError(TermTreeError):
    """Exception raised in strict mode for a builder setting no term field matches."""

    def __init__(self, setting: str, term_name: str) -> None:
        """Create an unrecognized setting error for a builder."""
        self.setting = setting
        self.term_name = term_name
        super().__init__(
            f"Unrecognized setting '{setting}' on term '{term_name}'"
        )


class TermNotFoundError(TermTreeError):
    """Exception raised when a pointer path does not resolve to a term."""

    def __init__(self, pointers: Sequence[str]) -> None:
        """Create a lookup error for the given pointer path."""
        self.pointers = tuple(pointers)
        super().__init__(f"No term found at {' > '.join(self.pointers)!r}")
