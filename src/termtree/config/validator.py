"""Readable messages for pydantic validation failures.

Used for both configuration files and definition records. Definition
records pass their name as the scope so every message points at the
offending record, e.g. ``Field 'person.required'``.
"""

from pydantic import ValidationError as PydanticValidationError

# Error types whose input value helps the reader fix the record
_SHOW_INPUT_TYPES = ("value_error", "extra_forbidden")


def flatten_pydantic_errors(
    exc: PydanticValidationError, scope: str | None = None
) -> list[str]:
    """Flatten a pydantic ValidationError into one message per field.

    Args:
        exc: Pydantic ValidationError exception
        scope: Prefix for every field location, such as a record name

    Returns:
        List of human-readable error messages
    """
    errors: list[str] = []

    for error in exc.errors():
        loc = [str(item) for item in error.get("loc", ())]
        if scope:
            loc.insert(0, scope)
        field_path = ".".join(loc) if loc else "unknown"
        error_type = error.get("type", "")

        if error_type == "missing":
            msg = "is required"
        elif error_type == "extra_forbidden":
            msg = "is not a recognized field"
        else:
            msg = error.get("msg", "Unknown error")

        if error_type in _SHOW_INPUT_TYPES or error_type.endswith("_parsing"):
            errors.append(
                f"Field '{field_path}': {msg} (received: {error.get('input')!r})"
            )
        else:
            errors.append(f"Field '{field_path}': {msg}")

    return errors if errors else ["Validation failed with unknown error"]
