"""Error hints for configuration validation errors.

Maps pydantic error types and source fields to short remediation hints
that the CLI prints next to each validation error.
"""

from typing import Final


ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "int_type": "This field must be an integer (whole number).",
    "string_type": "This field must be a text string.",
    "bool_type": "This field must be true or false.",
    "list_type": "This field must be a list.",
    "too_short": "The list is empty. Declare at least one source.",
    "string_too_short": "The text is too short. Check minimum length requirement.",
    "string_too_long": "The text is too long. Check maximum length requirement.",
    "string_pattern_mismatch": "The format is invalid. Use lowercase letters, numbers, hyphens, or underscores only.",
    "extra_forbidden": "Unknown field. Check the spelling against the documented fields.",
    "value_error": "Check the value. Source names must be unique and only one source may be primary.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "name": "Use lowercase letters, numbers, hyphens, or underscores (e.g., 'tranco').",
    "path": "Path of the list file written by the fetcher (e.g., 'tranco_list_tw.json').",
    "domain_field": "Item field that holds the domain (e.g., 'domain', 'website', 'domain_name').",
    "url_field": "Item field that holds the canonical URL; omit it if the list has none.",
    "primary": "Must be true or false. Exactly one enabled source should be primary.",
    "version": "Use a 'major.minor' string such as '1.0'.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The pydantic error type (e.g., 'missing').
        field_name: Optional field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'sources.0.name' -> 'name'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'sources.0.name').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
