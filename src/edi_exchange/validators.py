"""
Reusable field validators for Pydantic models and settings.

Designed to be attached with ``field_validator(...)(validator)`` the same way
across ExchangeSettings and the business element models.
"""

from typing import Optional


def validate_remote_dir(path: str) -> str:
    """
    Validate a remote directory setting.

    Args:
        path: Directory name or path on the remote channel (e.g., 'in', '/edi/out')

    Returns:
        The path with surrounding whitespace removed

    Raises:
        ValueError: If the path is empty or contains a NUL byte

    Example:
        >>> validate_remote_dir(' in ')
        'in'
        >>> validate_remote_dir('')  # Raises ValueError
    """
    path = (path or '').strip()
    if not path:
        raise ValueError("Remote directory must not be empty")
    if '\x00' in path:
        raise ValueError(f"Remote directory contains a NUL byte: {path!r}")
    return path


def validate_filename_prefix(prefix: str) -> str:
    """
    Validate a remote filename prefix used by the naming filter.

    A prefix is a plain leading fragment of a file name, so it may not be
    empty and may not contain a path separator.

    Raises:
        ValueError: If the prefix is empty or contains '/' or '\\'

    Example:
        >>> validate_filename_prefix('PR')
        'PR'
    """
    if not prefix:
        raise ValueError("Filename prefix must not be empty")
    if '/' in prefix or '\\' in prefix:
        raise ValueError(f"Filename prefix must not contain a path separator: {prefix!r}")
    return prefix


def validate_type_code(code: Optional[str]) -> str:
    """Normalize an optional code read from XML to a stripped string."""
    return (code or '').strip()
