"""
Error hierarchy for edi-exchange.

Every error raised by the library derives from ExchangeError so callers can
catch a single base type. Native errors (lxml, OSError, paramiko) are chained
with ``raise ... from`` so the original cause stays visible.
"""


class ExchangeError(Exception):
    """Base class for all edi-exchange errors."""


class NotSetError(ExchangeError):
    """Raised when a document tree is read before any XML has been set."""


class ParseError(ExchangeError):
    """Raised when raw input is not well-formed XML."""


class InvalidPathError(ExchangeError):
    """Raised for an empty or malformed element path or query expression."""


class FormatError(ExchangeError, ValueError):
    """Raised when a date or time string matches none of the supported shapes."""


class TransferError(ExchangeError):
    """Raised when the remote file channel fails (connect, list, read, write, delete, chdir)."""


class RequiredFieldError(ExchangeError):
    """Raised when a business element is exported without a required field."""


class InvalidElementError(ExchangeError):
    """Raised when a business element is imported from, or exported as, the wrong node."""
