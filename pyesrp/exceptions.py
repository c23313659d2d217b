"""Errors raised by pyesrp"""


class SrpError(Exception):
    """Base class for pyesrp errors"""


class ValueFormatError(SrpError, ValueError):
    """Raised when a Value cannot be built from the given input (malformed hex, negative integer)"""


class SecurityError(SrpError, RuntimeError):
    """Raised when a secure operation cannot be performed, e.g. entropy source is unavailable"""


class ConfigurationError(SrpError, ValueError):
    """Raised on degenerate group parameters or invalid crypto options"""
