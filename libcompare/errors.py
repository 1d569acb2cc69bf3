"""Exceptions raised by libcompare."""


class LibCompareError(Exception):
    """Base exception for libcompare errors"""
    pass


class MalformedInputError(LibCompareError, OSError):
    """A catalog file could not be parsed"""
    pass


class InvalidScanError(LibCompareError, ValueError):
    """A folder scan target is missing or is not a directory"""
    pass


class ExportError(LibCompareError, OSError):
    """A report could not be serialized"""
    pass
