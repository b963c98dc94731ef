"""Exceptions surfaced to callers. Everything else is a diagnostic."""

from __future__ import annotations


class SvgNormError(Exception):
    pass


class ParseError(SvgNormError):
    """The input is not well-formed XML."""


class FatalError(SvgNormError):
    """No meaningful output can be produced for the document."""


class MissingRootError(FatalError):
    def __init__(self, message: str = "the document has no 'svg' root element") -> None:
        super().__init__(message)


class SizeDeterminationError(FatalError):
    def __init__(self, message: str = "the document size cannot be determined") -> None:
        super().__init__(message)


class InvalidSizeError(FatalError):
    def __init__(self, message: str = "the 'svg' element has no valid size") -> None:
        super().__init__(message)
