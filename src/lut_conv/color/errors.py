from __future__ import annotations


class LutError(ValueError):
    pass


class SizeMismatchError(LutError):
    pass


class MalformedHeaderError(LutError):
    pass


class InsufficientDataError(LutError):
    pass


class InvalidImageDimensionsError(LutError):
    pass


class InvalidFilterModeError(LutError):
    pass
