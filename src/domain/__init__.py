"""Domain layer: errors, constants and schemas."""

from .errors import (
    ClientInputError,
    ConversionFailure,
    EngineFailure,
    ErrorCodes,
    TemplaterError,
)
from .schemas import RenderedDocument, TemplateRef, split_extension

__all__ = [
    "TemplaterError",
    "ClientInputError",
    "EngineFailure",
    "ConversionFailure",
    "ErrorCodes",
    "TemplateRef",
    "RenderedDocument",
    "split_extension",
]
