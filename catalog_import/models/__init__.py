"""
Data models for the catalog import.

This module contains pure data classes with no business logic.
"""

from .source import SourceImage, SourceMetafield, SourceOption, SourceProduct, SourceVariant
from .normalized import NormalizedProduct, SeoPayload, SpecEntry, TechnicalSpec
from .specs import RawSpec, ResolvedSpecs
from .import_result import (
    ImportResult,
    STATUS_FAILED,
    STATUS_SKIPPED,
    STATUS_SUCCESS,
)

__all__ = [
    'SourceImage', 'SourceVariant', 'SourceOption', 'SourceMetafield', 'SourceProduct',
    'NormalizedProduct', 'SeoPayload', 'SpecEntry', 'TechnicalSpec',
    'RawSpec', 'ResolvedSpecs',
    'ImportResult', 'STATUS_SUCCESS', 'STATUS_SKIPPED', 'STATUS_FAILED',
]
