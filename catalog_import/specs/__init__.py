"""
Spec extraction and resolution.

Modules:
    extractor - RawSpec extraction from metafields and options
    resolver - Taxonomy upserts and technicalSpecs assembly
    description_parser - Spec recovery from free-text descriptions
"""

from .description_parser import ParsedSpec, normalize_label, parse_description_specs
from .extractor import extract_raw_specs, specs_from_metafields, specs_from_options
from .resolver import SpecResolver

__all__ = [
    'extract_raw_specs',
    'specs_from_metafields',
    'specs_from_options',
    'SpecResolver',
    'ParsedSpec',
    'normalize_label',
    'parse_description_specs',
]
