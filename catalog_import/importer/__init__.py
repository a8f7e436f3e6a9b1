"""
Import pipeline.

Modules:
    normalizer - Shopify product to CMS product document
    batch_importer - Sequential catalog import with progress and cancellation
    spec_migration - Description-based spec backfill for imported products
"""

from .batch_importer import BatchImporter
from .normalizer import ProductNormalizer, item_code_for, resolve_pricing
from .spec_migration import MigrationReport, SpecMigration

__all__ = [
    'BatchImporter',
    'ProductNormalizer',
    'item_code_for',
    'resolve_pricing',
    'SpecMigration',
    'MigrationReport',
]
