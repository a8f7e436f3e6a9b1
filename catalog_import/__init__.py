"""
Shopify Catalog Import

Modules:
    models      - Data models (SourceProduct, NormalizedProduct, ImportResult)
    common      - Shared utilities (config loader, logging, text helpers)
    shopify     - Shopify Admin API client and catalog reader
    assets      - Image re-hosting to Cloudinary
    store       - Document store backends (memory, SQLite)
    taxonomy    - Merge-based upserts for spec groups, spec items and families
    specs       - Spec extraction and resolution
    importer    - Product normalizer, batch importer, spec migration
"""
