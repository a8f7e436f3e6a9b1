"""
Shared constants for the project.

Values here are part of the stored document schema and must stay stable
across runs; tunables belong in config/importer.yaml instead.
"""

# Shopify Admin REST API version used for every request
SHOPIFY_API_VERSION = "2024-01"

# Document store collections (shared with the CMS)
PRODUCTS_COLLECTION = "products"
SPEC_GROUPS_COLLECTION = "specs"
SPEC_ITEMS_COLLECTION = "specItems"
PRODUCT_FAMILIES_COLLECTION = "productfamilies"

# Provenance tag stamped on every imported product
IMPORT_SOURCE = "shopify-importer"

# Reserved spec group holding specs that carry no group of their own
UNGROUPED_SPEC_GROUP = "UNGROUPED SPECIFICATIONS"

# Fallback group used when re-deriving specs from descriptions
GENERAL_SPEC_GROUP = "GENERAL SPECIFICATIONS"

# Import modes
MODE_DRAFT = "draft"
MODE_PUBLIC = "public"
IMPORT_MODES = (MODE_DRAFT, MODE_PUBLIC)

# Shopify product status that maps to public mode
SHOPIFY_ACTIVE_STATUS = "active"
