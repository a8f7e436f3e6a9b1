#!/usr/bin/env python3
"""
Shopify Product Import

Imports Shopify products into the CMS document store: images are re-hosted
to Cloudinary, specs and product families are merged into the shared
taxonomy, and products that already exist (same SKU) are skipped.

Requirements:
    pip install -e .

Environment (or .env in the project root):
    SHOPIFY_STORE_DOMAIN          my-store.myshopify.com
    SHOPIFY_ADMIN_ACCESS_TOKEN    shpat_xxx (SHOPIFY_ACCESS_TOKEN also accepted)
    CLOUDINARY_CLOUD_NAME         Cloudinary cloud name
    CLOUDINARY_UPLOAD_PRESET      Unsigned upload preset

Usage:
    # Import draft and archived products (default)
    python3 scripts/import_shopify_products.py

    # Import active products as public
    python3 scripts/import_shopify_products.py --mode public

    # Use a different database
    python3 scripts/import_shopify_products.py --db output/catalog.db

Press Ctrl-C once to stop after the current product.
"""

import argparse
import logging
import os
import signal
import sys
import threading
from collections import Counter
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_import.assets import CloudinaryRehoster
from catalog_import.common import load_importer_settings, setup_logging
from catalog_import.common.log_config import CLI_LOGGER
from catalog_import.common.constants import IMPORT_MODES, MODE_DRAFT
from catalog_import.importer import BatchImporter, ProductNormalizer
from catalog_import.shopify import ShopifyAPIClient, ShopifyAPIError, ShopifyCatalogClient
from catalog_import.store import DEFAULT_DB_PATH, SQLiteDocumentStore
from catalog_import.taxonomy import SpecTaxonomy

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(CLI_LOGGER)


def main():
    parser = argparse.ArgumentParser(
        description="Import Shopify products into the CMS product store"
    )
    parser.add_argument(
        "--mode", "-m",
        choices=IMPORT_MODES,
        default=MODE_DRAFT,
        help="draft: non-active products as drafts; public: active products (default: draft)"
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DB_PATH,
        help=f"SQLite document store path (default: {DEFAULT_DB_PATH})"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between products (default: from config)"
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Parallel image uploads per product (default: from config)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    shop = os.getenv("SHOPIFY_STORE_DOMAIN", "")
    token = os.getenv("SHOPIFY_ADMIN_ACCESS_TOKEN") or os.getenv("SHOPIFY_ACCESS_TOKEN", "")
    if not shop or not token:
        print("Missing SHOPIFY_STORE_DOMAIN or SHOPIFY_ADMIN_ACCESS_TOKEN")
        sys.exit(1)

    settings = load_importer_settings({
        "item_delay": args.delay,
        "upload_concurrency": args.concurrency,
        "cloudinary_upload_preset": os.getenv("CLOUDINARY_UPLOAD_PRESET"),
    })
    cloud_name = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    if not cloud_name:
        print("Missing CLOUDINARY_CLOUD_NAME")
        sys.exit(1)

    print("=" * 60)
    print("Shopify Product Import")
    print("=" * 60)
    print(f"  Shop: {shop}")
    print(f"  Mode: {args.mode}")
    print(f"  Store: {args.db}")
    print(f"  Upload concurrency: {settings['upload_concurrency']}")

    cancelled = threading.Event()

    def handle_interrupt(signum, frame):
        if cancelled.is_set():
            raise KeyboardInterrupt
        print("\nStopping after the current product (Ctrl-C again to abort)...")
        cancelled.set()

    signal.signal(signal.SIGINT, handle_interrupt)

    store = SQLiteDocumentStore(args.db)
    taxonomy = SpecTaxonomy(store)

    with ShopifyAPIClient(shop, token) as api:
        if not api.test_connection():
            print("Could not connect to Shopify. Check the shop domain and token.")
            sys.exit(1)

        catalog = ShopifyCatalogClient(
            api,
            page_size=settings["page_size"],
            fields=settings["product_fields"],
        )
        rehoster = CloudinaryRehoster(
            cloud_name=cloud_name,
            upload_preset=settings["cloudinary_upload_preset"],
            concurrency=settings["upload_concurrency"],
        )
        normalizer = ProductNormalizer(
            catalog,
            rehoster,
            taxonomy,
            generic_namespaces=settings["generic_namespaces"],
            short_description_length=settings["short_description_length"],
            default_family=settings["default_family"],
            robots=settings["robots"],
        )
        importer = BatchImporter(catalog, normalizer, store, delay=settings["item_delay"])

        try:
            results = importer.run(mode=args.mode, is_cancelled=cancelled.is_set)
        except ShopifyAPIError as e:
            logger.error("Catalog fetch failed: %s", e)
            sys.exit(1)
        finally:
            rehoster.session.close()

    counts = Counter(r.status for r in results)

    print("\n" + "=" * 60)
    print("Import Summary" + (" (cancelled)" if cancelled.is_set() else ""))
    print("=" * 60)
    print(f"  Processed: {len(results)}")
    print(f"  Imported:  {counts.get('success', 0)}")
    print(f"  Skipped:   {counts.get('skipped', 0)}")
    print(f"  Failed:    {counts.get('failed', 0)}")
    for result in results:
        if result.status == "failed":
            print(f"     {result.shopify_product_id}  {result.title[:40]}: {result.reason}")
    print("=" * 60)

    sys.exit(1 if counts.get("failed") else 0)


if __name__ == "__main__":
    main()
