"""
Spec Taxonomy Registry

Merge-based upserts for the shared taxonomy collections:

    specs            - spec groups: name + ordered label items
    specItems        - standalone (ungrouped) spec labels
    productfamilies  - families: title + associated spec group ids

These collections are shared with manually created products, so entries are
created on first sight and afterwards only extended. An update appends the
unseen entries to the stored field, left exactly as stored, and sets
updatedAt; nothing else is written.
"""

import logging
from typing import Hashable, Iterable, List, TypeVar

from ..common.constants import (
    PRODUCT_FAMILIES_COLLECTION,
    SPEC_GROUPS_COLLECTION,
    SPEC_ITEMS_COLLECTION,
)
from ..common.text_utils import utc_now_iso
from ..store import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def merge_unique(existing: Iterable[T], new: Iterable[T]) -> List[T]:
    """
    Ordered set union.

    Keeps existing entries in their order, appends unseen new entries in
    theirs, drops duplicates from both.

    Example:
        >>> merge_unique(["Width", "Height"], ["Height", "Depth"])
        ['Width', 'Height', 'Depth']
    """
    merged: List[T] = []
    seen = set()
    for entry in list(existing) + list(new):
        if entry not in seen:
            seen.add(entry)
            merged.append(entry)
    return merged


def new_entries(existing: Iterable[T], candidates: Iterable[T]) -> List[T]:
    """
    Candidates not present in existing, deduplicated, in candidate order.

    Example:
        >>> new_entries(["A", "A"], ["A", "B", "B"])
        ['B']
    """
    seen = set(existing)
    return [entry for entry in merge_unique([], candidates) if entry not in seen]


class SpecTaxonomy:
    """
    Upserts spec groups, standalone spec items and product families.

    Usage:
        taxonomy = SpecTaxonomy(store)
        group_id = taxonomy.upsert_spec_group("DIMENSIONS", ["Width"])
        taxonomy.upsert_product_family("LIGHTING", [group_id])
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def upsert_spec_group(self, name: str, labels: Iterable[str]) -> str:
        """
        Create a spec group or merge new labels into an existing one.

        Returns:
            Document id of the spec group
        """
        labels = merge_unique([], labels)
        existing = self.store.find_one(SPEC_GROUPS_COLLECTION, "name", name)

        if existing:
            # Stored items are kept as-is, duplicates included
            items = list(existing.get("items") or [])
            added = new_entries((item.get("label") for item in items), labels)
            if added:
                self.store.update(SPEC_GROUPS_COLLECTION, existing["id"], {
                    "items": items + [{"label": label} for label in added],
                    "updatedAt": utc_now_iso(),
                })
                logger.debug("Spec group '%s': +%d label(s)", name, len(added))
            return existing["id"]

        now = utc_now_iso()
        doc_id = self.store.insert(SPEC_GROUPS_COLLECTION, {
            "name": name,
            "items": [{"label": label} for label in labels],
            "isActive": True,
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info("Created spec group '%s' (%d labels)", name, len(labels))
        return doc_id

    def upsert_spec_item(self, label: str) -> str:
        """Create a standalone spec item unless one with this label exists."""
        existing = self.store.find_one(SPEC_ITEMS_COLLECTION, "label", label)
        if existing:
            return existing["id"]

        doc_id = self.store.insert(SPEC_ITEMS_COLLECTION, {
            "label": label,
            "createdAt": utc_now_iso(),
        })
        logger.info("Created spec item '%s'", label)
        return doc_id

    def upsert_product_family(self, title: str, spec_group_ids: Iterable[str]) -> str:
        """
        Create a product family or merge spec group ids into an existing one.

        Description, image and active flag of an existing family are never
        touched; they may have been edited by hand.
        """
        spec_group_ids = merge_unique([], spec_group_ids)
        existing = self.store.find_one(PRODUCT_FAMILIES_COLLECTION, "title", title)

        if existing:
            current = list(existing.get("specifications") or [])
            added = new_entries(current, spec_group_ids)
            if added:
                self.store.update(PRODUCT_FAMILIES_COLLECTION, existing["id"], {
                    "specifications": current + added,
                    "updatedAt": utc_now_iso(),
                })
                logger.debug("Product family '%s': +%d spec group(s)", title, len(added))
            return existing["id"]

        now = utc_now_iso()
        doc_id = self.store.insert(PRODUCT_FAMILIES_COLLECTION, {
            "title": title,
            "description": "",
            "imageUrl": "",
            "isActive": True,
            "specifications": spec_group_ids,
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info("Created product family '%s'", title)
        return doc_id
