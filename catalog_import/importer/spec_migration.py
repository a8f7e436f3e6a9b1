"""
Imported Spec Migration

Re-derives technicalSpecs for previously imported products from their short
description. Used for products whose Shopify record had no metafields or
options, so the import left them without specs.

Labels are matched (upper-cased) against the spec groups that already own
them; anything unknown goes to the standalone spec item pool and is filed
under GENERAL SPECIFICATIONS on the product.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

from ..common.constants import (
    GENERAL_SPEC_GROUP,
    IMPORT_SOURCE,
    PRODUCTS_COLLECTION,
    SPEC_GROUPS_COLLECTION,
    SPEC_ITEMS_COLLECTION,
)
from ..common.text_utils import utc_now_iso
from ..specs import ParsedSpec, normalize_label, parse_description_specs
from ..specs.description_parser import SPEC_TABLE_RE
from ..store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    """Summary of a migration run."""
    scanned: int = 0
    updated: int = 0
    new_labels: List[str] = field(default_factory=list)


class SpecMigration:
    """
    Usage:
        report = SpecMigration(store).run()
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def _load_label_groups(self) -> Dict[str, str]:
        """Map each grouped label to the name of the group that owns it."""
        label_to_group: Dict[str, str] = {}
        for group in self.store.list_all(SPEC_GROUPS_COLLECTION):
            group_name = group.get("name") or GENERAL_SPEC_GROUP
            for item in group.get("items") or []:
                if item.get("label"):
                    label_to_group[normalize_label(item["label"])] = group_name
        return label_to_group

    def _load_standalone_labels(self) -> Set[str]:
        return {
            normalize_label(item["label"])
            for item in self.store.list_all(SPEC_ITEMS_COLLECTION)
            if item.get("label")
        }

    def run(self) -> MigrationReport:
        report = MigrationReport()
        label_to_group = self._load_label_groups()
        standalone = self._load_standalone_labels()

        products = self.store.find_all(PRODUCTS_COLLECTION, "importSource", IMPORT_SOURCE)
        logger.info("Found %d imported product(s)", len(products))

        for product in products:
            report.scanned += 1
            description = product.get("shortDescription") or ""
            if not description or SPEC_TABLE_RE.search(description):
                continue

            parsed = parse_description_specs(description)
            if not parsed:
                continue

            for spec in parsed:
                label = normalize_label(spec.name)
                if label not in label_to_group and label not in standalone:
                    self.store.insert(SPEC_ITEMS_COLLECTION, {
                        "label": label,
                        "createdAt": utc_now_iso(),
                    })
                    standalone.add(label)
                    report.new_labels.append(label)
                    logger.info("Added standalone spec: %s", label)

            specs_by_group: Dict[str, List[ParsedSpec]] = {}
            for spec in parsed:
                group = label_to_group.get(normalize_label(spec.name), GENERAL_SPEC_GROUP)
                specs_by_group.setdefault(group, []).append(spec)

            technical_specs = [
                {
                    "specGroup": group,
                    "specs": [{"name": s.name, "value": s.value} for s in specs],
                }
                for group, specs in specs_by_group.items()
            ]

            self.store.update(PRODUCTS_COLLECTION, product["id"], {
                "technicalSpecs": technical_specs,
                "updatedAt": utc_now_iso(),
            })
            report.updated += 1
            logger.info("Updated: %s", product.get("itemDescription", product["id"]))

        return report
