"""Spec data models shared by the extractor and resolver."""

from dataclasses import dataclass, field
from typing import List, Optional

from .normalized import TechnicalSpec


@dataclass
class RawSpec:
    """Transient (group, label, value) triple. group_name None means ungrouped."""
    group_name: Optional[str]
    label: str
    value: str


@dataclass
class ResolvedSpecs:
    """Spec resolution output: product specs plus every touched spec group id."""
    technical_specs: List[TechnicalSpec] = field(default_factory=list)
    spec_group_ids: List[str] = field(default_factory=list)
