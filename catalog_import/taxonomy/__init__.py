"""Shared spec and family taxonomy."""

from .registry import SpecTaxonomy, merge_unique, new_entries

__all__ = ['SpecTaxonomy', 'merge_unique', 'new_entries']
