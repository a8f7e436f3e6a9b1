"""
Configuration Loader

Loads YAML configuration files for the importer. Tunables live in
config/importer.yaml; anything missing there falls back to DEFAULT_SETTINGS.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_SETTINGS: Dict[str, Any] = {
    # Shopify REST maximum page size
    'page_size': 250,
    'product_fields': [
        'id', 'title', 'handle', 'body_html', 'product_type', 'vendor',
        'status', 'tags', 'images', 'variants', 'options',
    ],
    # Metafield namespaces that do not name a spec group
    'generic_namespaces': ['custom', 'global'],
    'short_description_length': 250,
    'default_family': 'UNCATEGORISED',
    'robots': 'index, follow',
    'upload_concurrency': 4,
    'item_delay': 0.08,
    'cloudinary_upload_preset': 'taskflow_preset',
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'importer.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_importer_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load importer settings.

    Layers, lowest to highest priority: DEFAULT_SETTINGS, the 'importer'
    section of importer.yaml, then explicit overrides (None values ignored).

    Args:
        overrides: Values taken from CLI flags or the environment

    Returns:
        Complete settings dictionary

    Example:
        {
            'page_size': 250,
            'generic_namespaces': ['custom', 'global'],
            'upload_concurrency': 4,
            ...
        }
    """
    settings = dict(DEFAULT_SETTINGS)
    config = load_config('importer.yaml')
    settings.update(config.get('importer', {}) or {})

    if overrides:
        settings.update({k: v for k, v in overrides.items() if v is not None})

    return settings
