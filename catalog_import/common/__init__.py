# Common utilities
from .config_loader import load_config, load_importer_settings
from .log_config import CLI_LOGGER, PACKAGE_LOGGER, setup_logging
from .text_utils import humanize_key, parse_price, strip_html, to_slug, utc_now_iso
