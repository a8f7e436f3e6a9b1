"""
Cloudinary Image Rehoster

Copies externally hosted product images (Shopify CDN, Google Drive, other
Cloudinary accounts) into our Cloudinary account using unsigned URL uploads.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional

import requests

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
CLOUDINARY_DELIVERY_BASE = "https://res.cloudinary.com/{cloud_name}/"

_DRIVE_LINK_RE = re.compile(r'drive\.google\.com/(?:file/d/|open\?id=)([\w-]+)')


class AssetUploadError(Exception):
    """A single image could not be uploaded."""


def resolve_source_url(url: str) -> str:
    """
    Rewrite Google Drive sharing links to their direct-download form.

    Example:
        >>> resolve_source_url("https://drive.google.com/file/d/abc123/view")
        'https://drive.google.com/uc?export=download&id=abc123'
    """
    match = _DRIVE_LINK_RE.search(url)
    if match:
        return f"https://drive.google.com/uc?export=download&id={match.group(1)}"
    return url


class CloudinaryRehoster:
    """
    Uploads image URLs to Cloudinary with a bounded worker pool.

    Usage:
        rehoster = CloudinaryRehoster(cloud_name="demo", upload_preset="unsigned")
        urls = rehoster.rehost_many(["https://cdn.shopify.com/a.jpg", ...])
    """

    def __init__(
        self,
        cloud_name: str,
        upload_preset: str,
        concurrency: int = 4,
        session: Optional[requests.Session] = None,
        timeout: int = 60,
    ):
        """
        Args:
            cloud_name: Cloudinary cloud name (our account)
            upload_preset: Unsigned upload preset
            concurrency: Maximum uploads in flight at once
            session: Shared HTTP session (a new one is created if omitted)
            timeout: Per-upload timeout in seconds
        """
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.concurrency = max(1, concurrency)
        self.session = session or requests.Session()
        self.timeout = timeout

        self.upload_url = CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name)
        self.own_base = CLOUDINARY_DELIVERY_BASE.format(cloud_name=cloud_name)

    def is_hosted(self, url: str) -> bool:
        """True if the URL already lives in our Cloudinary account."""
        return url.startswith(self.own_base)

    def rehost(self, url: str) -> str:
        """
        Upload a single image URL and return its Cloudinary secure_url.

        URLs already in our account are returned unchanged.

        Raises:
            AssetUploadError: Upload rejected or response unusable
            requests.RequestException: Transport failure
        """
        if self.is_hosted(url):
            return url

        source_url = resolve_source_url(url)
        response = self.session.post(
            self.upload_url,
            data={"file": source_url, "upload_preset": self.upload_preset},
            timeout=self.timeout,
        )

        if not response.ok:
            raise AssetUploadError(
                f'Cloudinary upload failed for "{source_url}": '
                f'{response.status_code} {response.text[:200]}'
            )

        secure_url = response.json().get("secure_url")
        if not secure_url:
            raise AssetUploadError(f'Cloudinary returned no secure_url for "{source_url}"')
        return secure_url

    def rehost_many(self, urls: Iterable[str]) -> List[str]:
        """
        Upload many image URLs concurrently.

        Every upload runs to completion; failed ones are logged and dropped,
        so the result may be shorter than the input. Successful uploads keep
        their input order so callers can treat the first one as the main image.
        """
        pending = [u for u in urls if u]
        if not pending:
            return []

        uploaded: Dict[int, str] = {}
        with ThreadPoolExecutor(max_workers=min(self.concurrency, len(pending)),
                                thread_name_prefix="rehost") as executor:
            future_to_index = {
                executor.submit(self.rehost, url): i for i, url in enumerate(pending)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    result = future.result()
                except Exception as e:
                    logger.warning("Image upload skipped: %s (%s)", pending[index], e)
                    continue
                if result:
                    uploaded[index] = result

        logger.debug("Rehosted %d/%d images", len(uploaded), len(pending))
        return [uploaded[i] for i in sorted(uploaded)]
