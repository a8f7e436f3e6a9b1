"""Image re-hosting."""

from .rehoster import AssetUploadError, CloudinaryRehoster, resolve_source_url

__all__ = ['AssetUploadError', 'CloudinaryRehoster', 'resolve_source_url']
