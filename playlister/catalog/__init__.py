"""Remote music catalog access."""

from playlister.catalog.base import CatalogService
from playlister.catalog.spotify import SpotifyCatalog

__all__ = ["CatalogService", "SpotifyCatalog"]
