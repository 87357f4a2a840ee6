"""playlister: turn web-published track listings into streaming playlists."""

__version__ = "0.1.0"
