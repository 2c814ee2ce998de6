"""Live reload of the navigation configuration."""

from docnav.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
