"""Status-line field readers for Linux and a tiling window-manager model."""

__version__ = "1.1.0"