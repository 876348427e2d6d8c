"""Building blocks for a desktop music player: audio formats, devices, media and library."""

__version__ = "0.1.0"