"""Vanish: select a watermark, let a hosted image model heal it."""

__version__ = "0.1.0"
