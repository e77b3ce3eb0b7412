"""xt-entropy — per-volume Shannon entropy annotations for forensic items."""

__version__ = "1.0.0"
