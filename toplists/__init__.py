"""Merge independently produced top-domain lists into one ranked list."""

__version__ = "0.1.0"
