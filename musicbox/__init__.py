"""Musicbox: authenticated music upload and streaming service."""

__version__ = "2.1.0"
