"""Packaged mock data."""

from .seed import load_seed_data

__all__ = ["load_seed_data"]
