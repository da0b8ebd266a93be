#!filepath: src/azkar_app/__init__.py
from azkar_app.models import CachedSnapshot, CanonicalDataset, CanonicalEntry
from azkar_app.repository import AzkarRepository, build_repository

__all__ = [
    "AzkarRepository",
    "CachedSnapshot",
    "CanonicalDataset",
    "CanonicalEntry",
    "build_repository",
]

__version__ = "0.4.0"
