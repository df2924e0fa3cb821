"""Persistence adapters: key-value stores, document mapping and seed data."""

from .document_mapper import DocumentMapper
from .key_value_stores import InMemoryKeyValueStorage, JsonFileKeyValueStorage
from .sample_data import SeedData, build_sample_data

__all__ = [
    "DocumentMapper",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "SeedData",
    "build_sample_data",
]
