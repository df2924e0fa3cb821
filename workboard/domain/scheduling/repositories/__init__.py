"""Repository interfaces for the scheduling domain."""

from .key_value_storage import KeyValueStorage

__all__ = ["KeyValueStorage"]
