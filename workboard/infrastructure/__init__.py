"""
Infrastructure Layer

Concrete implementations of the storage port defined in the domain layer.

Components:
- persistence/: Key-value stores, document mapping and bundled seed data
"""
