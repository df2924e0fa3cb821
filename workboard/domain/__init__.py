"""
Domain Layer

Scheduling rules for the board, free of storage and presentation concerns.

Components:
- shared/: Base models, domain errors and operation results
- scheduling/: Work orders, work centers, overlap rules and timeline projection
"""
