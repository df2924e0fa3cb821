"""
Application Layer

Services that coordinate domain operations for the board: the schedule store
that owns and persists the collections, the work order form panel, and the
timeline board view model.
"""
