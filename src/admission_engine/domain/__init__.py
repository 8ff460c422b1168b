"""Domain layer for the admissions engine.

Contains the immutable admission records, identifier and result value
objects, and the read-only DataStore snapshot.
"""
