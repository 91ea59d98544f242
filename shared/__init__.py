"""
Shared Kernel

This module contains base classes and utilities shared across all domain contexts:
entities and value objects, the error taxonomy, the unit of work, the message bus,
and infrastructure helpers (clock, id allocation, keyed locks).
"""
