"""
Maintenance tools for the arf.json link catalog.

Two independent tools live here: a structural validator for the catalog tree
and a bounded-concurrency dead-link checker for the URLs it contains.
"""

__version__ = "1.0.0"
