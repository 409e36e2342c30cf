"""
sudia - data client for the historical map of Vietnam.

Fetches sites, cities, persons, events and media from the heritage backend,
reconciles them into typed entities and infers where persons belong.
"""

__version__ = "1.0.0"
