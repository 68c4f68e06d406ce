"""nbrecon - declarative NetBox object reconciliation and lookups."""

__version__ = "0.1.0"
