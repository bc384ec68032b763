"""Folder registry access.

``LedgerClient`` is the interface the rest of FilDOS talks to;
``InMemoryLedger`` implements it for local runs and tests.
"""

from .base import LedgerClient
from .memory import InMemoryLedger

__all__ = [
    "InMemoryLedger",
    "LedgerClient",
]
