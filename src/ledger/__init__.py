from .reconciler import LedgerReconciler
from .store import InMemoryLedgerStore, LedgerStore

__all__ = [
    "LedgerReconciler",
    "InMemoryLedgerStore", "LedgerStore",
]
