from bloom.store.base import MemberRow, MembershipStore, Stats, Store
from bloom.store.memory import InMemoryStore
from bloom.store.sql import SqlStore

__all__ = ["MemberRow", "MembershipStore", "Stats", "Store", "InMemoryStore", "SqlStore"]
