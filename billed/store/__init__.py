"""
Remote bill store.

Abstract contract consumed by the bill services and its REST implementation.
"""

from billed.store.base import BillStore
from billed.store.exceptions import RemoteStoreError
from billed.store.http import HttpBillStore

__all__ = ["BillStore", "HttpBillStore", "RemoteStoreError"]
