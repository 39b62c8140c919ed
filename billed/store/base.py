from __future__ import annotations

import abc
from typing import List, Optional

from billed.bills.schemas import BillPayload, RawBill, ReceiptFile, StagedFile


class BillStore(abc.ABC):
    """
    Remote persistence boundary for bill records and receipt uploads.

    Every operation is network-backed and may fail with RemoteStoreError.
    """

    @abc.abstractmethod
    async def list(self) -> List[RawBill]:
        """Return every stored bill, in store order."""

    @abc.abstractmethod
    async def create(self, file: ReceiptFile, email: Optional[str] = None) -> StagedFile:
        """Upload a receipt and reserve the bill record it belongs to."""

    @abc.abstractmethod
    async def update(self, payload: BillPayload) -> RawBill:
        """Persist the full bill record under the key reserved by `create`."""
