"""
Factory functions for bill services.

Provides the store singleton and the registry of open drafts so that the
HTTP routes and the tests can swap them through FastAPI dependency overrides.
"""

import logging
import uuid
from typing import List, Optional

from billed.bills.submission import NewBillSubmissionFlow
from billed.common.exceptions import ResourceNotFoundError
from billed.config import settings
from billed.navigation import NavigationRecorder
from billed.store.base import BillStore
from billed.store.http import HttpBillStore

logger = logging.getLogger(__name__)


class DraftSession:
    """A submission flow together with what it asked the view to do."""

    def __init__(self, store: BillStore, email: Optional[str] = None):
        self.id = uuid.uuid4().hex
        self.navigation = NavigationRecorder()
        self.alerts: List[str] = []
        self.flow = NewBillSubmissionFlow(
            store=store,
            navigate=self.navigation,
            email=email,
            alert=self.alerts.append,
        )

    def pop_alert(self) -> Optional[str]:
        return self.alerts.pop() if self.alerts else None


class DraftRegistry:
    """In-memory drafts, each exclusively owned by its session."""

    def __init__(self):
        self._sessions: dict[str, DraftSession] = {}

    def open(self, store: BillStore, email: Optional[str] = None) -> DraftSession:
        session = DraftSession(store, email=email)
        self._sessions[session.id] = session
        logger.info(f"Draft {session.id} opened")
        return session

    def get(self, draft_id: str) -> DraftSession:
        session = self._sessions.get(draft_id)
        if session is None:
            raise ResourceNotFoundError("Brouillon", draft_id)
        return session

    def discard(self, draft_id: str) -> None:
        if self._sessions.pop(draft_id, None) is not None:
            logger.info(f"Draft {draft_id} discarded")

    def __len__(self) -> int:
        return len(self._sessions)


_bill_store: Optional[BillStore] = None
_draft_registry: Optional[DraftRegistry] = None


def get_bill_store() -> BillStore:
    global _bill_store
    if _bill_store is None:
        _bill_store = HttpBillStore()
        logger.info(f"Using bill store at {settings.API_URL}")
    return _bill_store


async def close_bill_store() -> None:
    global _bill_store
    if isinstance(_bill_store, HttpBillStore):
        await _bill_store.aclose()
    _bill_store = None


def get_draft_registry() -> DraftRegistry:
    global _draft_registry
    if _draft_registry is None:
        _draft_registry = DraftRegistry()
    return _draft_registry
