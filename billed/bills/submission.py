"""
New bill submission flow.

A receipt is validated and uploaded before the rest of the bill is known
(staging), the complete bill is then assembled and persisted on submit.

    AWAITING_FILE --stage_file--> FILE_STAGED --submit--> SUBMITTED
    AWAITING_FILE --submit--> SUBMITTED (file fields stay None)

Writes are best-effort: upload and update failures are logged, never raised,
and submit navigates to the bill list whatever the update outcome. Nothing
guards against overlapping uploads, the last one to settle wins.
"""

import logging
import re
from typing import Callable, Optional

from billed.bills.exceptions import DraftAlreadySubmittedError, UnsupportedFileFormatError
from billed.bills.models import BillStatus, SubmissionState
from billed.bills.schemas import BillForm, BillPayload, DraftBill, RawBill, ReceiptFile, StagedFile
from billed.navigation import Navigate, Route
from billed.store.base import BillStore

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})
UNSUPPORTED_FORMAT_MESSAGE = "Erreur : seuls les fichiers JPG, JPEG et PNG sont autorisés"
DEFAULT_PCT = 20

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: str) -> Optional[int]:
    """Leading integer of a form value ("364" -> 364, "12.5" -> 12, "" -> None)."""
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else None


class NewBillSubmissionFlow:
    """
    Owns one DraftBill from creation to submission.

    Args:
        store: Remote bill store
        navigate: Navigation capability, called with Route.BILLS after submit
        email: Owner of the bill
        alert: Shows a warning to the user
        clear_file_input: Resets the file field of the form
    """

    def __init__(
        self,
        store: BillStore,
        navigate: Navigate,
        email: Optional[str] = None,
        alert: Optional[Callable[[str], None]] = None,
        clear_file_input: Optional[Callable[[], None]] = None,
    ):
        self.store = store
        self.navigate = navigate
        self.alert = alert or (lambda message: logger.warning(message))
        self.clear_file_input = clear_file_input or (lambda: None)
        self.draft = DraftBill(email=email)
        self.state = SubmissionState.AWAITING_FILE

    @property
    def bill_id(self) -> Optional[str]:
        return self.draft.bill_id

    @property
    def file_url(self) -> Optional[str]:
        return self.draft.file_url

    @property
    def file_name(self) -> Optional[str]:
        return self.draft.file_name

    def validate_file(self, file: ReceiptFile) -> None:
        if file.extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedFileFormatError(file.name, UNSUPPORTED_FORMAT_MESSAGE)

    async def stage_file(self, file: ReceiptFile) -> bool:
        """
        Validate and upload the receipt.

        Returns:
            True once the file is staged. False when the format is rejected
            (input cleared, user alerted, store untouched) or the upload
            failed (logged, flow stays AWAITING_FILE and may be retried).
        """
        self._ensure_not_submitted()

        try:
            self.validate_file(file)
        except UnsupportedFileFormatError as e:
            logger.info(f"Rejected receipt {e.file_name}: unsupported format")
            self.clear_file_input()
            self.alert(e.message)
            return False

        try:
            staged = await self.store.create(file, self.draft.email)
            if not isinstance(staged, StagedFile):
                staged = StagedFile.model_validate(staged)
        except Exception as e:
            logger.error(f"Receipt upload failed for {file.name}: {e}", exc_info=True)
            return False

        self.draft.bill_id = str(staged.key)
        self.draft.file_url = staged.file_url
        self.draft.file_name = file.name
        self.state = SubmissionState.FILE_STAGED
        logger.info(f"Receipt staged: {file.name} (bill {self.draft.bill_id})")
        return True

    def build_payload(self, form: BillForm) -> BillPayload:
        pct = parse_int(form.pct)
        return BillPayload(
            id=self.draft.bill_id,
            email=self.draft.email,
            type=form.type,
            name=form.name,
            amount=parse_int(form.amount),
            date=form.date,
            vat=form.vat,
            pct=DEFAULT_PCT if pct is None else pct,
            commentary=form.commentary,
            file_url=self.draft.file_url,
            file_name=self.draft.file_name,
            status=BillStatus.PENDING,
        )

    async def submit(self, form: BillForm) -> Optional[RawBill]:
        """
        Persist the bill and navigate back to the bill list.

        Returns:
            The stored bill, or None when the store rejected the update.
        """
        self._ensure_not_submitted()

        self.draft = self.draft.model_copy(update=form.model_dump())
        payload = self.build_payload(form)

        if self.state is SubmissionState.AWAITING_FILE:
            logger.warning("Submitting a bill without a staged receipt")

        stored = None
        try:
            stored = await self.store.update(payload)
        except Exception as e:
            logger.error(f"Failed to persist bill {payload.id}: {e}", exc_info=True)

        self.state = SubmissionState.SUBMITTED
        self.navigate(Route.BILLS)
        return stored

    def _ensure_not_submitted(self) -> None:
        if self.state is SubmissionState.SUBMITTED:
            raise DraftAlreadySubmittedError(self.draft.bill_id)
