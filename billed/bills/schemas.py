from pathlib import PurePath
from typing import Any, List, Optional, Union
from pydantic import ConfigDict, Field
from billed.common.schemas import AppBaseModel, StoreModel
from billed.bills.models import BillStatus

# --- STORE RECORDS ---
class RawBill(StoreModel):
    """Bill record as delivered by the remote store. Any field may be missing."""

    id: Optional[Union[str, int]] = None
    date: Any = Field(
        None,
        description="Bill date, ISO formatted when well-formed but free-form in practice, not always a string"
    )
    status: Any = Field(
        None,
        description="Raw status code (pending, accepted, refused), unchecked until formatted"
    )
    type: Optional[str] = None
    name: Optional[str] = None
    amount: Optional[Union[int, float, str]] = None
    vat: Optional[Union[int, float, str]] = None
    pct: Optional[Union[int, float, str]] = None
    commentary: Optional[str] = None
    file_url: Optional[str] = Field(None, alias="fileUrl")
    file_name: Optional[str] = Field(None, alias="fileName")
    email: Optional[str] = None

class DisplayBill(RawBill):
    """
    RawBill ready for rendering: `date` and `status` hold display values.

    `raw_date` keeps the stored date so that ordering never relies on the
    display string. `status_known` is False when the raw status code had no
    label, `status` then holds that code verbatim.
    """

    raw_date: Any = None
    status_known: bool = True

class UnknownStatus(AppBaseModel):
    """Formatting result for a status code without a display label."""
    model_config = ConfigDict(frozen=True)

    code: Any = None

    @property
    def message(self) -> str:
        return f"Statut de note de frais inconnu : {self.code!r}"

class StagedFile(StoreModel):
    """Answer of the store once a receipt has been uploaded."""

    file_url: str = Field(..., alias="fileUrl")
    key: Union[str, int]

# --- RECEIPT UPLOAD ---
class ReceiptFile(AppBaseModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    name: str = Field(..., description="Original file name, e.g. hello.png")
    content: bytes = b""
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        """Text after the last dot, lower-cased, empty when the name has no dot."""
        base_name = PurePath(self.name.replace("\\", "/")).name
        if "." not in base_name:
            return ""
        return base_name.rsplit(".", 1)[-1].lower()

# --- NEW BILL FORM ---
class BillForm(AppBaseModel):
    """Fields typed by the employee. Empty fields are kept as empty strings."""

    type: str = ""
    name: str = ""
    date: str = ""
    amount: str = ""
    vat: str = ""
    pct: str = ""
    commentary: str = ""

class DraftBill(BillForm):
    """In-progress bill owned by a single submission flow."""

    bill_id: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    email: Optional[str] = None

class BillPayload(AppBaseModel):
    """Final bill record sent to the store on submission."""

    id: Optional[str] = Field(None, description="Store key returned by the receipt upload")
    email: Optional[str] = None
    type: str = ""
    name: str = ""
    amount: Optional[int] = None
    date: str = ""
    vat: str = ""
    pct: int = 20
    commentary: str = ""
    file_url: Optional[str] = Field(None, alias="fileUrl")
    file_name: Optional[str] = Field(None, alias="fileName")
    status: BillStatus = BillStatus.PENDING

    def to_store_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"id"}, mode="json")

# --- RESPONSES ---
class BillListResponse(AppBaseModel):
    model_config = ConfigDict(strict=False)

    bills: List[DisplayBill]

class DraftResponse(AppBaseModel):
    draft_id: str
    state: str
    bill_id: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
