from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import RedirectResponse

from billed.bills.dependencies import DraftRegistry, DraftSession, get_bill_store, get_draft_registry
from billed.bills.exceptions import FileValidationError
from billed.bills.schemas import BillForm, BillListResponse, DraftResponse, ReceiptFile
from billed.bills.services import BillListService, sort_by_date_desc
from billed.config import settings
from billed.store.base import BillStore
from billed.store.exceptions import RemoteStoreError

router = APIRouter()

StoreDependency = Annotated[BillStore, Depends(get_bill_store)]
RegistryDependency = Annotated[DraftRegistry, Depends(get_draft_registry)]

async def get_bill_list_service(store: StoreDependency) -> BillListService:
    return BillListService(store)

ServiceDependency = Annotated[BillListService, Depends(get_bill_list_service)]

def _draft_response(session: DraftSession) -> DraftResponse:
    return DraftResponse(
        draft_id=session.id,
        state=session.flow.state.value,
        bill_id=session.flow.bill_id,
        file_url=session.flow.file_url,
        file_name=session.flow.file_name,
    )

@router.get("", response_model=BillListResponse, status_code=status.HTTP_200_OK, summary="List bills, latest first")
async def list_bills(service: ServiceDependency):
    # Store failures propagate to the RemoteStoreError handler with their raw message
    bills = await service.get_bills()
    return BillListResponse(bills=sort_by_date_desc(bills))

@router.post("/drafts", response_model=DraftResponse, status_code=status.HTTP_201_CREATED, summary="Open a new bill draft")
async def open_draft(store: StoreDependency, registry: RegistryDependency, email: Optional[str] = Query(None, description="Owner email (defaults to USER_EMAIL)")):
    session = registry.open(store, email=email or settings.USER_EMAIL)
    return _draft_response(session)

@router.post("/drafts/{draft_id}/file", response_model=DraftResponse, status_code=status.HTTP_200_OK, summary="Stage the receipt of a draft")
async def stage_receipt(draft_id: str, registry: RegistryDependency, file: UploadFile = File(..., description="Receipt image (JPG, JPEG, PNG)")):
    session = registry.get(draft_id)
    receipt = ReceiptFile(
        name=file.filename or "",
        content=await file.read(),
        content_type=file.content_type or "application/octet-stream",
    )

    if not await session.flow.stage_file(receipt):
        alert = session.pop_alert()
        if alert:
            raise FileValidationError(alert)
        raise RemoteStoreError("Erreur lors de l'envoi du justificatif")

    return _draft_response(session)

@router.post("/drafts/{draft_id}", status_code=status.HTTP_303_SEE_OTHER, summary="Submit a draft")
async def submit_draft(
    draft_id: str,
    registry: RegistryDependency,
    expense_type: str = Form("", alias="type"),
    name: str = Form(""),
    date: str = Form(""),
    amount: str = Form(""),
    vat: str = Form(""),
    pct: str = Form(""),
    commentary: str = Form(""),
):
    session = registry.get(draft_id)
    form = BillForm(
        type=expense_type,
        name=name,
        date=date,
        amount=amount,
        vat=vat,
        pct=pct,
        commentary=commentary,
    )
    await session.flow.submit(form)
    registry.discard(draft_id)
    return RedirectResponse(url=session.navigation.route.value, status_code=status.HTTP_303_SEE_OTHER)

@router.delete("/drafts/{draft_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Abandon a draft")
async def discard_draft(draft_id: str, registry: RegistryDependency):
    # Leaving the new bill page without submitting drops the draft and its staged receipt reference
    registry.get(draft_id)
    registry.discard(draft_id)
    return None
