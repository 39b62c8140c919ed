import logging
from typing import Iterable, List, Optional, Union

from billed.bills.exceptions import InvalidBillDateError
from billed.bills.formatting import format_date, format_status, parse_date
from billed.bills.schemas import DisplayBill, RawBill, UnknownStatus
from billed.navigation import ImagePreviewer, Navigate, Route
from billed.store.base import BillStore

logger = logging.getLogger(__name__)


def sort_by_date_desc(bills: Iterable[DisplayBill]) -> List[DisplayBill]:
    """
    Order bills from latest to earliest on their parsed stored date.

    Bills whose date does not parse are kept last, in their original order.
    """
    dated = []
    undated = []
    for bill in bills:
        try:
            dated.append((parse_date(bill.raw_date), bill))
        except InvalidBillDateError:
            undated.append(bill)

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [bill for _, bill in dated] + undated


class BillListService:
    """
    Lists the employee's bills ready for display.

    Store failures on read propagate to the caller, formatting failures are
    recovered per row.
    """

    def __init__(
        self,
        store: BillStore,
        navigate: Optional[Navigate] = None,
        previewer: Optional[ImagePreviewer] = None,
    ):
        self.store = store
        self.navigate = navigate
        self.previewer = previewer

    async def get_bills(self) -> List[DisplayBill]:
        """
        Fetch bills from the store and format their date and status.

        Order is the store order, no sorting is applied here.

        Raises:
            RemoteStoreError: If the store cannot list bills
        """
        raw_bills = await self.store.list()
        return [self._to_display(bill) for bill in raw_bills]

    def handle_click_new_bill(self) -> None:
        if self.navigate is None:
            raise RuntimeError("BillListService was built without a navigate capability")
        self.navigate(Route.NEW_BILL)

    def handle_click_icon_eye(self, bill_url: str) -> None:
        """Open the receipt preview for the bill's `data-bill-url`."""
        if self.previewer is None:
            raise RuntimeError("BillListService was built without an image previewer")
        self.previewer.show_image_preview(bill_url)

    def _to_display(self, bill: Union[RawBill, dict]) -> DisplayBill:
        if not isinstance(bill, RawBill):
            bill = RawBill.model_validate(bill)

        try:
            display_date = format_date(bill.date)
        except InvalidBillDateError as e:
            # Row is kept with its raw date, only this field is degraded
            logger.warning(f"{e.message} for bill {bill.id}")
            display_date = bill.date

        status = format_status(bill.status)
        status_known = not isinstance(status, UnknownStatus)
        if not status_known:
            logger.warning(f"{status.message} for bill {bill.id}")
            status = bill.status

        data = bill.model_dump(by_alias=True)
        data.update(
            date=display_date,
            status=status,
            raw_date=bill.date,
            status_known=status_known,
        )
        return DisplayBill.model_validate(data)
