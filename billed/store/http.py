from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, TypeVar

import httpx

from billed.bills.schemas import BillPayload, RawBill, ReceiptFile, StagedFile
from billed.config import settings
from billed.store.base import BillStore
from billed.store.exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

INVALID_ANSWER_MESSAGE = "Réponse invalide du serveur"

T = TypeVar("T")


class HttpBillStore(BillStore):
    """
    BillStore backed by the bills REST API.

    - GET    /bills          list
    - POST   /bills          multipart upload of the receipt (+ owner email)
    - PATCH  /bills/{key}    JSON body of the final bill
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.token = token if token is not None else settings.API_TOKEN
        self.client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_URL,
            timeout=timeout or settings.API_TIMEOUT,
        )

    async def __aenter__(self) -> HttpBillStore:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        await self.client.aclose()

    async def list(self) -> List[RawBill]:
        response = await self._request("GET", "/bills")
        return self._decode(response, lambda body: [RawBill.model_validate(doc) for doc in body])

    async def create(self, file: ReceiptFile, email: Optional[str] = None) -> StagedFile:
        data = {"email": email} if email else None
        response = await self._request(
            "POST",
            "/bills",
            files={"file": (file.name, file.content, file.content_type)},
            data=data,
        )
        staged = self._decode(response, StagedFile.model_validate)
        logger.info(f"Receipt uploaded: {file.name} -> {staged.key}")
        return staged

    async def update(self, payload: BillPayload) -> RawBill:
        response = await self._request(
            "PATCH",
            f"/bills/{payload.id}",
            json=payload.to_store_body(),
        )
        return self._decode(response, RawBill.model_validate)

    def _decode(self, response: httpx.Response, parse: Callable[[Any], T]) -> T:
        """
        Decode a 2xx JSON answer.

        Raises:
            RemoteStoreError: If the body is not JSON or not shaped as expected
        """
        try:
            return parse(response.json())
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid answer from bill store ({response.request.method} {response.request.url.path}): {e}")
            raise RemoteStoreError(INVALID_ANSWER_MESSAGE, status_code=response.status_code) from e

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request to the store and translate failures.

        Raises:
            RemoteStoreError: "Erreur <status>" for non-2xx answers, the
                transport message for network failures
        """
        try:
            response = await self.client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Bill store unreachable ({method} {path}): {e}")
            raise RemoteStoreError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            logger.warning(f"Bill store answered {response.status_code} to {method} {path}")
            raise RemoteStoreError(f"Erreur {response.status_code}", status_code=response.status_code)

        return response
