from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from billed.common.exceptions import ResourceNotFoundError
from billed.bills.exceptions import (
    DraftAlreadySubmittedError,
    FileValidationError,
)
from billed.store.exceptions import RemoteStoreError

def exception_handler(app: FastAPI) -> None:
    """
    Registers global exception handlers for the FastAPI application.
    Translates domain exceptions into HTTP responses.
    """

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(RemoteStoreError)
    async def remote_store_error_handler(request: Request, exc: RemoteStoreError):
        # Message is shown verbatim, e.g. "Erreur 404"
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message},
        )

    @app.exception_handler(FileValidationError)
    async def file_validation_error_handler(request: Request, exc: FileValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(DraftAlreadySubmittedError)
    async def draft_already_submitted_handler(request: Request, exc: DraftAlreadySubmittedError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": exc.message},
        )
