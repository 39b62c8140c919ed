from typing import Any

from billed.common.exceptions import AppError


class InvalidBillDateError(AppError, ValueError):
    """Raw bill date could not be parsed as a calendar date"""

    def __init__(self, raw: Any):
        self.raw = raw
        self.message = f"Date de note de frais invalide : {raw!r}"
        super().__init__(self.message)


class FileValidationError(AppError):
    """Invalid receipt file"""
    pass


class UnsupportedFileFormatError(FileValidationError):
    """Receipt extension outside of the JPG/JPEG/PNG allow-list"""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        self.message = message
        super().__init__(self.message)


class DraftAlreadySubmittedError(AppError):

    def __init__(self, bill_id: Any = None):
        self.bill_id = bill_id
        self.message = "Cette note de frais a déjà été envoyée."
        super().__init__(self.message)
