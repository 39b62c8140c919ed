from typing import Optional

from billed.common.exceptions import AppError


class RemoteStoreError(AppError):
    """
    Remote bill store failure (network or server side).

    `message` is shown verbatim to the user, e.g. "Erreur 404".
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
