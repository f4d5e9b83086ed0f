from typing import Dict

from fastapi import status
from src.libs.result import Error

GENERIC_SERVER_MESSAGE = "Internal server error"


class ClientError(Exception):
    """Request rejected for a reason the caller can act on (4xx)"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> Dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ServerError(Exception):
    """Unexpected failure; the code is exposed but the message never leaves the server"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> Dict:
        return {"error": {"code": self.base_error.code, "message": GENERIC_SERVER_MESSAGE}}
