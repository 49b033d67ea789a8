from fastapi import status

from libs.result import Error

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATUS_TRANSITION": status.HTTP_400_BAD_REQUEST,
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CLIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVOICE_NUMBER_CONFLICT": status.HTTP_409_CONFLICT,
    "USER_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "EXTRACTION_FAILED": status.HTTP_502_BAD_GATEWAY,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "MISSING_TOKEN": status.HTTP_401_UNAUTHORIZED,
}


class ClientError(Exception):
    """
    Use case error surfaced to the HTTP client

    Rendered by the app as {"error": {"code", "message", "details"?}}.
    """

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        """ClientError with the HTTP status registered for the error code"""
        return cls(error, status_code=ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST))

    def to_dict(self):
        body = {"code": self.error.code, "message": self.error.message}
        if self.error.details:
            body["details"] = self.error.details
        return {"error": body}
