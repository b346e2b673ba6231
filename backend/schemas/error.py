"""Error envelope returned by every failing request."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str  # BAD_REQUEST, NOT_FOUND, CONFLICT, VALIDATION_ERROR, UNAUTHORIZED, INTERNAL_ERROR
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail

    @classmethod
    def of(cls, code: str, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message))
