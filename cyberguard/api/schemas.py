from typing import List

from pydantic import BaseModel

from cyberguard.core.errors import FieldViolation


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None


class ValidationErrorResponse(BaseModel):
    error: str = "validation_failed"
    violations: List[FieldViolation]
