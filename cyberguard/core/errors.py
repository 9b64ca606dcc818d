from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class FieldViolation(BaseModel):
    """A single failed input constraint"""

    field: str = Field(..., description="Wire name of the offending field")
    constraint: str = Field(..., description="Constraint that failed, e.g. min_length")
    message: str = Field(..., description="Human-readable explanation")


class CyberGuardError(Exception):
    """Base exception for all service errors"""
    pass


class InputValidationError(CyberGuardError):
    """Raised when a request does not satisfy its schema constraints"""

    def __init__(self, violations: List[FieldViolation]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))


class ExtractionFailure(CyberGuardError):
    """Raised inside the article extractor; never leaves it"""
    pass


class GenerationFailure(CyberGuardError):
    """Raised when the LLM call fails or returns non-conforming output"""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)
