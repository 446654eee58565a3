"""
validation.py — Result shapes shared by the text validators.
"""

from typing import Optional

from pydantic import BaseModel


class ValidationResult(BaseModel):
    """Outcome of a field validator — expected bad input never raises."""
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


class InputConstraints(BaseModel):
    """Inclusive length bounds for a form field."""
    min: int
    max: int


class SpeciesCheckRequest(BaseModel):
    """Payload for POST /api/v1/validation/species."""
    species: str = ""


class SpeciesCheckResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    formatted: list[str]
