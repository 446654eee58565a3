"""
validation.py — Form helpers so the app can validate before submitting.

Routes:
  GET  /api/v1/validation/constraints/{field} — min / max length for a form field
  POST /api/v1/validation/species             — validate + format a species list
"""

from fastapi import APIRouter, HTTPException

from fishspot.models.validation import InputConstraints, SpeciesCheckRequest, SpeciesCheckResponse
from fishspot.services.content_validator import get_input_constraints
from fishspot.services.species_parser import format_species_for_display, validate_species

router = APIRouter(prefix="/api/v1/validation", tags=["validation"])


@router.get("/constraints/{field}", response_model=InputConstraints)
async def constraints(field: str):
    result = get_input_constraints(field)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Unknown field '{field}'")
    return result


@router.post("/species", response_model=SpeciesCheckResponse)
async def check_species(payload: SpeciesCheckRequest):
    result = validate_species(payload.species)
    return SpeciesCheckResponse(
        valid=result.valid,
        error=result.error,
        formatted=format_species_for_display(payload.species),
    )
