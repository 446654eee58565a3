"""
content_validator.py — Length / format rules for every free-text field.

Each validate_* function returns a ValidationResult and never raises for
expected input (empty, whitespace-only, too short, too long, None).
Lengths are counted on the trimmed value and bounds are inclusive.
An empty-after-trim value always fails with the field's "cannot be empty"
message before any length rule is checked.

USAGE
─────
    from fishspot.services.content_validator import validate_catch_report_content

    result = validate_catch_report_content("Big catch today!!", "ok")
    # result.valid → False
    # result.error → "Description must be at least 10 characters (currently 2)"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from fishspot.models.validation import InputConstraints, ValidationResult


@dataclass(frozen=True)
class LengthRule:
    label: str        # used in the min / max messages
    empty_label: str  # used in the "cannot be empty" message
    min: int
    max: int


# ── Field rules ───────────────────────────────────────────────────────────────

CATCH_TITLE      = LengthRule("Title",        "Title",            5,  60)
CATCH_DESCRIPTION = LengthRule("Description", "Description",      10, 500)
SPOT_NAME        = LengthRule("Spot name",    "Spot name",        3,  50)
SPOT_DESCRIPTION = LengthRule("Description",  "Spot description", 10, 300)
DISPLAY_NAME     = LengthRule("Display name", "Display name",     3,  30)
PASSWORD         = LengthRule("Password",     "Password",         6,  50)

# Keys match the form field names the mobile client uses
_CONSTRAINTS = {
    "title":           CATCH_TITLE,
    "description":     CATCH_DESCRIPTION,
    "spotName":        SPOT_NAME,
    "spotDescription": SPOT_DESCRIPTION,
    "displayName":     DISPLAY_NAME,
    "password":        PASSWORD,
}

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_length(text: Optional[str], rule: LengthRule) -> ValidationResult:
    """Apply *rule* to *text*; the shared core of every field validator."""
    trimmed = (text or "").strip()
    if not trimmed:
        return ValidationResult.fail(f"{rule.empty_label} cannot be empty")

    n = len(trimmed)
    if n < rule.min:
        return ValidationResult.fail(
            f"{rule.label} must be at least {rule.min} characters (currently {n})"
        )
    if n > rule.max:
        return ValidationResult.fail(
            f"{rule.label} must not exceed {rule.max} characters (currently {n})"
        )
    return ValidationResult.ok()


# ── Field validators ──────────────────────────────────────────────────────────

def validate_title(title: Optional[str]) -> ValidationResult:
    return validate_length(title, CATCH_TITLE)


def validate_description(description: Optional[str]) -> ValidationResult:
    return validate_length(description, CATCH_DESCRIPTION)


def validate_spot_name(name: Optional[str]) -> ValidationResult:
    return validate_length(name, SPOT_NAME)


def validate_spot_description(description: Optional[str]) -> ValidationResult:
    return validate_length(description, SPOT_DESCRIPTION)


def validate_display_name(name: Optional[str]) -> ValidationResult:
    return validate_length(name, DISPLAY_NAME)


def validate_password(password: Optional[str]) -> ValidationResult:
    return validate_length(password, PASSWORD)


def validate_email(email: Optional[str]) -> ValidationResult:
    trimmed = (email or "").strip()
    if not trimmed:
        return ValidationResult.fail("Email cannot be empty")
    if not _EMAIL_RE.match(trimmed):
        return ValidationResult.fail("Please enter a valid email address")
    return ValidationResult.ok()


# ── Composites (first failure wins) ───────────────────────────────────────────

def validate_catch_report_content(title: Optional[str], description: Optional[str]) -> ValidationResult:
    for result in (validate_title(title), validate_description(description)):
        if not result.valid:
            return result
    return ValidationResult.ok()


def validate_fishing_spot_content(name: Optional[str], description: Optional[str]) -> ValidationResult:
    for result in (validate_spot_name(name), validate_spot_description(description)):
        if not result.valid:
            return result
    return ValidationResult.ok()


def get_input_constraints(field: str) -> Optional[InputConstraints]:
    """Length bounds for a form field key, or None for unknown keys."""
    rule = _CONSTRAINTS.get(field)
    if rule is None:
        return None
    return InputConstraints(min=rule.min, max=rule.max)
