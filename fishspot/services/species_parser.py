"""
species_parser.py — Comma-separated fish species lists.

Grammar enforced by validate_species (first failing rule wins):
  1. Non-empty after trimming.
  2. Only letters, commas and whitespace.
  3. No two adjacent commas.
  4. No leading or trailing comma.
  5. At least one name after split / trim / drop-empty.
  6. Each name 3-15 characters, letters only (no inner spaces).

format_species_for_display does the same split without validating, so it
is safe to call on anything already stored.
"""

from __future__ import annotations

import re
from typing import Optional

from fishspot.models.validation import ValidationResult

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 15

_ALLOWED_RE = re.compile(r"^[A-Za-z,\s]+$")
_LETTERS_RE = re.compile(r"^[A-Za-z]+$")


def parse_species(text: Optional[str]) -> list[str]:
    """Split on commas, trim each name, drop empties."""
    if not text or not isinstance(text, str):
        return []
    return [name.strip() for name in text.split(",") if name.strip()]


def validate_species(text: Optional[str]) -> ValidationResult:
    trimmed = (text or "").strip()
    if not trimmed:
        return ValidationResult.fail("Species cannot be empty")

    if not _ALLOWED_RE.match(trimmed):
        return ValidationResult.fail("Only letters and commas are allowed")

    if ",," in trimmed:
        return ValidationResult.fail("No consecutive commas allowed")

    if trimmed.startswith(",") or trimmed.endswith(","):
        return ValidationResult.fail("Species names cannot start or end with a comma")

    names = parse_species(trimmed)
    if not names:
        return ValidationResult.fail("At least one species name is required")

    for name in names:
        if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
            return ValidationResult.fail(
                f'Each species name must be {MIN_NAME_LENGTH}-{MAX_NAME_LENGTH} letters. '
                f'"{name}" is {len(name)} letters'
            )
        if not _LETTERS_RE.match(name):
            return ValidationResult.fail(
                f'Species names must contain only letters. "{name}" contains other characters'
            )

    return ValidationResult.ok()


def format_species_for_display(text: Optional[str]) -> list[str]:
    """'tuna, RED snapper' → ['Tuna', 'Red snapper']. Never raises."""
    return [name[:1].upper() + name[1:].lower() for name in parse_species(text)]
