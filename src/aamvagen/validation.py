"""Record- and field-level validation gating the encoder.

Checks run in a fixed order and never short-circuit, so ``validate_record``
always reports the complete error set and the first error is stable. The same
check table backs ``validate_field`` so interactive and whole-record validation
cannot disagree.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from aamvagen.catalog.fields import FIELD_CATALOG, FieldKind, spec_for_field
from aamvagen.dates import is_valid_date, normalize_date
from aamvagen.model import DOCUMENT_TYPES, SEXES, AAMVARecord

logger = logging.getLogger(__name__)

POSTAL_CODE_RE = re.compile(r"\d{5}(-\d{4})?", re.ASCII)

Check = Callable[[str], str | None]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationOutcome:
    is_valid: bool
    errors: list[FieldError] = field(default_factory=list)

    def first_error(self) -> FieldError | None:
        return self.errors[0] if self.errors else None

    def to_dict(self) -> dict[str, object]:
        return {
            "isValid": self.is_valid,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


def _one_of(choices: tuple[str, ...], message: str) -> Check:
    def check(value: str) -> str | None:
        return None if value in choices else message

    return check


def _exact_length(length: int, message: str) -> Check:
    def check(value: str) -> str | None:
        return None if value and len(value) == length else message

    return check


def _required(message: str, max_length: int | None = None) -> Check:
    def check(value: str) -> str | None:
        if not value:
            return message
        if max_length is not None and len(value) > max_length:
            return message
        return None

    return check


def _max_length(max_length: int, message: str) -> Check:
    def check(value: str) -> str | None:
        return message if value and len(value) > max_length else None

    return check


def _date(message: str) -> Check:
    def check(value: str) -> str | None:
        return None if is_valid_date(value) else message

    return check


def _postal_code(value: str) -> str | None:
    if value and POSTAL_CODE_RE.fullmatch(value):
        return None
    return "Postal code must be in format 12345 or 12345-6789"


# (field id, check) in reporting order
CHECKS: tuple[tuple[str, Check], ...] = (
    (
        "documentType",
        _one_of(
            DOCUMENT_TYPES,
            "Document type must be DL (Driver License) or ID (Identification Card)",
        ),
    ),
    (
        "issuingJurisdiction",
        _exact_length(2, "Issuing jurisdiction must be a valid 2-character code"),
    ),
    ("issueDate", _date("Issue date must be in format MM/DD/YYYY")),
    ("expirationDate", _date("Expiration date must be in format MM/DD/YYYY")),
    (
        "firstName",
        _required("First name is required and must be 40 characters or less", 40),
    ),
    ("lastName", _required("Last name is required and must be 40 characters or less", 40)),
    ("middleName", _max_length(40, "Middle name must be 40 characters or less")),
    ("dateOfBirth", _date("Date of birth must be in format MM/DD/YYYY")),
    ("gender", _one_of(SEXES, "Gender must be M (Male), F (Female), or X (Non-binary)")),
    (
        "addressStreet",
        _required("Street address is required and must be 35 characters or less", 35),
    ),
    ("addressCity", _required("City is required and must be 20 characters or less", 20)),
    ("addressState", _exact_length(2, "State must be a valid 2-character code")),
    ("addressPostalCode", _postal_code),
    ("eyeColor", _required("Eye color is required")),
    ("hairColor", _required("Hair color is required")),
    ("height", _required("Height is required")),
    ("weight", _required("Weight is required")),
    ("uniqueId", _required("Document number/unique ID is required")),
)
_CHECKS_BY_FIELD: dict[str, Check] = dict(CHECKS)


def _format_error(field_id: str, value: str) -> str | None:
    """Catalog format rule for a non-empty value; dates are checked in MMDDYYYY form."""
    spec = spec_for_field(field_id)
    if spec is None or not value:
        return None
    candidate = normalize_date(value) if spec.kind is FieldKind.DATE else value
    if spec.matches(candidate):
        return None
    return f"{spec.label} has an invalid format"


def validate_field(field_id: str, value: str, strict: bool = False) -> str | None:
    """Re-validate one field; returns the error message or None. Unknown fields pass."""
    check = _CHECKS_BY_FIELD.get(field_id)
    message = check(value) if check else None
    if message is None and strict:
        message = _format_error(field_id, value)
    return message


def validate_record(record: AAMVARecord, strict: bool = False) -> ValidationOutcome:
    """Run every check against ``record`` and collect all failures in order.

    With ``strict`` the Field Catalog format rules are applied afterwards to
    every non-empty catalogued field that passed its base check.
    """
    errors: list[FieldError] = []
    for field_id, check in CHECKS:
        message = check(record.field_value(field_id))
        if message is not None:
            errors.append(FieldError(field_id, message))

    if strict:
        failed = {e.field for e in errors}
        for spec in FIELD_CATALOG.values():
            if spec.field_id in failed:
                continue
            message = _format_error(spec.field_id, record.field_value(spec.field_id))
            if message is not None:
                errors.append(FieldError(spec.field_id, message))

    logger.debug("validated record: %d error(s)", len(errors))
    return ValidationOutcome(is_valid=not errors, errors=errors)
