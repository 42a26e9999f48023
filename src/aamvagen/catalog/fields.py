"""AAMVA 8.1 data element catalog.

Each entry records the element identifier, its human label, the maximum length,
whether the driver-license subfile requires it, and a format rule (a compiled
pattern or a closed code set). The table is built once at import and exposed
through read-only mappings.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from aamvagen.catalog.codes import EYE_COLORS, HAIR_COLORS

COUNTRY_ELEMENT = "ZYZ"  # jurisdiction extension tag carrying the document country
CHECKSUM_ELEMENT = "ZYZ"


class FieldKind(Enum):
    FREE_TEXT = "free_text"
    DATE = "date"
    JURISDICTION_SELECT = "jurisdiction_select"
    DOCUMENT_TYPE_CHOICE = "document_type_choice"
    SEX_CHOICE = "sex_choice"
    COLOR_SELECT = "color_select"


@dataclass(frozen=True)
class FieldSpec:
    element_code: str
    label: str
    max_length: int
    required: bool
    field_id: str
    kind: FieldKind = FieldKind.FREE_TEXT
    pattern: re.Pattern[str] | None = None
    choices: frozenset[str] | None = None

    def matches(self, value: str) -> bool:
        """Apply the element's format rule to ``value``."""
        if self.choices is not None:
            return value in self.choices
        if self.pattern is not None:
            return self.pattern.fullmatch(value) is not None
        return True


_NAME = re.compile(r"[A-Za-z0-9,'\-.]+")
_OPTIONAL_NAME = re.compile(r"[A-Za-z0-9,'\-.]*")
_ADDRESS = re.compile(r"[A-Za-z0-9,.'#\- ]+")
_DATE8 = re.compile(r"[0-9]{8}")


def _spec(
    code: str,
    label: str,
    max_length: int,
    required: bool,
    field_id: str,
    kind: FieldKind = FieldKind.FREE_TEXT,
    pattern: str | re.Pattern[str] | None = None,
    choices: Collection[str] | None = None,
) -> FieldSpec:
    return FieldSpec(
        element_code=code,
        label=label,
        max_length=max_length,
        required=required,
        field_id=field_id,
        kind=kind,
        pattern=re.compile(pattern) if isinstance(pattern, str) else pattern,
        choices=frozenset(choices) if choices is not None else None,
    )


_SPECS = (
    _spec("DCS", "Last Name", 40, True, "lastName", pattern=_NAME),
    _spec("DCT", "First Name", 40, True, "firstName", pattern=_NAME),
    _spec("DCU", "Middle Name", 40, False, "middleName", pattern=_OPTIONAL_NAME),
    _spec("DAG", "Street Address", 35, True, "addressStreet", pattern=_ADDRESS),
    _spec("DAI", "City", 20, True, "addressCity", pattern=_ADDRESS),
    _spec("DAJ", "State", 2, True, "addressState", FieldKind.JURISDICTION_SELECT, r"[A-Z]{2}"),
    _spec("DAK", "Postal Code", 11, True, "addressPostalCode", pattern=r"[0-9]{5}(-[0-9]{4})?"),
    _spec("DAQ", "Document Number", 25, True, "uniqueId", pattern=r"[A-Za-z0-9-]+"),
    _spec("DCF", "Document Issue Date", 8, True, "issueDate", FieldKind.DATE, _DATE8),
    _spec("DCG", "Document Expiration Date", 8, True, "expirationDate", FieldKind.DATE, _DATE8),
    _spec("DDE", "Date of Birth", 8, True, "dateOfBirth", FieldKind.DATE, _DATE8),
    _spec("DDF", "Gender", 1, True, "gender", FieldKind.SEX_CHOICE, r"[MFX1-9]"),
    _spec("DAU", "Height", 6, True, "height", pattern=r"[0-9]{3}(cm|in)"),
    _spec("DAY", "Eye Color", 3, True, "eyeColor", FieldKind.COLOR_SELECT, choices=EYE_COLORS),
    _spec("DAZ", "Hair Color", 3, True, "hairColor", FieldKind.COLOR_SELECT, choices=HAIR_COLORS),
    _spec("DCA", "Vehicle Class", 4, False, "vehicleClassifications", pattern=r"[A-Z0-9]{1,4}"),
    _spec("DCB", "Restrictions", 10, False, "restrictionCodes", pattern=r"[A-Z0-9]{0,10}"),
    _spec("DCD", "Endorsements", 5, False, "endorsementCodes", pattern=r"[A-Z0-9]{0,5}"),
)

FIELD_CATALOG = MappingProxyType({spec.element_code: spec for spec in _SPECS})
_BY_FIELD_ID = MappingProxyType({spec.field_id: spec for spec in _SPECS})


def lookup(element_code: str) -> FieldSpec | None:
    return FIELD_CATALOG.get(element_code)


def spec_for_field(field_id: str) -> FieldSpec | None:
    """Reverse lookup by form field identifier (``lastName`` -> DCS)."""
    return _BY_FIELD_ID.get(field_id)


@dataclass(frozen=True)
class GroupField:
    field_id: str
    label: str
    required: bool
    kind: FieldKind = FieldKind.FREE_TEXT
    element_code: str | None = None


@dataclass(frozen=True)
class FieldGroup:
    group_id: str
    label: str
    fields: tuple[GroupField, ...]


# form layout; fields without an element code are not written to the subfile
FIELD_GROUPS: tuple[FieldGroup, ...] = (
    FieldGroup(
        "document",
        "Document Information",
        (
            GroupField("documentType", "Document Type", True, FieldKind.DOCUMENT_TYPE_CHOICE),
            GroupField(
                "issuingJurisdiction",
                "Issuing Jurisdiction",
                True,
                FieldKind.JURISDICTION_SELECT,
            ),
            GroupField("uniqueId", "Document Number", True, element_code="DAQ"),
            GroupField("issueDate", "Issue Date", True, FieldKind.DATE, "DCF"),
            GroupField("expirationDate", "Expiration Date", True, FieldKind.DATE, "DCG"),
            GroupField("vehicleClassifications", "Vehicle Class", False, element_code="DCA"),
            GroupField("restrictionCodes", "Restrictions", False, element_code="DCB"),
            GroupField("endorsementCodes", "Endorsements", False, element_code="DCD"),
        ),
    ),
    FieldGroup(
        "personal",
        "Personal Information",
        (
            GroupField("lastName", "Last Name", True, element_code="DCS"),
            GroupField("firstName", "First Name", True, element_code="DCT"),
            GroupField("middleName", "Middle Name", False, element_code="DCU"),
            GroupField("dateOfBirth", "Date of Birth", True, FieldKind.DATE, "DDE"),
            GroupField("gender", "Gender", True, FieldKind.SEX_CHOICE, "DDF"),
        ),
    ),
    FieldGroup(
        "physical",
        "Physical Characteristics",
        (
            GroupField("eyeColor", "Eye Color", True, FieldKind.COLOR_SELECT, "DAY"),
            GroupField("hairColor", "Hair Color", True, FieldKind.COLOR_SELECT, "DAZ"),
            GroupField("height", "Height", True, element_code="DAU"),
            GroupField("weight", "Weight (lbs)", True),
        ),
    ),
    FieldGroup(
        "address",
        "Address Information",
        (
            GroupField("addressStreet", "Street Address", True, element_code="DAG"),
            GroupField("addressCity", "City", True, element_code="DAI"),
            GroupField("addressState", "State", True, FieldKind.JURISDICTION_SELECT, "DAJ"),
            GroupField("addressPostalCode", "Postal Code", True, element_code="DAK"),
            GroupField("country", "Country", True),
        ),
    ),
)
