"""AAMVA DL/ID text record encoder.

Layout produced by ``encode``::

    @ LF RS CR "ANSI " <doc type> <version code> <jurisdiction> LF
    RS "L" FS
    DAQ FS <number> RS  DCS FS <last> RS  DCT FS <first> RS  [DCU FS <middle> RS]
    DDE FS <dob> RS  DDF FS <sex> RS  DCF FS <issued> RS  DCG FS <expires> RS
    DAG .. DAI .. DAJ .. DAK .. DAY .. DAZ .. DAU ..  [DCA ..] [DCB ..] [DCD ..]
    ZYZ FS <country> RS
    RS ZYZ FS <checksum>

Element order is fixed regardless of input order. The checksum is the plain sum
of code points of header + subfile in upper-case hex (at least 4 digits, never
masked); it is not a jurisdiction check digit.
"""

from __future__ import annotations

import logging

from aamvagen.catalog.fields import CHECKSUM_ELEMENT, COUNTRY_ELEMENT
from aamvagen.dates import normalize_date
from aamvagen.errors import EncodingError
from aamvagen.model import DEFAULT_VERSION, AAMVARecord

logger = logging.getLogger(__name__)

HEADER_PREFIX = "@\n\x1e\rANSI "
SEGMENT_TERMINATOR = "\n"
RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
DRIVER_LICENSE_SUBFILE = "L"

VERSION_CODES: dict[str, str] = {
    "08": "00080",
    "09": "00090",
    "10": "00100",
}


def version_code(version: str) -> str:
    """Map a schema version to its 5-digit code; unknown versions use the 08 code."""
    return VERSION_CODES.get(version, VERSION_CODES[DEFAULT_VERSION])


def _element(code: str, value: str) -> str:
    return f"{code}{FIELD_SEPARATOR}{value}{RECORD_SEPARATOR}"


def _ordered_elements(record: AAMVARecord) -> list[tuple[str, str, str, bool]]:
    """(element code, field id, value, required) in subfile order."""
    p, d = record.personal, record.document
    return [
        ("DAQ", "uniqueId", p.unique_id, True),
        ("DCS", "lastName", p.last_name, True),
        ("DCT", "firstName", p.first_name, True),
        ("DCU", "middleName", p.middle_name, False),
        ("DDE", "dateOfBirth", normalize_date(p.date_of_birth), True),
        ("DDF", "gender", p.gender, True),
        ("DCF", "issueDate", normalize_date(d.issue_date), True),
        ("DCG", "expirationDate", normalize_date(d.expiration_date), True),
        ("DAG", "addressStreet", p.address_street, True),
        ("DAI", "addressCity", p.address_city, True),
        ("DAJ", "addressState", p.address_state, True),
        ("DAK", "addressPostalCode", p.address_postal_code, True),
        ("DAY", "eyeColor", p.eye_color, True),
        ("DAZ", "hairColor", p.hair_color, True),
        ("DAU", "height", p.height, True),
        ("DCA", "vehicleClassifications", d.vehicle_classifications, False),
        ("DCB", "restrictionCodes", d.restriction_codes, False),
        ("DCD", "endorsementCodes", d.endorsement_codes, False),
        (COUNTRY_ELEMENT, "country", d.country, True),
    ]


def missing_elements(record: AAMVARecord) -> list[str]:
    """Field ids of mandatory elements that would be written empty."""
    d = record.document
    header = (("documentType", d.document_type), ("issuingJurisdiction", d.issuing_jurisdiction))
    missing = [field_id for field_id, value in header if not value]
    missing.extend(
        field_id
        for _code, field_id, value, required in _ordered_elements(record)
        if required and not value
    )
    return missing


def build_header(record: AAMVARecord) -> str:
    d = record.document
    return (
        f"{HEADER_PREFIX}{d.document_type}{version_code(record.version)}"
        f"{d.issuing_jurisdiction}{SEGMENT_TERMINATOR}"
    )


def build_subfile(record: AAMVARecord) -> str:
    parts = [f"{RECORD_SEPARATOR}{DRIVER_LICENSE_SUBFILE}{FIELD_SEPARATOR}"]
    for code, _field_id, value, required in _ordered_elements(record):
        if required or value:
            parts.append(_element(code, value))
    return "".join(parts)


def checksum(text: str) -> str:
    total = sum(ord(ch) for ch in text)
    return f"{total:04X}"


def encode(record: AAMVARecord) -> str:
    """Assemble header, driver-license subfile and checksum trailer.

    The record must already have passed ``validate_record``; the encoder does not
    re-validate. It does refuse to write a mandatory element empty (including a
    date that cannot be normalized) and raises ``EncodingError`` instead.
    """
    missing = missing_elements(record)
    if missing:
        raise EncodingError(
            f"Cannot encode record, missing mandatory elements: {', '.join(missing)}",
            fields=missing,
        )
    body = build_header(record) + build_subfile(record)
    trailer = f"{RECORD_SEPARATOR}{CHECKSUM_ELEMENT}{FIELD_SEPARATOR}{checksum(body)}"
    logger.debug("encoded %s record, %d characters", record.document.document_type, len(body))
    return body + trailer
