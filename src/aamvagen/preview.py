"""Human-readable projection of a record for review before encoding."""

from __future__ import annotations

from aamvagen.dates import normalize_date
from aamvagen.model import AAMVARecord


def format_name(record: AAMVARecord) -> str:
    p = record.personal
    return f"{p.last_name}, {p.first_name} {p.middle_name}".strip()


def to_preview_map(record: AAMVARecord) -> dict[str, str]:
    """Label -> display value, in review order; empty optional codes are left out."""
    p, d = record.personal, record.document
    preview = {
        "Document Type": d.document_type,
        "Issuing Jurisdiction": d.issuing_jurisdiction,
        "AAMVA Version": record.version,
        "Document Number": p.unique_id,
        "Issue Date": normalize_date(d.issue_date),
        "Expiration Date": normalize_date(d.expiration_date),
        "Name": format_name(record),
        "Date of Birth": normalize_date(p.date_of_birth),
        "Gender": p.gender,
        "Address": p.address_street,
        "City": p.address_city,
        "State": p.address_state,
        "Postal Code": p.address_postal_code,
        "Country": d.country,
        "Eye Color": p.eye_color,
        "Hair Color": p.hair_color,
        "Height": p.height,
        "Weight": p.weight,
    }
    optional_codes = (
        ("Vehicle Class", d.vehicle_classifications),
        ("Restriction Codes", d.restriction_codes),
        ("Endorsement Codes", d.endorsement_codes),
    )
    for label, value in optional_codes:
        if value:
            preview[label] = value
    for key, value in record.optional.items():
        if value:
            preview.setdefault(key, value)
    return preview
