"""Structured identity-document records consumed by the validator and encoder.

Mappings use the camelCase keys of the interchange format (``firstName``,
``addressCity``, ...). The same keys identify fields in validation errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, get_args

DocumentType = Literal["DL", "ID"]
Sex = Literal["M", "F", "X"]
AAMVAVersion = Literal["08", "09", "10"]

DOCUMENT_TYPES: tuple[str, ...] = get_args(DocumentType)
SEXES: tuple[str, ...] = get_args(Sex)
SUPPORTED_VERSIONS: tuple[str, ...] = get_args(AAMVAVersion)
DEFAULT_VERSION = "08"


def _text(payload: Mapping[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    return str(value)


@dataclass(frozen=True)
class PersonalRecord:
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    gender: str = ""
    eye_color: str = ""
    hair_color: str = ""
    height: str = ""
    weight: str = ""
    address_street: str = ""
    address_city: str = ""
    address_state: str = ""
    address_postal_code: str = ""
    country: str = ""
    unique_id: str = ""
    middle_name: str = ""

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> PersonalRecord:
        return PersonalRecord(
            first_name=_text(payload, "firstName"),
            last_name=_text(payload, "lastName"),
            date_of_birth=_text(payload, "dateOfBirth"),
            gender=_text(payload, "gender"),
            eye_color=_text(payload, "eyeColor"),
            hair_color=_text(payload, "hairColor"),
            height=_text(payload, "height"),
            weight=_text(payload, "weight"),
            address_street=_text(payload, "addressStreet"),
            address_city=_text(payload, "addressCity"),
            address_state=_text(payload, "addressState"),
            address_postal_code=_text(payload, "addressPostalCode"),
            country=_text(payload, "country"),
            unique_id=_text(payload, "uniqueId"),
            middle_name=_text(payload, "middleName"),
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            "firstName": self.first_name,
            "middleName": self.middle_name,
            "lastName": self.last_name,
            "dateOfBirth": self.date_of_birth,
            "gender": self.gender,
            "eyeColor": self.eye_color,
            "hairColor": self.hair_color,
            "height": self.height,
            "weight": self.weight,
            "addressStreet": self.address_street,
            "addressCity": self.address_city,
            "addressState": self.address_state,
            "addressPostalCode": self.address_postal_code,
            "country": self.country,
            "uniqueId": self.unique_id,
        }


@dataclass(frozen=True)
class DocumentRecord:
    document_type: str = "DL"
    issuing_jurisdiction: str = ""
    country: str = ""
    issue_date: str = ""
    expiration_date: str = ""
    vehicle_classifications: str = ""
    restriction_codes: str = ""
    endorsement_codes: str = ""

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            document_type=_text(payload, "documentType"),
            issuing_jurisdiction=_text(payload, "issuingJurisdiction"),
            country=_text(payload, "country"),
            issue_date=_text(payload, "issueDate"),
            expiration_date=_text(payload, "expirationDate"),
            vehicle_classifications=_text(payload, "vehicleClassifications"),
            restriction_codes=_text(payload, "restrictionCodes"),
            endorsement_codes=_text(payload, "endorsementCodes"),
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            "documentType": self.document_type,
            "issuingJurisdiction": self.issuing_jurisdiction,
            "country": self.country,
            "issueDate": self.issue_date,
            "expirationDate": self.expiration_date,
            "vehicleClassifications": self.vehicle_classifications,
            "restrictionCodes": self.restriction_codes,
            "endorsementCodes": self.endorsement_codes,
        }


@dataclass(frozen=True)
class AAMVARecord:
    personal: PersonalRecord
    document: DocumentRecord
    version: str = DEFAULT_VERSION
    optional: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> AAMVARecord:
        optional = payload.get("optional") or {}
        return AAMVARecord(
            personal=PersonalRecord.from_mapping(payload.get("personal") or {}),
            document=DocumentRecord.from_mapping(payload.get("document") or {}),
            version=_text(payload, "version", DEFAULT_VERSION),
            optional={str(k): str(v) for k, v in optional.items()},
        )

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "version": self.version,
            "personal": self.personal.to_mapping(),
            "document": self.document.to_mapping(),
        }
        if self.optional:
            payload["optional"] = dict(self.optional)
        return payload

    def field_value(self, field_id: str) -> str:
        """Return the value behind a camelCase field identifier."""
        if field_id == "version":
            return self.version
        document = self.document.to_mapping()
        # "country" resolves to the document country, the value written under ZYZ
        if field_id in document:
            return document[field_id]
        return self.personal.to_mapping().get(field_id, "")
