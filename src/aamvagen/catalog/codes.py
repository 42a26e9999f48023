"""Static AAMVA reference code tables.

Jurisdiction, eye colour and hair colour codes offered to form inputs and used
for code-set membership checks. Read-only after import.
"""

from __future__ import annotations

from types import MappingProxyType

JURISDICTIONS = MappingProxyType(
    {
        "AL": "Alabama",
        "AK": "Alaska",
        "AZ": "Arizona",
        "AR": "Arkansas",
        "CA": "California",
        "CO": "Colorado",
        "CT": "Connecticut",
        "DE": "Delaware",
        "DC": "District of Columbia",
        "FL": "Florida",
        "GA": "Georgia",
        "HI": "Hawaii",
        "ID": "Idaho",
        "IL": "Illinois",
        "IN": "Indiana",
        "IA": "Iowa",
        "KS": "Kansas",
        "KY": "Kentucky",
        "LA": "Louisiana",
        "ME": "Maine",
        "MD": "Maryland",
        "MA": "Massachusetts",
        "MI": "Michigan",
        "MN": "Minnesota",
        "MS": "Mississippi",
        "MO": "Missouri",
        "MT": "Montana",
        "NE": "Nebraska",
        "NV": "Nevada",
        "NH": "New Hampshire",
        "NJ": "New Jersey",
        "NM": "New Mexico",
        "NY": "New York",
        "NC": "North Carolina",
        "ND": "North Dakota",
        "OH": "Ohio",
        "OK": "Oklahoma",
        "OR": "Oregon",
        "PA": "Pennsylvania",
        "RI": "Rhode Island",
        "SC": "South Carolina",
        "SD": "South Dakota",
        "TN": "Tennessee",
        "TX": "Texas",
        "UT": "Utah",
        "VT": "Vermont",
        "VA": "Virginia",
        "WA": "Washington",
        "WV": "West Virginia",
        "WI": "Wisconsin",
        "WY": "Wyoming",
        # Canadian provinces and territories
        "AB": "Alberta",
        "BC": "British Columbia",
        "MB": "Manitoba",
        "NB": "New Brunswick",
        "NL": "Newfoundland and Labrador",
        "NS": "Nova Scotia",
        "ON": "Ontario",
        "PE": "Prince Edward Island",
        "QC": "Quebec",
        "SK": "Saskatchewan",
        "NT": "Northwest Territories",
        "NU": "Nunavut",
        "YT": "Yukon",
    }
)

EYE_COLORS = MappingProxyType(
    {
        "BLK": "Black",
        "BLU": "Blue",
        "BRO": "Brown",
        "GRY": "Gray",
        "GRN": "Green",
        "HAZ": "Hazel",
        "MAR": "Maroon",
        "PNK": "Pink",
        "DIC": "Dichromatic",
        "UNK": "Unknown",
    }
)

HAIR_COLORS = MappingProxyType(
    {
        "BAL": "Bald",
        "BLK": "Black",
        "BLN": "Blond",
        "BRO": "Brown",
        "GRY": "Gray",
        "RED": "Red/Auburn",
        "SDY": "Sandy",
        "WHI": "White",
        "UNK": "Unknown",
    }
)


def is_jurisdiction(code: str) -> bool:
    return code in JURISDICTIONS


def is_eye_color(code: str) -> bool:
    return code in EYE_COLORS


def is_hair_color(code: str) -> bool:
    return code in HAIR_COLORS
