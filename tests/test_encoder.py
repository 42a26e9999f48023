from dataclasses import replace

import pytest

from aamvagen.encoder import FIELD_SEPARATOR as FS
from aamvagen.encoder import RECORD_SEPARATOR as RS
from aamvagen.encoder import build_header, checksum, encode, version_code
from aamvagen.errors import EncodingError
from aamvagen.model import AAMVARecord
from aamvagen.records import sample_record


def _record() -> AAMVARecord:
    return AAMVARecord.from_mapping(sample_record())


def _with_document(**changes: str) -> AAMVARecord:
    record = _record()
    return replace(record, document=replace(record.document, **changes))


def test_encode_sample_is_byte_exact():
    header = "@\n\x1e\rANSI DL00080CA\n"
    subfile = (
        f"{RS}L{FS}"
        f"DAQ{FS}D1234567{RS}DCS{FS}Doe{RS}DCT{FS}Jane{RS}"
        f"DDE{FS}05201990{RS}DDF{FS}F{RS}"
        f"DCF{FS}01152023{RS}DCG{FS}01152028{RS}"
        f"DAG{FS}1 Main St{RS}DAI{FS}Springfield{RS}DAJ{FS}CA{RS}DAK{FS}90210{RS}"
        f"DAY{FS}BLU{RS}DAZ{FS}BRO{RS}DAU{FS}065in{RS}"
        f"ZYZ{FS}USA{RS}"
    )
    expected_sum = sum(ord(ch) for ch in header + subfile)
    expected = f"{header}{subfile}{RS}ZYZ{FS}{expected_sum:04X}"
    assert encode(_record()) == expected
    assert not expected.endswith("\n")


def test_encode_is_deterministic():
    assert encode(_record()) == encode(_record())


def test_checksum_matches_code_point_sum():
    text = encode(_record())
    body, _, digits = text.rpartition(f"{RS}ZYZ{FS}")
    assert digits == f"{sum(map(ord, body)):X}"
    assert digits == digits.upper()


def test_checksum_pads_and_does_not_wrap():
    assert checksum("") == "0000"
    assert checksum("A") == "0041"
    assert checksum("\uffff\uffff") == "1FFFE"


def test_version_codes_and_fallback():
    assert version_code("08") == "00080"
    assert version_code("09") == "00090"
    assert version_code("10") == "00100"
    assert version_code("11") == "00080"
    record = replace(_record(), version="10")
    assert build_header(record) == "@\n\x1e\rANSI DL00100CA\n"


def test_optional_elements_omitted_when_empty():
    text = encode(_record())
    for code in ("DCU", "DCA", "DCB", "DCD"):
        assert f"{code}{FS}" not in text


def test_vehicle_class_emitted_once_after_height():
    text = encode(_with_document(vehicle_classifications="C"))
    assert text.count(f"DCA{FS}") == 1
    assert f"DAU{FS}065in{RS}DCA{FS}C{RS}ZYZ{FS}USA{RS}" in text


def test_optional_codes_keep_fixed_order():
    record = _with_document(
        endorsement_codes="M", restriction_codes="B", vehicle_classifications="C"
    )
    record = replace(record, personal=replace(record.personal, middle_name="Ann"))
    text = encode(record)
    assert f"DCT{FS}Jane{RS}DCU{FS}Ann{RS}DDE{FS}" in text
    assert f"DCA{FS}C{RS}DCB{FS}B{RS}DCD{FS}M{RS}ZYZ{FS}USA{RS}" in text


def test_identification_card_header():
    text = encode(_with_document(document_type="ID", issuing_jurisdiction="NY"))
    assert text.startswith("@\n\x1e\rANSI ID00080NY\n")


def test_encode_refuses_missing_mandatory_elements():
    record = _record()
    record = replace(record, personal=replace(record.personal, first_name="", height=""))
    with pytest.raises(EncodingError) as excinfo:
        encode(record)
    assert excinfo.value.fields == ["firstName", "height"]
    assert excinfo.value.stage == "encode"


def test_encode_refuses_unnormalizable_date():
    with pytest.raises(EncodingError) as excinfo:
        encode(_with_document(issue_date="2023"))
    assert excinfo.value.fields == ["issueDate"]


def test_encode_does_not_revalidate_two_digit_years():
    text = encode(_with_document(expiration_date="01/15/28"))
    assert f"DCG{FS}01152028{RS}" in text
