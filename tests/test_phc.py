import pytest

from phc_scrypt import FormatError
from phc_scrypt.phc import PHCRecord, b64decode, b64encode, deserialize, serialize

SCRYPT = "$scrypt$ln=15,r=8,p=1$c2FsdHNhbHQ$aGFzaGhhc2g"


def test_deserialize_scrypt_string() -> None:
    record = deserialize(SCRYPT)
    assert record == PHCRecord(id="scrypt", params={"ln": 15, "r": 8, "p": 1}, salt=b"saltsalt", hash=b"hashhash")
    assert serialize(record) == SCRYPT


@pytest.mark.parametrize(
    "text",
    [
        "$scrypt",
        "$argon2i$v=19$m=120,t=5000,p=2",
        "$argon2i$v=19$m=120,t=5000,p=2$iHSDPHzUhPzK7rCcJgOFfg",
        "$pbkdf2-sha256$i=1000,salt=abc.def/+$c2FsdA$aGFzaA",
        "$scrypt$c2FsdHNhbHQ",
        "$scrypt$neg=-3",
    ],
)
def test_string_round_trip(text) -> None:
    assert serialize(deserialize(text)) == text


def test_version_and_string_params() -> None:
    record = deserialize("$argon2i$v=19$m=120,t=5000,p=2,data=abc")
    assert record.version == 19
    assert record.params == {"m": 120, "t": 5000, "p": 2, "data": "abc"}
    assert record.salt is None and record.hash is None


@pytest.mark.parametrize(
    "text",
    [
        "not-a-valid-record",
        "",
        "$",
        "scrypt$ln=15",
        "$SCRYPT$ln=15",
        "$" + "a" * 33,
        "$scrypt$ln=15,r$c2FsdA",
        "$scrypt$ln=15,ln=16",
        "$scrypt$ln=15,r=8!$c2FsdA",
        "$scrypt$ln=15$c2FsdA$aGFzaA$extra",
        "$scrypt$ln=15$c2FsdA==$aGFzaA",
        "$scrypt$ln=15$c2FsdB$aGFzaA",
        "$scrypt$ln=15$a$aGFzaA",
        "$scrypt$ln=15$c2FsdA$",
    ],
)
def test_deserialize_rejects_malformed(text) -> None:
    with pytest.raises(FormatError):
        deserialize(text)


def test_deserialize_rejects_non_string() -> None:
    with pytest.raises(FormatError):
        deserialize(b"$scrypt$ln=15")


@pytest.mark.parametrize(
    "record",
    [
        PHCRecord(id="Scrypt"),
        PHCRecord(id="scrypt", version=-1),
        PHCRecord(id="scrypt", params={"LN": 15}),
        PHCRecord(id="scrypt", params={"ln": 1.5}),
        PHCRecord(id="scrypt", params={"ln": "a b"}),
        PHCRecord(id="scrypt", hash=b"hash"),
        PHCRecord(id="scrypt", salt=b""),
        PHCRecord(id="scrypt", salt="salt"),
    ],
)
def test_serialize_rejects_invalid_records(record) -> None:
    with pytest.raises(FormatError):
        serialize(record)


def test_b64_without_padding() -> None:
    assert b64encode(b"s") == "cw"
    assert b64decode("cw") == b"s"
    with pytest.raises(FormatError):
        b64decode("cx")
