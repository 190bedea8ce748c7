"""PHC string format.

    $<id>[$v=<version>][$<param>=<value>(,<param>=<value>)*][$<salt>[$<hash>]]

Salt and hash are standard base64 without padding. Integer parameter values
come back as ``int``, everything else as ``str``.
"""
import base64
import binascii
import re
from dataclasses import dataclass, field

from .errors import FormatError

ID_RE = re.compile(r"^[a-z0-9-]{1,32}$")
NAME_RE = re.compile(r"^[a-z0-9-]{1,32}$")
VALUE_RE = re.compile(r"^[a-zA-Z0-9/+.-]+$")
INT_RE = re.compile(r"^-?\d+$")
B64_RE = re.compile(r"^[A-Za-z0-9+/]+$")
VERSION_RE = re.compile(r"^v=(\d+)$")


@dataclass(frozen=True)
class PHCRecord:
    id: str
    params: dict = field(default_factory=dict)
    salt: bytes | None = None
    hash: bytes | None = None
    version: int | None = None


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def b64decode(text: str) -> bytes:
    if not B64_RE.match(text) or len(text) % 4 == 1:
        raise FormatError(f"Invalid base64 value: {text!r}")
    try:
        data = base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except binascii.Error as exc:
        raise FormatError(f"Invalid base64 value: {text!r}") from exc
    # Unused trailing bits must be zero, otherwise the value doesn't round-trip.
    if b64encode(data) != text:
        raise FormatError(f"Non-canonical base64 value: {text!r}")
    return data


def serialize(record: PHCRecord) -> str:
    if not isinstance(record.id, str) or not ID_RE.match(record.id):
        raise FormatError(f"Invalid identifier: {record.id!r}")
    fields = ["", record.id]

    if record.version is not None:
        if isinstance(record.version, bool) or not isinstance(record.version, int) or record.version < 0:
            raise FormatError(f"Invalid version: {record.version!r}")
        fields.append(f"v={record.version}")

    if record.params:
        pairs = []
        for name, value in record.params.items():
            if not isinstance(name, str) or not NAME_RE.match(name):
                raise FormatError(f"Invalid parameter name: {name!r}")
            if isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
            if not isinstance(value, str) or not VALUE_RE.match(value):
                raise FormatError(f"Invalid value for parameter '{name}': {value!r}")
            pairs.append(f"{name}={value}")
        fields.append(",".join(pairs))

    if record.salt is None and record.hash is not None:
        raise FormatError("A hash can't be serialized without a salt")
    for name in ("salt", "hash"):
        value = getattr(record, name)
        if value is None:
            break
        if not isinstance(value, (bytes, bytearray)) or not value:
            raise FormatError(f"The {name} must be a non-empty bytes value")
        fields.append(b64encode(bytes(value)))

    return "$".join(fields)


def _parse_params(section: str) -> dict:
    params = {}
    for pair in section.split(","):
        name, sep, value = pair.partition("=")
        if not sep or not NAME_RE.match(name) or not VALUE_RE.match(value):
            raise FormatError(f"Invalid parameter: {pair!r}")
        if name in params:
            raise FormatError(f"Duplicate parameter: {name!r}")
        params[name] = int(value) if INT_RE.match(value) else value
    return params


def deserialize(text: str) -> PHCRecord:
    if not isinstance(text, str):
        raise FormatError("The encoded hash must be a string")
    fields = text.split("$")
    if len(fields) < 2 or fields[0] != "":
        raise FormatError("The encoded hash must start with '$'")
    fields = fields[1:]

    ident = fields.pop(0)
    if not ID_RE.match(ident):
        raise FormatError(f"Invalid identifier: {ident!r}")

    version = None
    if fields:
        m = VERSION_RE.match(fields[0])
        if m:
            version = int(m.group(1))
            fields.pop(0)

    params = {}
    if fields and "=" in fields[0]:
        params = _parse_params(fields.pop(0))

    if len(fields) > 2:
        raise FormatError("Too many sections in the encoded hash")
    salt = b64decode(fields[0]) if fields else None
    hash_ = b64decode(fields[1]) if len(fields) > 1 else None
    return PHCRecord(id=ident, params=params, salt=salt, hash=hash_, version=version)
