import asyncio
import hashlib
import logging
from dataclasses import fields, replace
from os import urandom

from .compare import equal
from .errors import DerivationError, IdentityMismatchError, MissingFieldError, ValidationError
from .params import DEFAULTS, KEY_LENGTH, HashOptions, ScryptParams, validate_forward, validate_reverse
from .phc import PHCRecord, deserialize, serialize

logger = logging.getLogger(__name__)

IDENTIFIER = "scrypt"

# hashlib takes N as an unsigned 64-bit integer.
MAX_LN = 63

OPTION_NAMES = frozenset(f.name for f in fields(HashOptions))


def generate_salt(size: int) -> bytes:
    return urandom(size)


def _password_bytes(password, allow_empty: bool = False) -> bytes:
    if isinstance(password, str):
        data = password.encode("utf-8")
    elif isinstance(password, (bytes, bytearray, memoryview)):
        data = bytes(password)
    else:
        raise ValidationError("password", password, message="The password must be a string or bytes")
    if not data and not allow_empty:
        raise ValidationError("password", password, message="The password must not be empty")
    return data


async def derive(password: bytes, salt: bytes, keylen: int, params: ScryptParams) -> bytes:
    """Run scrypt on a worker thread."""
    logger.debug("scrypt derive: ln=%d r=%d p=%d keylen=%d", params.ln, params.r, params.p, keylen)
    if params.ln > MAX_LN:
        raise DerivationError(f"scrypt cost ln={params.ln} exceeds {MAX_LN}")
    try:
        return await asyncio.to_thread(
            hashlib.scrypt,
            password,
            salt=salt,
            n=params.n,
            r=params.r,
            p=params.p,
            maxmem=params.maxmem,
            dklen=keylen,
        )
    except (ValueError, TypeError, OverflowError) as exc:
        raise DerivationError(f"scrypt failed for ln={params.ln} r={params.r} p={params.p}: {exc}") from exc


async def hash(password, options: HashOptions | None = None, **overrides) -> str:
    """Hash ``password`` and return the PHC string.

    ``options`` defaults to ``DEFAULTS``; keyword overrides are merged on top,
    e.g. ``await hash("pw", cost=12)``. Everything is validated before the
    salt is drawn or scrypt runs.
    """
    data = _password_bytes(password)
    for name in overrides:
        if name not in OPTION_NAMES:
            raise ValidationError(name, overrides[name], message=f"Unknown option '{name}'")
    options = replace(options or DEFAULTS, **overrides)
    params = validate_forward(options)

    salt = generate_salt(options.salt_size)
    key = await derive(data, salt, KEY_LENGTH, params)
    return serialize(PHCRecord(
        id=IDENTIFIER,
        params={"ln": params.ln, "r": params.r, "p": params.p},
        salt=salt,
        hash=key,
    ))


async def verify(encoded: str, password) -> bool:
    """Return True if ``password`` matches the PHC string ``encoded``."""
    data = _password_bytes(password, allow_empty=True)
    record = deserialize(encoded)

    if record.id != IDENTIFIER:
        raise IdentityMismatchError(record.id)
    params = validate_reverse(record.params)
    if record.salt is None:
        raise MissingFieldError("salt")
    if record.hash is None:
        raise MissingFieldError("hash")

    # Derive a key as long as the stored one, whatever its length.
    key = await derive(data, record.salt, len(record.hash), params)
    return equal(record.hash, key)


def identifiers() -> list[str]:
    return [IDENTIFIER]
