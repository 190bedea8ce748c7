"""scrypt parameter bounds.

The limits follow the scrypt block layout: a block is ``128 * r`` bytes, so
both the largest usable cost exponent and the largest parallelism depend on
``r``.
"""
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import FormatError, ValidationError

MAX_UINT32 = 2**32 - 1

# Per-call memory ceiling handed to scrypt.
MAX_MEM = 128 * 1024 * 1024

KEY_LENGTH = 32

MIN_SALT_SIZE = 8
MAX_SALT_SIZE = 1023


@dataclass(frozen=True)
class HashOptions:
    cost: int = 15          # ln, N = 2**cost
    blocksize: int = 8      # r
    parallelism: int = 1    # p
    salt_size: int = 16     # bytes


DEFAULTS = HashOptions()


@dataclass(frozen=True)
class ScryptParams:
    ln: int
    r: int
    p: int
    maxmem: int = MAX_MEM

    @property
    def n(self) -> int:
        return 2**self.ln


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check(field: str, value, low: int, high: int) -> int:
    if not _is_int(value) or not low <= value <= high:
        raise ValidationError(field, value, (low, high))
    return value


def max_cost(r: int) -> int:
    return (128 * r) // 8 - 1


def max_parallelism(r: int) -> int:
    return (MAX_UINT32 * 32) // (128 * r)


def validate_forward(options: HashOptions) -> ScryptParams:
    """Check user options and derive the scrypt inputs for hashing."""
    r = _check("blocksize", options.blocksize, 1, MAX_UINT32)
    ln = _check("cost", options.cost, 1, max_cost(r))
    p = _check("parallelism", options.parallelism, 1, max_parallelism(r))
    _check("salt_size", options.salt_size, MIN_SALT_SIZE, MAX_SALT_SIZE)
    return ScryptParams(ln=ln, r=r, p=p)


def validate_reverse(params) -> ScryptParams:
    """Check the ``ln``/``r``/``p`` section decoded from a stored hash."""
    if not isinstance(params, Mapping) or not params:
        raise FormatError("The param section cannot be empty")
    r = _check("r", params.get("r"), 1, MAX_UINT32)
    ln = _check("ln", params.get("ln"), 1, max_cost(r))
    p = params.get("p")
    # Legacy bound: stored hashes were checked against p itself, not r.
    if not _is_int(p) or p < 1:
        raise ValidationError("p", p, (1, MAX_UINT32))
    _check("p", p, 1, max_parallelism(p))
    return ScryptParams(ln=ln, r=r, p=p)
