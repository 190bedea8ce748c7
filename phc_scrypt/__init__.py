"""scrypt password hashing in the PHC string format."""
from .errors import (
    DerivationError,
    FormatError,
    IdentityMismatchError,
    MissingFieldError,
    ScryptHashError,
    ValidationError,
)
from .hashing import IDENTIFIER, hash, identifiers, verify
from .params import DEFAULTS, MAX_MEM, HashOptions, ScryptParams
