"""Errors raised by hash/verify. All of them are ValueErrors."""


class ScryptHashError(ValueError):
    pass


class ValidationError(ScryptHashError):
    """A password or numeric parameter is missing, ill-typed or out of range."""

    def __init__(self, field: str, value, bound: tuple[int, int] | None = None, message: str | None = None):
        self.field = field
        self.value = value
        self.bound = bound
        if message is None:
            if bound is None:
                message = f"Invalid value for '{field}': {value!r}"
            else:
                low, high = bound
                message = f"The '{field}' value must be an integer in the range ({low} <= {field} <= {high}), got {value!r}"
        super().__init__(message)


class FormatError(ScryptHashError):
    """The encoded string can't be parsed or lacks a required section."""


class MissingFieldError(FormatError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"No {field} found in the given string")


class IdentityMismatchError(ScryptHashError):
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Incompatible {identifier} identifier found in the hash")


class DerivationError(ScryptHashError):
    """scrypt itself refused parameters that passed the bound checks."""
