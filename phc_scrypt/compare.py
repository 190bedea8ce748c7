import hmac


def equal(a: bytes, b: bytes) -> bool:
    """Constant-time equality for byte strings.

    Both operands are padded to the longer length so ``compare_digest``
    always runs over every byte; the length check is folded in afterwards.
    """
    a, b = bytes(a), bytes(b)
    size = max(len(a), len(b))
    same = hmac.compare_digest(a.ljust(size, b"\0"), b.ljust(size, b"\0"))
    return same & (len(a) == len(b))
