import time

import pytest

from phc_scrypt.compare import equal


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (b"", b"", True),
        (b"abc", b"abc", True),
        (b"abc", b"abd", False),
        (b"abc", b"ab", False),
        (b"ab", b"abc", False),
        (b"", b"\0", False),
        (b"abc\0", b"abc", False),
        (bytearray(b"abc"), b"abc", True),
    ],
)
def test_equal(a, b, expected) -> None:
    assert equal(a, b) is expected


def _best_time(a: bytes, b: bytes, repeat: int = 40) -> float:
    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        equal(a, b)
        best = min(best, time.perf_counter() - start)
    return best


def test_timing_does_not_depend_on_mismatch_position() -> None:
    size = 4096
    base = bytes(range(256)) * (size // 256)
    timings = []
    for index in (0, size // 2, size - 1):
        other = bytearray(base)
        other[index] ^= 0xFF
        timings.append(_best_time(base, bytes(other)))
    timings.append(_best_time(base, base))
    assert max(timings) / min(timings) < 2.0
