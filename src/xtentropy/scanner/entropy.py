"""Shannon entropy of raw item content."""

from __future__ import annotations

import math
from collections import Counter
from typing import Union

Buffer = Union[bytes, bytearray, memoryview]

# Fractional digits in an annotation value
PRECISION = 16


def compute_entropy(buffer: Buffer, length: int) -> float:
    """Compute Shannon entropy (bits per byte) of the first *length* bytes.

    H = -Σ p(v) · log₂(p(v))  over byte values v with a non-zero count.

    The result lies in [0, 8]: 0.0 when every byte is identical, 8.0 when all
    256 byte values occur equally often.
    """
    if length <= 0:
        raise ValueError("entropy needs at least one byte")
    if length > len(buffer):
        raise ValueError(f"length {length} exceeds buffer size {len(buffer)}")

    # Iterating the view yields ints without copying the buffer
    counts = Counter(memoryview(buffer).cast("B")[:length])
    total = 0.0
    # Fixed bin order keeps the float summation deterministic
    for value in sorted(counts):
        p = counts[value] / length
        total += p * math.log2(p)
    return abs(total)


def format_entropy(value: float) -> str:
    """Render *value* as fixed point with exactly 16 fractional digits."""
    return f"{value:.{PRECISION}f}"
