"""Tests for the entropy engine."""

import math
import random
import tracemalloc
from decimal import Decimal

import pytest

from xtentropy.scanner.entropy import compute_entropy, format_entropy


class TestComputeEntropy:
    def test_single_byte(self):
        assert compute_entropy(b"\x41", 1) == 0.0

    @pytest.mark.parametrize("n", [1, 2, 17, 4096])
    def test_repeated_byte_is_zero(self, n):
        h = compute_entropy(b"\x7f" * n, n)
        assert h == 0.0
        assert math.copysign(1.0, h) == 1.0  # never -0.0

    @pytest.mark.parametrize("k", [1, 3, 64])
    def test_uniform_bytes_is_eight(self, k):
        data = bytes(range(256)) * k
        assert compute_entropy(data, len(data)) == 8.0

    def test_two_symbols(self):
        assert compute_entropy(b"abab", 4) == 1.0

    def test_known_entropy(self):
        # "abcd" has 4 symbols, each p=0.25, H = 2.0
        assert compute_entropy(b"abcd", 4) == 2.0

    def test_range_on_random_data(self):
        rng = random.Random(1234)
        for size in (1, 5, 100, 1000):
            data = bytes(rng.randrange(256) for _ in range(size))
            h = compute_entropy(data, size)
            assert 0.0 <= h <= 8.0

    def test_order_independent(self):
        rng = random.Random(99)
        data = bytearray(rng.randrange(40) for _ in range(500))
        shuffled = bytearray(data)
        rng.shuffle(shuffled)
        assert compute_entropy(data, len(data)) == compute_entropy(shuffled, len(shuffled))

    def test_deterministic(self):
        data = b"The quick brown fox jumps over the lazy dog"
        assert compute_entropy(data, len(data)) == compute_entropy(bytes(data), len(data))

    def test_uses_only_length_prefix(self):
        buf = bytearray(b"aaaa" + bytes(range(200)))
        assert compute_entropy(buf, 4) == 0.0

    def test_accepts_memoryview(self):
        assert compute_entropy(memoryview(b"abcd"), 4) == 2.0

    def test_counts_without_copying_buffer(self):
        data = bytearray(b"\x01\x02" * (2 * 1024 * 1024))
        tracemalloc.start()
        try:
            tracemalloc.reset_peak()
            base, _ = tracemalloc.get_traced_memory()
            assert compute_entropy(data, len(data)) == 1.0
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert peak - base < len(data) // 8

    def test_zero_length_rejected(self):
        with pytest.raises(ValueError):
            compute_entropy(b"abc", 0)

    def test_length_past_buffer_rejected(self):
        with pytest.raises(ValueError):
            compute_entropy(b"abc", 4)


class TestFormatEntropy:
    def test_sixteen_fractional_digits(self):
        assert format_entropy(1.5) == "1.5000000000000000"
        whole, frac = format_entropy(compute_entropy(b"hello world", 11)).split(".")
        assert whole == "2"
        assert len(frac) == 16

    def test_zero_and_eight(self):
        assert format_entropy(0.0) == "0.0000000000000000"
        assert format_entropy(8.0) == "8.0000000000000000"

    def test_reparse_keeps_sixteen_digits(self):
        value = compute_entropy(b"hello world", 11)
        text = format_entropy(value)
        parsed = Decimal(text)
        assert parsed.as_tuple().exponent == -16
        assert abs(parsed - Decimal(value)) <= Decimal("0.5e-16")
