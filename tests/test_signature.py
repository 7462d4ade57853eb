"""
Tests for EPID signature layout normalization.

Test plan:
- 569 bytes: header dropped, 8 zero bytes appended
- 565 bytes: 8 zero bytes appended
- 577 + 160k bytes: header dropped, tail kept
- Canonical lengths (573, 573 + 160k) pass through unchanged
- Short lengths that alias under floored modulo (417, 257) pass through
- Empty and tiny inputs never raise
- Deterministic, input not mutated
"""

import pytest

from epid_verifier.signature import (
    SignatureLayout,
    classify_signature,
    normalize_signature,
)


def _sig(length: int) -> bytes:
    return bytes((i % 251) + 1 for i in range(length))


# ---------------------------------------------------------------------------
# Legacy layouts
# ---------------------------------------------------------------------------


class TestWithHeaderNoCounts:
    def test_classified(self) -> None:
        assert classify_signature(_sig(569)) is SignatureLayout.WITH_HEADER_NO_COUNTS

    def test_length_after_normalize(self) -> None:
        assert len(normalize_signature(_sig(569))) == 573

    def test_header_dropped_and_zeros_appended(self) -> None:
        sig = _sig(569)
        out = normalize_signature(sig)
        assert out[:565] == sig[4:]
        assert out[565:] == bytes(8)


class TestNoHeaderNoCounts:
    def test_classified(self) -> None:
        assert classify_signature(_sig(565)) is SignatureLayout.NO_HEADER_NO_COUNTS

    def test_zeros_appended(self) -> None:
        sig = _sig(565)
        out = normalize_signature(sig)
        assert len(out) == 573
        assert out[:565] == sig
        assert out[565:] == bytes(8)


class TestWithHeaderWithCounts:
    @pytest.mark.parametrize("k", [0, 1, 2, 5])
    def test_header_dropped(self, k: int) -> None:
        sig = _sig(573 + 4 + 160 * k)
        out = normalize_signature(sig)
        assert len(out) == 573 + 160 * k
        assert out == sig[4:]

    def test_classified(self) -> None:
        assert (
            classify_signature(_sig(577)) is SignatureLayout.WITH_HEADER_WITH_COUNTS
        )


# ---------------------------------------------------------------------------
# Pass-through
# ---------------------------------------------------------------------------


class TestCanonical:
    @pytest.mark.parametrize("length", [573, 733, 893, 570, 574, 578, 0, 1, 4])
    def test_unchanged(self, length: int) -> None:
        sig = _sig(length)
        assert classify_signature(sig) is SignatureLayout.CANONICAL
        assert normalize_signature(sig) == sig

    @pytest.mark.parametrize("length", [417, 257, 97])
    def test_short_lengths_do_not_alias_into_modulo_branch(self, length: int) -> None:
        # (length - 573) % 160 == 4 under floored modulo
        assert (length - 573) % 160 == 4
        sig = _sig(length)
        assert normalize_signature(sig) == sig


class TestProperties:
    def test_deterministic(self) -> None:
        sig = _sig(569)
        assert normalize_signature(sig) == normalize_signature(sig)

    def test_input_not_mutated(self) -> None:
        sig = bytearray(_sig(565))
        before = bytes(sig)
        normalize_signature(sig)  # type: ignore[arg-type]
        assert bytes(sig) == before

    def test_returns_bytes(self) -> None:
        assert isinstance(normalize_signature(bytearray(10)), bytes)  # type: ignore[arg-type]

    @pytest.mark.parametrize("length", range(0, 1300, 7))
    def test_total(self, length: int) -> None:
        assert isinstance(normalize_signature(_sig(length)), bytes)
