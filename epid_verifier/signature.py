"""
EPID signature layout normalization.

Devices in the field emit EPID signatures in several historical layouts.
The verifier accepts exactly one: the fixed fields followed by
sigRLVersion and n2 (4 bytes each) and then n2 non-revoked proofs of
160 bytes each. Older firmware prepends a 4-byte header (sver and blobid)
and/or omits the sigRLVersion/n2 counts.

There is no format tag, so the layout is recognized by length alone.
Checks run in a fixed order and the first match wins:

    1. 569 bytes: header, no counts.     Drop 4 leading, append 8 zeros.
    2. 565 bytes: no header, no counts.  Append 8 zeros.
    3. 573 + 160k + 4 bytes: header, with counts.  Drop 4 leading.
    4. Anything else passes through unchanged.

The modulo check in step 3 only applies from 573 bytes upward. Shorter
signatures would otherwise alias into it under floored modulo (417, 257,
...) and lose their first 4 bytes.
"""

from __future__ import annotations

from enum import StrEnum

SIG_WITH_HEADER_NO_COUNTS = 569
SIG_NO_HEADER_NO_COUNTS = 565
SIG_WITH_HEADER_WITH_COUNTS = 573

HEADER_SIZE = 4
COUNTS_SIZE = 8
NR_PROOF_SIZE = 160


class SignatureLayout(StrEnum):
    """Which legacy layout a raw signature was recognized as."""

    WITH_HEADER_NO_COUNTS = "WITH_HEADER_NO_COUNTS"
    NO_HEADER_NO_COUNTS = "NO_HEADER_NO_COUNTS"
    WITH_HEADER_WITH_COUNTS = "WITH_HEADER_WITH_COUNTS"
    CANONICAL = "CANONICAL"


def classify_signature(signature: bytes) -> SignatureLayout:
    """Recognize the layout of a raw EPID signature by its length."""
    length = len(signature)
    if length == SIG_WITH_HEADER_NO_COUNTS:
        return SignatureLayout.WITH_HEADER_NO_COUNTS
    if length == SIG_NO_HEADER_NO_COUNTS:
        return SignatureLayout.NO_HEADER_NO_COUNTS
    excess = length - SIG_WITH_HEADER_WITH_COUNTS
    if excess >= 0 and excess % NR_PROOF_SIZE == HEADER_SIZE:
        return SignatureLayout.WITH_HEADER_WITH_COUNTS
    return SignatureLayout.CANONICAL


def normalize_signature(signature: bytes) -> bytes:
    """Rewrite a raw EPID signature into the layout the verifier expects.

    Total: never raises, and returns the input bytes unchanged when no
    legacy layout matches.
    """
    layout = classify_signature(signature)
    if layout is SignatureLayout.WITH_HEADER_NO_COUNTS:
        return bytes(signature[HEADER_SIZE:]) + bytes(COUNTS_SIZE)
    if layout is SignatureLayout.NO_HEADER_NO_COUNTS:
        return bytes(signature) + bytes(COUNTS_SIZE)
    if layout is SignatureLayout.WITH_HEADER_WITH_COUNTS:
        return bytes(signature[HEADER_SIZE:])
    return bytes(signature)
