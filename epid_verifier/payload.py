"""
Signed-payload reconstruction.

The verifier checks the EPID signature over the exact bytes the device
signed, which are NOT the EAT payload alone: the device prepends its
Maroe prefix and the nonce in a version-specific layout. Any deviation
by a single byte turns a valid signature into INVALID_SIGNATURE.

Layouts:
    EPID 1.0:  len(prefix) [1 byte] | prefix | nonce | signed_data
    EPID 1.1:  header [48 bytes] | prefix | zero[16] | nonce | zero[16]
               | signed_data

The EPID 1.1 header is all zeros except offset 4 (0x48) and offset 8
(0x08). Header and padding are fixed by the verifier's wire format.

Pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from epid_verifier.assertion import SchemeType, maroe_prefix_from
from epid_verifier.errors import InvalidInputError

EPID11_HEADER_SIZE = 48
EPID11_PADDING_SIZE = 16
MAX_EPID10_PREFIX_BYTES = 0xFF


def epid11_header() -> bytes:
    """The fixed 48-byte EPID 1.1 header block."""
    header = bytearray(EPID11_HEADER_SIZE)
    header[4] = 0x48
    header[8] = 0x08
    return bytes(header)


def build_signed_payload(
    unprotected: Mapping[Any, Any],
    nonce: bytes,
    signed_data: bytes,
    sg_type: int,
) -> bytes | None:
    """Rebuild the byte sequence the device signed.

    Args:
        unprotected: COSE unprotected header map holding the Maroe prefix.
        nonce: Nonce claim from the EAT payload.
        signed_data: Bytes the device attested over.
        sg_type: SigInfo scheme type.

    Returns:
        The signed payload, or None if ``sg_type`` is not an EPID scheme.
        Callers must treat None as an unrecoverable encoding failure.

    Raises:
        InvalidInputError: If the Maroe prefix is missing, or is longer
            than 255 bytes for EPID 1.0.
    """
    if sg_type == SchemeType.EPID10:
        prefix = maroe_prefix_from(unprotected)
        if len(prefix) > MAX_EPID10_PREFIX_BYTES:
            raise InvalidInputError(
                f"Maroe prefix exceeds {MAX_EPID10_PREFIX_BYTES} bytes "
                f"(got {len(prefix)} bytes)",
                details={"prefix_length": len(prefix)},
            )
        return b"".join((bytes([len(prefix)]), prefix, nonce, signed_data))

    if sg_type == SchemeType.EPID11:
        prefix = maroe_prefix_from(unprotected)
        padding = bytes(EPID11_PADDING_SIZE)
        return b"".join(
            (epid11_header(), prefix, padding, nonce, padding, signed_data)
        )

    return None
