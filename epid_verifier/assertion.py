"""
Typed views over the device assertion and its SigInfo.

A device proves group membership with a COSE_Sign1 structure whose
payload is an EAT claims map. The adapter only needs four things out of
it: the raw EPID signature, the nonce claim, the Maroe prefix from the
unprotected header, and (from SigInfo) the scheme type and group id.

Both types can be built directly from bytes/fields, or decoded from the
CBOR the device sent via ``from_cose`` / ``from_cbor``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any

import cbor2

from epid_verifier.constants import (
    COSE_SIGN1_PAYLOAD,
    COSE_SIGN1_SIGNATURE,
    COSE_SIGN1_TAG,
    COSE_SIGN1_UNPROTECTED,
    EAT_MAROE_PREFIX,
    EAT_NONCE,
    SIG_INFO_GROUP_ID,
    SIG_INFO_TYPE,
)
from epid_verifier.errors import InvalidInputError


class SchemeType(IntEnum):
    """EPID signature scheme variants accepted by the verifier."""

    EPID10 = 90
    EPID11 = 91


def is_supported_scheme(sg_type: int) -> bool:
    try:
        SchemeType(sg_type)
    except ValueError:
        return False
    return True


# =========================================================================
# CBOR helpers
# =========================================================================


def _decode(data: bytes, what: str) -> Any:
    try:
        return cbor2.loads(data)
    except (cbor2.CBORDecodeError, ValueError) as exc:
        raise InvalidInputError(f"{what} is not valid CBOR: {exc}") from exc


def _require_bytes(value: Any, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidInputError(
        f"{what} must be a byte string, got {type(value).__name__}"
    )


def _untag(obj: Any, tag: int) -> Any:
    if isinstance(obj, cbor2.CBORTag):
        if obj.tag != tag:
            raise InvalidInputError(f"unexpected CBOR tag {obj.tag}, expected {tag}")
        return obj.value
    return obj


# =========================================================================
# SignatureAssertion
# =========================================================================


@dataclass(frozen=True)
class SignatureAssertion:
    """The device's signed assertion, as far as EPID verification needs it.

    Attributes:
        signature: Raw EPID signature bytes, in whatever layout the
            device produced (see ``signature.normalize_signature``).
        payload: CBOR-encoded EAT claims map containing the nonce.
        unprotected: COSE unprotected header map. Must contain the Maroe
            prefix under ``EAT_MAROE_PREFIX``. Stored as a read-only copy
            and left out of the hash.
    """

    signature: bytes
    payload: bytes
    unprotected: Mapping[Any, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "unprotected", MappingProxyType(dict(self.unprotected))
        )

    @classmethod
    def from_cose(cls, cose: bytes | list[Any] | cbor2.CBORTag) -> SignatureAssertion:
        """Build from a COSE_Sign1 structure.

        Accepts encoded bytes (tagged or untagged) or the decoded
        four-element array ``[protected, unprotected, payload, signature]``.

        Raises:
            InvalidInputError: If the structure is not a COSE_Sign1.
        """
        obj: Any = cose
        if isinstance(obj, (bytes, bytearray, memoryview)):
            obj = _decode(bytes(obj), "COSE_Sign1")
        obj = _untag(obj, COSE_SIGN1_TAG)

        if not isinstance(obj, (list, tuple)) or len(obj) != 4:
            raise InvalidInputError("COSE_Sign1 must be a four-element array")

        unprotected = obj[COSE_SIGN1_UNPROTECTED]
        if not isinstance(unprotected, Mapping):
            raise InvalidInputError("COSE_Sign1 unprotected header must be a map")

        return cls(
            signature=_require_bytes(obj[COSE_SIGN1_SIGNATURE], "COSE_Sign1 signature"),
            payload=_require_bytes(obj[COSE_SIGN1_PAYLOAD], "COSE_Sign1 payload"),
            unprotected=unprotected,
        )

    def nonce(self) -> bytes:
        """Decode the EAT payload and return its nonce claim.

        Raises:
            InvalidInputError: If the payload is not a CBOR map or has no
                byte-string nonce.
        """
        claims = _decode(self.payload, "EAT payload")
        if not isinstance(claims, Mapping):
            raise InvalidInputError("EAT payload must be a CBOR map")
        if EAT_NONCE not in claims:
            raise InvalidInputError("EAT payload has no nonce claim")
        return _require_bytes(claims[EAT_NONCE], "EAT nonce")

    def maroe_prefix(self) -> bytes:
        """Return the Maroe prefix from the unprotected header.

        Raises:
            InvalidInputError: If the header has no byte-string prefix.
        """
        return maroe_prefix_from(self.unprotected)


def maroe_prefix_from(unprotected: Mapping[Any, Any]) -> bytes:
    """Extract the Maroe prefix bytes from an unprotected header map."""
    if EAT_MAROE_PREFIX not in unprotected:
        raise InvalidInputError("unprotected header has no Maroe prefix")
    return _require_bytes(unprotected[EAT_MAROE_PREFIX], "Maroe prefix")


# =========================================================================
# SigInfo
# =========================================================================


@dataclass(frozen=True)
class SigInfo:
    """Signature scheme and EPID group for one assertion.

    ``sg_type`` is kept as a plain int so unsupported values can be
    represented and rejected by the verifier.
    """

    sg_type: int
    group_id: bytes

    @classmethod
    def from_cbor(cls, sig_info: bytes | list[Any]) -> SigInfo:
        """Build from an encoded or decoded ``[sgType, info]`` array."""
        obj: Any = sig_info
        if isinstance(obj, (bytes, bytearray, memoryview)):
            obj = _decode(bytes(obj), "SigInfo")
        if not isinstance(obj, (list, tuple)) or len(obj) != 2:
            raise InvalidInputError("SigInfo must be a two-element array")

        sg_type = obj[SIG_INFO_TYPE]
        if not isinstance(sg_type, int) or isinstance(sg_type, bool):
            raise InvalidInputError("SigInfo sgType must be an integer")
        return cls(
            sg_type=sg_type,
            group_id=_require_bytes(obj[SIG_INFO_GROUP_ID], "SigInfo group id"),
        )

    @property
    def scheme(self) -> SchemeType | None:
        """The scheme as a SchemeType, or None when unsupported."""
        if is_supported_scheme(self.sg_type):
            return SchemeType(self.sg_type)
        return None
