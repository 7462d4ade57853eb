"""
Verifier request body encoding.

The body is a flat JSON object with exactly three base64 (RFC 4648,
padded) fields, in this order:

    {"groupId": "...", "msg": "...", "epidSignature": "..."}

Base64 output needs no JSON escaping.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@dataclass(frozen=True)
class VerificationRequest:
    """One verifier request, before encoding.

    Attributes:
        group_id: EPID group identifier from SigInfo.
        msg: Reconstructed signed payload (see ``payload``).
        epid_signature: Normalized signature (see ``signature``).
    """

    group_id: bytes
    msg: bytes
    epid_signature: bytes

    def to_dict(self) -> dict[str, str]:
        return {
            "groupId": _b64(self.group_id),
            "msg": _b64(self.msg),
            "epidSignature": _b64(self.epid_signature),
        }

    def to_json(self) -> str:
        """Serialize to the exact request body text."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


def encode_request_body(group_id: bytes, msg: bytes, epid_signature: bytes) -> str:
    """Encode the verifier request body for the given fields."""
    return VerificationRequest(
        group_id=group_id,
        msg=msg,
        epid_signature=epid_signature,
    ).to_json()
