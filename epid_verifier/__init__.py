"""
EPID verifier adapter.

Shapes device EPID assertions into the remote verification service's
request format and maps its answer to an Outcome. The EPID signature
math itself is done by the service.

Public API:

    Pure layer (no I/O):
        - ``build_signed_payload()`` — rebuild the bytes the device signed.
        - ``normalize_signature()`` / ``classify_signature()`` — legacy
          signature layout detection and fix-up.
        - ``VerificationRequest`` / ``encode_request_body()`` — JSON body.
        - ``classify_status()`` — HTTP status → Outcome.

    Impure layer (network I/O):
        - ``EpidVerifier`` — ``verify()`` and ``verify_detailed()``.
        - ``verify()`` — one-shot convenience.

    Transport:
        - ``VerificationTransport`` — injectable protocol.
        - ``HttpxTransport`` — default httpx-based transport.
"""

from epid_verifier.assertion import SchemeType, SignatureAssertion, SigInfo
from epid_verifier.config import VerifierConfig
from epid_verifier.errors import (
    EpidVerifierError,
    InvalidInputError,
    TransportError,
    UnsupportedSchemeError,
)
from epid_verifier.outcome import Outcome, classify_status
from epid_verifier.payload import build_signed_payload, epid11_header
from epid_verifier.request import VerificationRequest, encode_request_body
from epid_verifier.signature import (
    SignatureLayout,
    classify_signature,
    normalize_signature,
)
from epid_verifier.transport import HttpxTransport, VerificationTransport
from epid_verifier.verifier import (
    EpidVerifier,
    VerificationResult,
    build_request,
    resolve_endpoint,
    verify,
)

__version__ = "0.1.0"

__all__ = [
    "EpidVerifier",
    "EpidVerifierError",
    "HttpxTransport",
    "InvalidInputError",
    "Outcome",
    "SchemeType",
    "SigInfo",
    "SignatureAssertion",
    "SignatureLayout",
    "TransportError",
    "UnsupportedSchemeError",
    "VerificationRequest",
    "VerificationResult",
    "VerificationTransport",
    "VerifierConfig",
    "build_request",
    "build_signed_payload",
    "classify_signature",
    "classify_status",
    "encode_request_body",
    "epid11_header",
    "normalize_signature",
    "resolve_endpoint",
    "verify",
]
