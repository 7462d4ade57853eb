"""
EPID verification dispatch.

Composes the pure layers (payload.py, signature.py, request.py) with the
network boundary (transport.py) and maps the service's answer through
outcome.py.

    assertion + signed_data + sig_info
        → build_signed_payload      (what the device signed)
        → normalize_signature       (legacy layout fix-up)
        → VerificationRequest       (JSON body)
        → transport.post            (network)
        → classify_status           (Outcome)

Failure classes stay disjoint:
    - Input errors raise ``InvalidInputError`` before any network call.
    - Transport faults never escape; they become UNKNOWN_ERROR.
    - Service statuses are returned as Outcome values.

Stateless: an EpidVerifier holds only its config and transport, and may
be shared across threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from epid_verifier.assertion import SchemeType, SignatureAssertion, SigInfo
from epid_verifier.config import VerifierConfig
from epid_verifier.constants import (
    EPID_11,
    EPID_PROOF_URI_PATH,
    EPID_PROTOCOL_VERSION_V1,
    URL_PATH_SEPARATOR,
)
from epid_verifier.errors import InvalidInputError, UnsupportedSchemeError
from epid_verifier.outcome import Outcome, classify_status
from epid_verifier.payload import build_signed_payload
from epid_verifier.request import VerificationRequest
from epid_verifier.signature import classify_signature, normalize_signature
from epid_verifier.transport import HttpxTransport, VerificationTransport

logger = logging.getLogger(__name__)

# Both EPID 1.0 and 1.1 proofs go to the epid11 endpoint.
_ENDPOINT_PATHS: dict[SchemeType, tuple[str, ...]] = {
    SchemeType.EPID10: (EPID_PROTOCOL_VERSION_V1, EPID_11, EPID_PROOF_URI_PATH),
    SchemeType.EPID11: (EPID_PROTOCOL_VERSION_V1, EPID_11, EPID_PROOF_URI_PATH),
}


@dataclass(frozen=True)
class VerificationResult:
    """Result of one verification attempt.

    Attributes:
        outcome: Terminal outcome.
        status_code: HTTP status from the service. None if the request
            never completed (the outcome is then UNKNOWN_ERROR).
        url: Endpoint the request was sent to, if it was resolved.
        detail: Human-readable transport failure detail, if any.
    """

    outcome: Outcome
    status_code: int | None = None
    url: str | None = None
    detail: str | None = None

    @property
    def transport_failed(self) -> bool:
        return self.status_code is None


def resolve_endpoint(base_url: str, scheme: SchemeType) -> str:
    """Resolve the proof endpoint for ``scheme`` against ``base_url``.

    The path is absolute, so it replaces any path already on the base.

    Raises:
        httpx.InvalidURL: If ``base_url`` cannot be parsed.
    """
    path = URL_PATH_SEPARATOR.join(_ENDPOINT_PATHS[scheme])
    return str(httpx.URL(base_url).join(URL_PATH_SEPARATOR + path))


def build_request(
    assertion: SignatureAssertion,
    signed_data: bytes,
    sig_info: SigInfo,
) -> VerificationRequest:
    """Shape the verifier request for an assertion. No I/O.

    Raises:
        InvalidInputError: If the assertion cannot be encoded.
        UnsupportedSchemeError: If ``sig_info`` is not an EPID scheme.
    """
    if sig_info.scheme is None:
        raise UnsupportedSchemeError(sig_info.sg_type)

    msg = build_signed_payload(
        assertion.unprotected,
        assertion.nonce(),
        signed_data,
        sig_info.sg_type,
    )
    if msg is None:
        raise UnsupportedSchemeError(sig_info.sg_type)

    layout = classify_signature(assertion.signature)
    logger.debug(
        "EPID signature layout %s (%d bytes)", layout, len(assertion.signature)
    )
    return VerificationRequest(
        group_id=sig_info.group_id,
        msg=msg,
        epid_signature=normalize_signature(assertion.signature),
    )


class EpidVerifier:
    """Sends EPID assertions to the remote verification service.

    Args:
        config: Service settings. Defaults to ``VerifierConfig()``.
        transport: Injectable transport for the POST. Defaults to an
            HttpxTransport built from ``config``, which ``close()``
            releases. Pass a fake for testing.
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        transport: VerificationTransport | None = None,
    ) -> None:
        self._config = config or VerifierConfig()
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            self._owned_transport = HttpxTransport(
                timeout_s=self._config.timeout_s,
                headers=self._config.headers,
            )
            transport = self._owned_transport
        self._transport: VerificationTransport = transport

    @property
    def config(self) -> VerifierConfig:
        return self._config

    def close(self) -> None:
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> EpidVerifier:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def verify(
        self,
        assertion: SignatureAssertion | None,
        signed_data: bytes,
        sig_info: SigInfo | None,
    ) -> Outcome:
        """Verify an EPID assertion and return the Outcome.

        Raises:
            InvalidInputError: If ``assertion`` or ``sig_info`` is None or
                cannot be encoded.
            UnsupportedSchemeError: If ``sig_info`` is not an EPID scheme.
        """
        return self.verify_detailed(assertion, signed_data, sig_info).outcome

    def verify_detailed(
        self,
        assertion: SignatureAssertion | None,
        signed_data: bytes,
        sig_info: SigInfo | None,
    ) -> VerificationResult:
        """Like ``verify``, but returns status and diagnostics as well."""
        if assertion is None or sig_info is None:
            raise InvalidInputError("signature assertion and SigInfo are required")

        scheme = sig_info.scheme
        if scheme is None:
            raise UnsupportedSchemeError(sig_info.sg_type)

        body = build_request(assertion, signed_data, sig_info).to_json()

        url: str | None = None
        try:
            url = resolve_endpoint(self._config.base_url, scheme)
            logger.debug("posting EPID proof for sgType %d to %s", scheme, url)
            status_code = self._transport.post(url, body)
        except Exception as exc:
            logger.warning("EPID verifier request failed: %s", exc)
            return VerificationResult(
                outcome=Outcome.UNKNOWN_ERROR,
                url=url,
                detail=f"request failed: {exc}",
            )

        outcome = classify_status(status_code)
        if outcome is not Outcome.VERIFIED:
            logger.warning("EPID verifier returned %d (%s)", status_code, outcome)
        return VerificationResult(outcome=outcome, status_code=status_code, url=url)


def verify(
    assertion: SignatureAssertion | None,
    signed_data: bytes,
    sig_info: SigInfo | None,
    *,
    config: VerifierConfig | None = None,
    transport: VerificationTransport | None = None,
) -> Outcome:
    """Verify an EPID assertion with a one-off EpidVerifier."""
    with EpidVerifier(config=config, transport=transport) as verifier:
        return verifier.verify(assertion, signed_data, sig_info)
