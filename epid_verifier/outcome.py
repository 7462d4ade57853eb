"""
Verifier status mapping — translates HTTP status codes to Outcome.

The mapping is closed and total: every status, including a missing one
(the request never completed), lands in exactly one Outcome. Unknown
codes default to UNKNOWN_ERROR rather than guessing.

Status meanings on the verification service:
    - 200: signature verified
    - 400: request body malformed
    - 403: signature invalid (or signer revoked)
    - 417: caller's SigRL is stale; refresh and retry
"""

from __future__ import annotations

from enum import StrEnum
from http import HTTPStatus


class Outcome(StrEnum):
    """Terminal result of one verification attempt."""

    VERIFIED = "VERIFIED"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    OUTDATED_SIGRL = "OUTDATED_SIGRL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @property
    def is_retryable(self) -> bool:
        """True when the caller may retry after refreshing its SigRL."""
        return self is Outcome.OUTDATED_SIGRL


_STATUS_MAP: dict[int, Outcome] = {
    HTTPStatus.OK: Outcome.VERIFIED,
    HTTPStatus.BAD_REQUEST: Outcome.MALFORMED_REQUEST,
    HTTPStatus.FORBIDDEN: Outcome.INVALID_SIGNATURE,
    HTTPStatus.EXPECTATION_FAILED: Outcome.OUTDATED_SIGRL,
}


def classify_status(status_code: int | None) -> Outcome:
    """Map a verifier HTTP status code to an Outcome.

    Args:
        status_code: HTTP status returned by the transport. None means
            no response was received.

    Returns:
        Outcome. UNKNOWN_ERROR for unrecognized codes or None.
    """
    if status_code is None:
        return Outcome.UNKNOWN_ERROR
    return _STATUS_MAP.get(status_code, Outcome.UNKNOWN_ERROR)
