"""
Exception taxonomy for the EPID verifier adapter.

Three disjoint failure classes:
    - Input errors (``InvalidInputError``): verification could not even be
      attempted. Raised to the caller.
    - Transport faults (``TransportError``): raised by transports, caught
      by the verifier and reported as ``Outcome.UNKNOWN_ERROR``.
    - Verifier-reported statuses: not exceptions at all, see ``outcome``.
"""

from __future__ import annotations

from typing import Any

from epid_verifier.outcome import Outcome


class EpidVerifierError(Exception):
    """Base class for all adapter errors."""


class InvalidInputError(EpidVerifierError, ValueError):
    """The assertion or SigInfo cannot be turned into a verifier request.

    Attributes:
        outcome_hint: The Outcome a service would have reported for this
            input. Always MALFORMED_REQUEST; never returned by ``verify``.
        details: Structured context for diagnostics.
    """

    outcome_hint = Outcome.MALFORMED_REQUEST

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class UnsupportedSchemeError(InvalidInputError):
    """SigInfo names a signature scheme that is not an EPID variant."""

    def __init__(self, sg_type: int) -> None:
        super().__init__(
            f"unsupported EPID sgType: {sg_type}",
            details={"sg_type": sg_type},
        )
        self.sg_type = sg_type


class TransportError(EpidVerifierError):
    """The request did not complete (connection, TLS, timeout, bad URL)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url
