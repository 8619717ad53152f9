"""
Error taxonomy for the signature verifier.

Every failure that can terminate an invocation is represented by a
VerifierError subclass. Components translate the low-level exceptions
they own (OSError, httpx errors, pydantic ValidationError) into one of
these types and chain the original with ``raise ... from exc``.

None of these exceptions decide the process exit status. That is the
responsibility of the single top-level driver in verifier.app.main.

"No signatures found" is a normal outcome and is NOT an error.
"""

from __future__ import annotations

from typing import Optional


class VerifierError(Exception):
    """
    Base class for all terminal verifier failures.

    ``stage`` is stamped by the pipeline with the name of the last state
    reached before the failure occurred.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.stage: Optional[str] = None


class UsageError(VerifierError):
    """The command line was incomplete. Raised before any work is done."""


class FileReadError(VerifierError):
    """The document (or an accompanying original/policy) could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read file '{path}': {reason}")
        self.path = path
        self.reason = reason


class ServiceConnectionError(VerifierError):
    """The validation service could not be reached at all."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(
            f"Could not connect to validation service at {endpoint}: "
            f"{reason}. Make sure the validation service is running "
            f"and reachable at this URL."
        )
        self.endpoint = endpoint
        self.reason = reason


class ServiceError(VerifierError):
    """
    The validation service answered with a non-2xx status.

    ``body`` is the raw response payload, kept verbatim for diagnosis.
    """

    def __init__(
        self,
        endpoint: str,
        status_code: int,
        reason_phrase: str,
        body: str,
    ) -> None:
        super().__init__(
            f"Validation service at {endpoint} returned "
            f"{status_code} {reason_phrase}".rstrip()
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.body = body


class TransportError(VerifierError):
    """Any other transport failure: timeouts, interrupted streams, non-JSON bodies."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(
            f"Transport failure talking to {endpoint}: {reason}"
        )
        self.endpoint = endpoint
        self.reason = reason


class ReportShapeError(VerifierError):
    """The validation report is missing fields the interpreter requires."""
