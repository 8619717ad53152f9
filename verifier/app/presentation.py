"""
Console rendering of verification outcomes and errors.

Results go to stdout, errors to stderr; the caller decides which stream.
"""

from __future__ import annotations

from typing import List

from verifier.app.core.errors import (
    FileReadError,
    ServiceConnectionError,
    ServiceError,
    VerifierError,
)
from verifier.app.schemas.verdict import ValidationOutcome, Verdict

_RULE = "-" * 35


def render_outcome(outcome: ValidationOutcome) -> str:
    lines: List[str] = ["--- VALIDATION RESULTS ---", ""]

    if not outcome.signatures_found:
        lines.append("No signatures found in the document.")
        return "\n".join(lines)

    for verdict in outcome.verdicts:
        lines.extend(_render_verdict(verdict))
        lines.append(_RULE)

    return "\n".join(lines)


def _render_verdict(verdict: Verdict) -> List[str]:
    lines = [
        f"Signature #{verdict.signature_index}:",
        f"  Signed By: {verdict.signed_by or 'unknown'}",
        f"  Signing Time: {verdict.signing_time or 'unknown'}",
    ]

    if verdict.is_valid:
        lines.append(f"  Status: VALID ({verdict.indication})")
    else:
        lines.append(f"  Status: INVALID ({verdict.indication})")
        if verdict.reason:
            lines.append(f"  Reason: {verdict.reason}")

    return lines


def render_error(exc: VerifierError) -> str:
    if isinstance(exc, ServiceError):
        lines = [
            f"API Error: {exc.status_code} {exc.reason_phrase}".rstrip(),
            f"Endpoint: {exc.endpoint}",
        ]
        if exc.body:
            lines.append(exc.body)
        return "\n".join(lines)

    if isinstance(exc, ServiceConnectionError):
        return f"Connection Failed!\n{exc.message}"

    if isinstance(exc, FileReadError):
        return f"Error: {exc.message}"

    return f"Error ({type(exc).__name__}): {exc.message}"
