"""
Validation report interpretation.

Turns a raw validation report into a ValidationOutcome:

1. Parse into the canonical ValidationReport schema. This resolves the
   summary location (root or ``simpleReport``) and the signature
   collection shape (absent, single object, list).
2. Classify every SignatureResult in service order. A signature is valid
   if and only if its indication is exactly ``TOTAL_PASSED``. Anything
   else is a failure whose reason is the sub-indication, when given.
3. An empty collection yields NO_SIGNATURES_FOUND, never an empty
   SIGNATURES_EVALUATED outcome.

Failure indications are treated as opaque labels. No enumeration of
them is maintained client-side.
"""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import ValidationError

from verifier.app.core.errors import ReportShapeError
from verifier.app.schemas.simple_report import (
    SignatureResult,
    ValidationReport,
)
from verifier.app.schemas.verdict import (
    TOTAL_PASSED,
    OutcomeStatus,
    ValidationOutcome,
    Verdict,
)

logger = logging.getLogger("verifier.report_interpreter")


def parse_report(report: Any) -> ValidationReport:
    """Parse a raw report, raising ReportShapeError on malformed input."""
    try:
        return ValidationReport.model_validate(report)
    except ValidationError as exc:
        raise ReportShapeError(
            f"Validation report has an unexpected shape: "
            f"{exc.error_count()} error(s); {exc.errors()[0]['msg']} "
            f"at {_location(exc)}"
        ) from exc


def classify_signature(index: int, signature: SignatureResult) -> Verdict:
    is_valid = signature.indication == TOTAL_PASSED

    return Verdict(
        signature_index=index,
        is_valid=is_valid,
        indication=signature.indication,
        reason=None if is_valid else signature.sub_indication,
        signed_by=signature.signed_by,
        signing_time=signature.signing_time,
    )


def interpret_report(report: Any) -> ValidationOutcome:
    parsed = parse_report(report)
    signatures = parsed.simple_report.signatures

    logger.debug(
        "simple report located at %s with %d signature entries",
        parsed.summary_location.value,
        len(signatures),
    )

    if not signatures:
        return ValidationOutcome(status=OutcomeStatus.NO_SIGNATURES_FOUND)

    verdicts: List[Verdict] = [
        classify_signature(index, signature)
        for index, signature in enumerate(signatures, start=1)
    ]

    return ValidationOutcome(
        status=OutcomeStatus.SIGNATURES_EVALUATED,
        verdicts=verdicts,
    )


def _location(exc: ValidationError) -> str:
    loc = exc.errors()[0].get("loc", ())
    return ".".join(str(part) for part in loc) or "<root>"
