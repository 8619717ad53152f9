"""
Validation report schemas.

The validation service returns a reports DTO whose human/application
oriented summary (the "simple report") either sits at the root of the
JSON document or is nested under ``simpleReport``, depending on the
service version. The signature collection inside it may be absent, a
single object, or a list.

Both ambiguities are resolved here, at parse time, into one canonical
shape:

    ValidationReport.simple_report.signatures -> List[SignatureResult]

Nothing downstream of this module branches on report shape. Fields the
interpreter cannot do without (``indication``) are required; parsing a
report that lacks them raises pydantic.ValidationError, which the
interpreter translates into ReportShapeError.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class SummaryLocation(str, Enum):
    """Where the simple report was found in the raw response."""

    ROOT = "root"
    NESTED = "nested"


class SignatureResult(BaseModel):
    """One signature (or timestamp) entry of the simple report."""

    id: Optional[str] = None
    signed_by: Optional[str] = None
    signing_time: Optional[str] = None
    signature_format: Optional[str] = None

    indication: str = Field(
        ...,
        description="Global outcome, e.g. TOTAL_PASSED or INDETERMINATE",
    )

    sub_indication: Optional[str] = Field(
        None,
        description="Failure detail, present only when not passed",
    )

    @field_validator("signing_time", mode="before")
    @classmethod
    def epoch_millis_to_iso(cls, v: Any) -> Any:
        # Jackson serializes dates as epoch milliseconds unless told otherwise.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            try:
                return datetime.fromtimestamp(
                    v / 1000, tz=timezone.utc
                ).isoformat()
            except (OverflowError, OSError, ValueError) as exc:
                # pydantic only turns ValueError into a validation error.
                raise ValueError(
                    f"signingTime out of range: {v!r}"
                ) from exc
        return v

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class SimpleReport(BaseModel):
    """Summary section of the validation report."""

    signatures: List[SignatureResult] = Field(
        default_factory=list,
        alias="signatureOrTimestamp",
        description="Signature entries in the order returned by the service",
    )

    document_name: Optional[str] = None
    signatures_count: Optional[int] = None
    valid_signatures_count: Optional[int] = None

    @field_validator("signatures", mode="before")
    @classmethod
    def normalize_signature_collection(cls, v: Any) -> Any:
        """
        Accept absent/null, a single entry, or a list of entries.

        Anything else is passed through unchanged so pydantic rejects it.
        """
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class ValidationReport(BaseModel):
    """
    Canonical, shape-normalized view of a validation report.

    ``summary_location`` records which of the two accepted layouts the
    service used.
    """

    simple_report: SimpleReport
    summary_location: SummaryLocation

    @model_validator(mode="before")
    @classmethod
    def resolve_summary_root(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError(
                f"validation report must be a JSON object, "
                f"got {type(data).__name__}"
            )

        nested = data.get("simpleReport")
        if nested is None:
            return {
                "simpleReport": data,
                "summaryLocation": SummaryLocation.ROOT,
            }

        return {
            "simpleReport": nested,
            "summaryLocation": SummaryLocation.NESTED,
        }

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
