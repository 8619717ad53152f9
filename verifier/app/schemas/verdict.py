"""
Verdict schemas.

A Verdict is the client-side classification of one SignatureResult. A
ValidationOutcome wraps the ordered verdict sequence and makes the
"no signatures found" case explicit, so it can never be confused with
"signatures found but invalid".
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# The only indication value with client-side semantics. Every other
# value is an opaque failure label owned by the validation service.
TOTAL_PASSED = "TOTAL_PASSED"


class OutcomeStatus(str, Enum):
    SIGNATURES_EVALUATED = "signatures_evaluated"
    NO_SIGNATURES_FOUND = "no_signatures_found"


class Verdict(BaseModel):
    """Validity verdict for a single signature."""

    signature_index: int = Field(
        ...,
        ge=1,
        description="1-based position in the service's signature list",
    )

    is_valid: bool

    indication: str = Field(
        ...,
        description="Raw indication, retained regardless of validity",
    )

    reason: Optional[str] = Field(
        None,
        description="Sub-indication explaining a failure, if provided",
    )

    signed_by: Optional[str] = None
    signing_time: Optional[str] = None

    @model_validator(mode="after")
    def valid_has_no_reason(self):
        if self.is_valid and self.reason is not None:
            raise ValueError("a valid verdict cannot carry a failure reason")
        return self

    model_config = ConfigDict(frozen=True)


class ValidationOutcome(BaseModel):
    """Result of interpreting one validation report."""

    status: OutcomeStatus
    verdicts: List[Verdict] = Field(default_factory=list)

    @model_validator(mode="after")
    def status_matches_verdicts(self):
        if self.status == OutcomeStatus.NO_SIGNATURES_FOUND:
            if self.verdicts:
                raise ValueError(
                    "verdicts must be empty when no signatures were found"
                )
        elif not self.verdicts:
            raise ValueError(
                "at least one verdict is required when signatures "
                "were evaluated"
            )
        return self

    @property
    def signatures_found(self) -> bool:
        return self.status == OutcomeStatus.SIGNATURES_EVALUATED

    @property
    def all_valid(self) -> bool:
        return self.signatures_found and all(
            v.is_valid for v in self.verdicts
        )

    model_config = ConfigDict(frozen=True)
