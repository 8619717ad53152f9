"""
Validation request construction.

Assembles the request body from an encoded document and optional
ValidationParameters. Nothing is defaulted to a concrete value here:
unset parameters stay null so the service's own policy decides.
"""

from __future__ import annotations

from typing import Optional

from verifier.app.schemas.validation_request import (
    EncodedDocument,
    ValidationParameters,
    ValidationRequest,
)


def build_validation_request(
    signed_document: EncodedDocument,
    parameters: Optional[ValidationParameters] = None,
) -> ValidationRequest:
    parameters = parameters or ValidationParameters()

    return ValidationRequest(
        signed_document=signed_document,
        original_documents=list(parameters.original_documents),
        policy=parameters.policy,
        signature_id=parameters.signature_id,
        level=parameters.level,
    )
