"""
Signature verification pipeline.

IMPORTANT:
The pipeline is a DUMB DRIVER.

It MUST NOT:
- interpret indications
- retry or loop
- decide process exit status

Its sole responsibilities are:
- enforcing execution order (encode -> build -> submit -> interpret)
- tracking the per-invocation stage
- stamping the failing stage onto any VerifierError before re-raising
"""

from __future__ import annotations

import logging
from enum import Enum
from os import PathLike
from typing import Any, Optional, Protocol, Sequence, Union

from verifier.app.core.errors import VerifierError
from verifier.app.schemas.validation_request import (
    ValidationParameters,
    ValidationRequest,
)
from verifier.app.schemas.verdict import ValidationOutcome
from verifier.app.services.document_encoder import encode_document
from verifier.app.services.report_interpreter import interpret_report
from verifier.app.services.request_builder import build_validation_request

logger = logging.getLogger("verifier.pipeline")

PathArg = Union[str, PathLike]


class PipelineStage(str, Enum):
    """
    Per-invocation state machine.

    INIT -> ENCODED -> REQUEST_BUILT -> SUBMITTED -> REPORT_RECEIVED
    -> INTERPRETED. FAILED is reachable from every state.
    """

    INIT = "init"
    ENCODED = "encoded"
    REQUEST_BUILT = "request_built"
    SUBMITTED = "submitted"
    REPORT_RECEIVED = "report_received"
    INTERPRETED = "interpreted"
    FAILED = "failed"


class ValidationService(Protocol):
    async def validate(self, request: ValidationRequest) -> Any:
        ...


class SignatureVerificationPipeline:
    """Single-shot verification of one document against one service."""

    def __init__(self, validation_client: ValidationService) -> None:
        self._client = validation_client
        self.stage = PipelineStage.INIT

    def _advance(self, stage: PipelineStage) -> None:
        logger.debug("stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    async def run(
        self,
        document_path: PathArg,
        *,
        original_paths: Sequence[PathArg] = (),
        policy_path: Optional[PathArg] = None,
        signature_id: Optional[str] = None,
        level: Optional[str] = None,
    ) -> ValidationOutcome:
        if self.stage != PipelineStage.INIT:
            raise RuntimeError("pipeline instances are single-use")

        try:
            signed_document = encode_document(document_path)
            parameters = ValidationParameters(
                original_documents=[
                    encode_document(p) for p in original_paths
                ],
                policy=(
                    encode_document(policy_path)
                    if policy_path is not None
                    else None
                ),
                signature_id=signature_id,
                level=level,
            )
            self._advance(PipelineStage.ENCODED)

            request = build_validation_request(signed_document, parameters)
            self._advance(PipelineStage.REQUEST_BUILT)

            self._advance(PipelineStage.SUBMITTED)
            report = await self._client.validate(request)
            self._advance(PipelineStage.REPORT_RECEIVED)

            outcome = interpret_report(report)
            self._advance(PipelineStage.INTERPRETED)

        except VerifierError as exc:
            exc.stage = self.stage.value
            logger.warning(
                "pipeline failed after stage %s: %s",
                self.stage.value,
                type(exc).__name__,
            )
            self._advance(PipelineStage.FAILED)
            raise

        logger.info(
            "interpreted %d verdict(s), status=%s",
            len(outcome.verdicts),
            outcome.status.value,
        )
        return outcome
