"""
Validation request schemas.

Defines the JSON body accepted by a DSS-style ``validateSignature``
endpoint. Python attribute names are snake_case; the wire names are the
camelCase names the service expects. Unset optional fields are
serialized as explicit ``null`` so that the service applies its own
defaults.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class EncodedDocument(BaseModel):
    """
    A document in transport-safe form.

    ``content`` travels on the wire as ``bytes`` and holds the base64
    encoding of the raw file. ``digest_algorithm`` stays unset so the
    service derives it.
    """

    content: str = Field(
        ...,
        alias="bytes",
        description="Base64 encoding of the raw document bytes",
    )

    digest_algorithm: Optional[str] = Field(
        None,
        description="Digest algorithm, left to the service when unset",
    )

    name: str = Field(
        ...,
        description="Base name of the source file",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ValidationParameters(BaseModel):
    """
    Optional knobs for a validation request.

    Every field defaults to "unset", meaning the service's own policy and
    version decide. Values are passed through without client-side checks.
    """

    original_documents: List[EncodedDocument] = Field(
        default_factory=list,
        description="Original content for detached signatures, in order",
    )

    policy: Optional[EncodedDocument] = Field(
        None,
        description="Custom validation policy document",
    )

    signature_id: Optional[str] = Field(
        None,
        description="Restrict validation to a single signature",
    )

    level: Optional[str] = Field(
        None,
        description="Validation level, e.g. BASIC_SIGNATURES or ARCHIVAL_DATA",
    )

    model_config = ConfigDict(frozen=True)


class ValidationRequest(BaseModel):
    """Request body for the remote validation service."""

    signed_document: EncodedDocument
    original_documents: List[EncodedDocument] = Field(default_factory=list)
    policy: Optional[EncodedDocument] = None
    signature_id: Optional[str] = None
    level: Optional[str] = None

    @model_validator(mode="after")
    def signed_document_not_empty(self):
        if not self.signed_document.content:
            raise ValueError("signedDocument must carry non-empty bytes")
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the wire shape, keeping unset fields as nulls."""
        return self.model_dump(mode="json", by_alias=True)

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
