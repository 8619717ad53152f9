"""
Document encoding.

Turns a file on disk into an EncodedDocument: base64 content plus the
file's base name. Used for the signed document as well as detached
originals and custom policy files.
"""

from __future__ import annotations

import base64
import logging
from os import PathLike
from pathlib import Path
from typing import Union

from verifier.app.core.errors import FileReadError
from verifier.app.schemas.validation_request import EncodedDocument

logger = logging.getLogger("verifier.document_encoder")


def encode_document(path: Union[str, PathLike]) -> EncodedDocument:
    """
    Read ``path`` completely and return its transport-safe encoding.

    Raises:
        FileReadError: the path is missing, not a regular file,
            unreadable, or empty.
    """
    source = Path(path)

    try:
        raw = source.read_bytes()
    except FileNotFoundError as exc:
        raise FileReadError(str(path), "no such file") from exc
    except IsADirectoryError as exc:
        raise FileReadError(str(path), "is a directory") from exc
    except PermissionError as exc:
        raise FileReadError(str(path), "permission denied") from exc
    except OSError as exc:
        raise FileReadError(str(path), exc.strerror or str(exc)) from exc

    if not raw:
        raise FileReadError(str(path), "file is empty")

    logger.info("encoded %s (%d bytes)", source.name, len(raw))

    return EncodedDocument(
        content=base64.b64encode(raw).decode("ascii"),
        name=source.name,
    )
