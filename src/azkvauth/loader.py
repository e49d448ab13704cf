from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import AADConfig
from .exceptions import DecodeError, ParseError

logger = logging.getLogger(__name__)

_UTF16_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def decode(data: bytes) -> bytes:
    """Return ``data`` as UTF-8, transcoding it first if it is UTF-16.

    UTF-16 is detected by its byte order mark, which is dropped along with a
    UTF-8 byte order mark. Bytes without a byte order mark are returned as-is.

    Raises:
        DecodeError: If the UTF-16 payload cannot be decoded.
    """
    for bom, encoding in _UTF16_BOMS:
        if data.startswith(bom):
            logger.debug("Transcoding %s authentication file to utf-8", encoding)
            try:
                return data[len(bom) :].decode(encoding).encode("utf-8")
            except UnicodeError as e:
                raise DecodeError(
                    f"failed to decode Azure authentication file bytes: {e}"
                ) from e
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8) :]
    return data


def _parse(data: bytes) -> dict[str, Any]:
    doc = yaml.safe_load(data)
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ValueError(f"top-level document must be a mapping, got: {type(doc).__name__}")
    return doc


def load_config(data: bytes) -> AADConfig:
    """Load the bytes of an Azure authentication file into an :class:`AADConfig`.

    Args:
        data: YAML or JSON document, UTF-8 or UTF-16 encoded.

    Returns:
        The populated configuration. Unknown fields are ignored.

    Raises:
        DecodeError: If the bytes are UTF-16 but cannot be transcoded.
        ParseError: If the document is malformed or a field has the wrong type.
    """
    decoded = decode(data)
    try:
        return AADConfig.model_validate(_parse(decoded))
    except (yaml.YAMLError, ValueError, ValidationError) as e:
        raise ParseError(f"failed to unmarshal Azure authentication file: {e}") from e


def load_config_file(path: str | Path) -> AADConfig:
    """Read an Azure authentication file from disk and load it.

    Raises:
        OSError: If the file cannot be read.
    """
    return load_config(Path(path).read_bytes())
