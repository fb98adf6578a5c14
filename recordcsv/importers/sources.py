"""
Input acquisition for CSV parsing.

Turns whatever the caller hands over (text, bytes, a readable stream, or an
uploaded file in the legacy spreadsheet encoding) into text. Undecodable
bytes are replaced, never raised.
"""
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Optional, Union

from recordcsv.core.config import settings

logger = logging.getLogger(__name__)

REPLACEMENT_CHARACTER = "\ufffd"


@dataclass
class UploadedFile:
    """
    Marker for a raw uploaded byte stream.

    Uploaded spreadsheets are read as bytes in the legacy upload encoding
    regardless of the encoding requested for other inputs. The stream stays
    owned by the caller.
    """

    file: BinaryIO
    filename: Optional[str] = None
    content_type: Optional[str] = None

    def read(self) -> bytes:
        return self.file.read()


CsvInput = Union[str, bytes, UploadedFile, Any]


def decode_bytes(data: bytes, encoding: str) -> str:
    """Decode bytes, replacing invalid and unmappable sequences."""
    text = data.decode(encoding, errors="replace")
    if REPLACEMENT_CHARACTER in text:
        logger.warning(f"Replaced undecodable bytes while reading {encoding} input")
    return text


def read_input(source: CsvInput, encoding: Optional[str] = None) -> str:
    """
    Read a CSV source into text.

    Args:
        source: Text, bytes, UploadedFile, or any object with read()
        encoding: Encoding of bytes input (default: settings.IMPORT_ENCODING)

    Returns:
        Document text without a leading byte order mark
    """
    encoding = encoding or settings.IMPORT_ENCODING

    if isinstance(source, UploadedFile):
        text = decode_bytes(source.read(), settings.UPLOAD_ENCODING)
    elif isinstance(source, (bytes, bytearray)):
        text = decode_bytes(bytes(source), encoding)
    elif isinstance(source, str):
        text = source
    elif hasattr(source, "read"):
        content = source.read()
        if isinstance(content, (bytes, bytearray)):
            text = decode_bytes(bytes(content), encoding)
        else:
            text = content
    else:
        raise TypeError(
            f"Cannot read CSV from {type(source).__name__}; "
            "expected str, bytes, UploadedFile or a readable stream"
        )

    if text.startswith("\ufeff"):
        text = text[1:]
    return text
