"""
PEM textual encoding (RFC 7468).

A PEM block is a label plus base64 encoded DER between BEGIN/END lines.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Self

from encrypted_pkcs8.exceptions import MalformedStructureError

_LINE_LENGTH = 64
_PEM_PATTERN = re.compile(
    r"-----BEGIN ([^-\r\n]*)-----\s*(.*?)\s*-----END ([^-\r\n]*)-----",
    re.DOTALL,
)


@dataclass(frozen=True)
class PEM:
    """
    A single PEM block.

    Attributes:
        type: Label found in the BEGIN/END lines, e.g. "ENCRYPTED PRIVATE KEY".
        data: Decoded DER payload.
    """

    TYPE_PRIVATE_KEY: ClassVar[str] = "PRIVATE KEY"
    TYPE_ENCRYPTED_PRIVATE_KEY: ClassVar[str] = "ENCRYPTED PRIVATE KEY"

    type: str
    data: bytes

    @classmethod
    def from_string(cls, text: str) -> Self:
        """
        Parse the first PEM block found in text.

        Args:
            text: PEM text, surrounding content is ignored.

        Returns:
            Parsed PEM block.

        Raises:
            MalformedStructureError: If no valid block is found.
        """
        match = _PEM_PATTERN.search(text)
        if match is None:
            raise MalformedStructureError("No PEM block found")

        label, body, end_label = match.groups()
        if label != end_label:
            msg = "PEM BEGIN and END labels differ"
            raise MalformedStructureError(msg, begin=label, end=end_label)

        try:
            data = base64.b64decode("".join(body.split()), validate=True)
        except binascii.Error as e:
            msg = f"Invalid PEM base64 body: {e}"
            raise MalformedStructureError(msg, label=label) from e
        return cls(type=label, data=data)

    @classmethod
    def from_file(cls, path: str | Path) -> Self:
        """Read and parse a PEM file."""
        return cls.from_string(Path(path).read_text(encoding="ascii"))

    def to_string(self) -> str:
        """Encode as PEM text with 64 column lines and a trailing newline."""
        b64 = base64.b64encode(self.data).decode("ascii")
        lines = [b64[i : i + _LINE_LENGTH] for i in range(0, len(b64), _LINE_LENGTH)]
        body = "".join(f"{line}\n" for line in lines)
        return f"-----BEGIN {self.type}-----\n{body}-----END {self.type}-----\n"

    def __str__(self) -> str:
        return self.to_string()
