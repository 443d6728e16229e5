"""PEM armor decoding (RFC 7468 textual encoding)."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from peer_manifest.errors import PemParseError

# Label of a PKIX SubjectPublicKeyInfo block.
PUBLIC_KEY_TAG = "PUBLIC KEY"

_PEM_BLOCK = re.compile(
    r"-----BEGIN (?P<begin>[^\r\n]*?)-----"
    r"(?P<body>.*?)"
    r"-----END (?P<end>[^\r\n]*?)-----",
    re.DOTALL,
)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class DecodedPem:
    """Label and binary payload of a single PEM block."""

    tag: str
    contents: bytes


def decode_pem(data: str | bytes) -> DecodedPem:
    """Decode the first PEM block in ``data``.

    Surrounding text, ``\\r\\n`` line endings and arbitrary line wrapping of the
    base64 body are tolerated. The BEGIN and END labels must match and the body
    must be strict base64.

    Raises:
        PemParseError: If no well-formed block is found or the body is not base64.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise PemParseError("input is not ASCII") from e
    else:
        text = data
        if not text.isascii():
            raise PemParseError("input is not ASCII")

    match = _PEM_BLOCK.search(text)
    if match is None:
        raise PemParseError("no PEM block found")

    begin, end = match.group("begin"), match.group("end")
    if begin != end:
        raise PemParseError(
            f"mismatched PEM tags: BEGIN {begin!r}, END {end!r}",
        )

    body = _WHITESPACE.sub("", match.group("body"))
    try:
        contents = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise PemParseError(f"invalid base64 body: {e}") from e
    return DecodedPem(tag=begin, contents=contents)
