"""ECDSA P-256 SubjectPublicKeyInfo validation.

The PKIX DER encoding of an uncompressed P-256 public key is always 91 bytes:
a fixed 26-byte header followed by the 65-byte EC point. Rather than parsing
DER, we check the header byte for byte and hand the remainder to the
signature primitive as the raw point.

Header layout::

    30 59                               SEQUENCE (89 bytes)
       30 13                            SEQUENCE (19 bytes) AlgorithmIdentifier
          06 07 2a 86 48 ce 3d 02 01    OID 1.2.840.10045.2.1 (id-ecPublicKey)
          06 08 2a 86 48 ce 3d 03 01 07 OID 1.2.840.10045.3.1.7 (prime256v1)
       03 42 00                         BIT STRING (66 bytes, 0 unused bits)
"""

from __future__ import annotations

from peer_manifest.errors import TruncatedKeyError, UnrecognizedKeyTypeError

ECDSA_P256_SPKI_PREFIX = bytes(
    [
        0x30, 0x59, 0x30, 0x13, 0x06, 0x07, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x02, 0x01,
        0x06, 0x08, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x03, 0x01, 0x07, 0x03, 0x42, 0x00,
    ]
)  # fmt: skip


def extract_ecdsa_p256_point(contents: bytes, identifier: str | None = None) -> bytes:
    """Return the raw EC point that follows the P-256 SPKI header.

    Args:
        contents: Binary payload of a ``PUBLIC KEY`` PEM block.
        identifier: Manifest key identifier, used only in error context.

    Raises:
        TruncatedKeyError: If ``contents`` is shorter than the header.
        UnrecognizedKeyTypeError: If the header does not match byte for byte.
    """
    prefix_len = len(ECDSA_P256_SPKI_PREFIX)
    if len(contents) < prefix_len:
        raise TruncatedKeyError(
            expected_min_length=prefix_len,
            observed_length=len(contents),
            identifier=identifier,
        )
    if contents[:prefix_len] != ECDSA_P256_SPKI_PREFIX:
        raise UnrecognizedKeyTypeError(identifier=identifier)
    return bytes(contents[prefix_len:])
