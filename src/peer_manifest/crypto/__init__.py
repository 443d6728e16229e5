"""Key material handling for peer manifests.

- pem: PEM armor decoding
- spki: ECDSA P-256 SubjectPublicKeyInfo header validation
- verifier: fixed-length ECDSA P-256 / SHA-256 signature verification

Public exports:
    DecodedPem, decode_pem, PUBLIC_KEY_TAG
    ECDSA_P256_SPKI_PREFIX, extract_ecdsa_p256_point
    BatchSigningKey, ECDSA_P256_SHA256_FIXED
"""

from peer_manifest.crypto.pem import PUBLIC_KEY_TAG, DecodedPem, decode_pem
from peer_manifest.crypto.spki import ECDSA_P256_SPKI_PREFIX, extract_ecdsa_p256_point
from peer_manifest.crypto.verifier import ECDSA_P256_SHA256_FIXED, BatchSigningKey

__all__ = [
    "BatchSigningKey",
    "DecodedPem",
    "ECDSA_P256_SHA256_FIXED",
    "ECDSA_P256_SPKI_PREFIX",
    "PUBLIC_KEY_TAG",
    "decode_pem",
    "extract_ecdsa_p256_point",
]
