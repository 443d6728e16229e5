"""ECDSA P-256 / SHA-256 verification over fixed-length signatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from peer_manifest.errors import SignatureVerificationError

ECDSA_P256_SHA256_FIXED: Literal["ECDSA_P256_SHA256_FIXED"] = "ECDSA_P256_SHA256_FIXED"

# r || s, each a 32-byte big-endian scalar.
P256_FIXED_SIGNATURE_LENGTH = 64
# 0x04 || X || Y
P256_UNCOMPRESSED_POINT_LENGTH = 65
_UNCOMPRESSED_POINT_TAG = 0x04


@dataclass(frozen=True)
class BatchSigningKey:
    """Verifier bound to ECDSA P-256 with SHA-256 and raw key bytes.

    The point is only decoded when verifying, so a key whose SPKI header was
    valid but whose point is not on the curve simply fails every verification.
    """

    raw_key_bytes: bytes = field(repr=False)
    algorithm: Literal["ECDSA_P256_SHA256_FIXED"] = ECDSA_P256_SHA256_FIXED

    def _public_key(self) -> ec.EllipticCurvePublicKey:
        raw = self.raw_key_bytes
        if len(raw) != P256_UNCOMPRESSED_POINT_LENGTH or raw[0] != _UNCOMPRESSED_POINT_TAG:
            raise SignatureVerificationError(
                "Public key is not an uncompressed P-256 point.",
                details={"key_length": len(raw)},
            )
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), raw)
        except ValueError as e:
            raise SignatureVerificationError(
                "Public key is not a valid P-256 point.",
                details={"cause": str(e)},
            ) from e

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a fixed-length (r || s) signature over ``message``.

        Returns:
            True when the signature is valid.

        Raises:
            SignatureVerificationError: If the signature is malformed or does not verify.
        """
        if len(signature) != P256_FIXED_SIGNATURE_LENGTH:
            raise SignatureVerificationError(
                f"ECDSA P-256 fixed signature must be {P256_FIXED_SIGNATURE_LENGTH} bytes, "
                f"got {len(signature)}.",
                details={"signature_length": len(signature)},
            )
        public_key = self._public_key()
        half = P256_FIXED_SIGNATURE_LENGTH // 2
        r = int.from_bytes(signature[:half], "big")
        s = int.from_bytes(signature[half:], "big")
        try:
            public_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature as e:
            raise SignatureVerificationError(
                "Signature verification failed: content may have been tampered with "
                "or was signed by a different key.",
                details={},
            ) from e
        return True

    def is_valid_signature(self, message: bytes, signature: bytes) -> bool:
        """Boolean form of :meth:`verify`."""
        try:
            return self.verify(message, signature)
        except SignatureVerificationError:
            return False
