"""Key lookup within a specific manifest."""

from __future__ import annotations

from peer_manifest.crypto.pem import PUBLIC_KEY_TAG, decode_pem
from peer_manifest.crypto.spki import extract_ecdsa_p256_point
from peer_manifest.crypto.verifier import BatchSigningKey
from peer_manifest.errors import PemParseError, UnknownKeyError, WrongPemTagError
from peer_manifest.models.manifest import SpecificManifest
from peer_manifest.observability import get_logger, log_context

logger = get_logger(__name__)


def resolve_batch_signing_key(manifest: SpecificManifest, identifier: str) -> BatchSigningKey:
    """Return the ECDSA P-256 verifier for the batch signing key ``identifier``.

    The entry's PEM must be labelled ``PUBLIC KEY`` and its contents must start
    with the fixed ECDSA P-256 SubjectPublicKeyInfo header; everything after the
    header is taken as the raw EC point. The PEM is decoded on every call.

    Raises:
        UnknownKeyError: No entry for ``identifier``.
        PemParseError: The entry is not valid PEM.
        WrongPemTagError: The PEM label is not ``PUBLIC KEY``.
        TruncatedKeyError: The contents are shorter than the SPKI header.
        UnrecognizedKeyTypeError: The contents are not a P-256 SPKI.
    """
    entry = manifest.batch_signing_public_keys.get(identifier)
    if entry is None:
        raise UnknownKeyError(identifier)

    with log_context(identifier=identifier):
        try:
            pem = decode_pem(entry.public_key)
        except PemParseError as e:
            raise PemParseError(e.reason, identifier=identifier) from e

        if pem.tag != PUBLIC_KEY_TAG:
            logger.warning("manifest.key.wrong_pem_tag", expected=PUBLIC_KEY_TAG, observed=pem.tag)
            raise WrongPemTagError(
                expected=PUBLIC_KEY_TAG, observed=pem.tag, identifier=identifier
            )

        raw_key_bytes = extract_ecdsa_p256_point(pem.contents, identifier=identifier)
        logger.debug("manifest.key.resolved", expiration=entry.expiration)
    return BatchSigningKey(raw_key_bytes=raw_key_bytes)


def get_packet_encryption_certificate(manifest: SpecificManifest, identifier: str) -> str:
    """Return the certificate string for ``identifier`` exactly as published.

    Raises:
        UnknownKeyError: No entry for ``identifier``.
    """
    entry = manifest.packet_encryption_certificates.get(identifier)
    if entry is None:
        raise UnknownKeyError(identifier, kind="packet-encryption-certificates")
    return entry.certificate
