"""Specific manifest models.

A specific manifest is the document a data share processor publishes so its
peers know where its buckets live and which keys it uses. Field names on the
wire are hyphenated and must not change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import Field, StrictInt, StrictStr

from peer_manifest.models.base import ManifestBaseModel

if TYPE_CHECKING:
    from peer_manifest.crypto.verifier import BatchSigningKey

SUPPORTED_MANIFEST_FORMAT = 0
"""The only manifest format version accepted by the loader."""

ManifestFormat = Annotated[StrictInt, Field(ge=0, le=2**32 - 1)]


class BatchSigningPublicKey(ManifestBaseModel):
    """A batch signing public key entry."""

    public_key: StrictStr = Field(
        ...,
        alias="public-key",
        description=(
            "PEM-armored base64 encoding of the ASN.1 encoding of the PKIX "
            "SubjectPublicKeyInfo structure of an ECDSA P256 key."
        ),
    )
    expiration: StrictStr = Field(
        ...,
        description="ISO 8601 encoded UTC date at which this key expires (not validated).",
    )


class PacketEncryptionCertificate(ManifestBaseModel):
    """A packet encryption certificate entry, carried through unparsed."""

    certificate: StrictStr = Field(
        ...,
        description=(
            "PEM-armored base64 encoding of the ASN.1 encoding of an X.509 "
            "certificate containing an ECDSA P256 key."
        ),
    )


class SpecificManifest(ManifestBaseModel):
    """Configuration parameters a peer data share processor publishes.

    The format gate (``format == SUPPORTED_MANIFEST_FORMAT``) is applied by
    the loader, not here, so a schema failure and an unsupported version
    stay distinguishable.

    Attributes:
        format: Format version of the manifest.
        ingestion_bucket: Region and name of the peer's ingestion bucket.
        peer_validation_bucket: Region and name of the peer's validation bucket.
        batch_signing_public_keys: Keys the peer uses to sign batches.
        packet_encryption_certificates: Certificates whose keys encrypt
            ingestion share packets intended for the peer.
    """

    format: ManifestFormat = Field(..., description="Manifest format version")
    ingestion_bucket: StrictStr = Field(..., alias="ingestion-bucket")
    peer_validation_bucket: StrictStr = Field(..., alias="peer-validation-bucket")
    batch_signing_public_keys: dict[StrictStr, BatchSigningPublicKey] = Field(
        ...,
        alias="batch-signing-public-keys",
    )
    packet_encryption_certificates: dict[StrictStr, PacketEncryptionCertificate] = Field(
        ...,
        alias="packet-encryption-certificates",
    )

    def to_json(self, indent: int | None = None) -> str:
        """Serialize with the wire field names."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def batch_signing_public_key(self, identifier: str) -> BatchSigningKey:
        """Return the verifier for the batch signing key ``identifier``.

        See :func:`peer_manifest.manifest.resolver.resolve_batch_signing_key`.
        """
        from peer_manifest.manifest.resolver import resolve_batch_signing_key

        return resolve_batch_signing_key(self, identifier)

    def packet_encryption_certificate(self, identifier: str) -> str:
        """Return the PEM certificate string for ``identifier`` without parsing it."""
        from peer_manifest.manifest.resolver import get_packet_encryption_certificate

        return get_packet_encryption_certificate(self, identifier)
