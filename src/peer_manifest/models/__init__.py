"""Manifest data models."""

from peer_manifest.models.base import ManifestBaseModel
from peer_manifest.models.manifest import (
    SUPPORTED_MANIFEST_FORMAT,
    BatchSigningPublicKey,
    PacketEncryptionCertificate,
    SpecificManifest,
)

__all__ = [
    "BatchSigningPublicKey",
    "ManifestBaseModel",
    "PacketEncryptionCertificate",
    "SUPPORTED_MANIFEST_FORMAT",
    "SpecificManifest",
]
