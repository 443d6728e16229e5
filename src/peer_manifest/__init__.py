"""Peer manifest ingestion.

Fetches a peer data share processor's specific manifest, validates it, and
turns its batch signing public keys into ECDSA P-256 verifiers.

Example:
    >>> from peer_manifest import load_from_https, resolve_batch_signing_key
    >>>
    >>> manifest = load_from_https("https://manifests.example.com/", "peer-a")
    >>> key = resolve_batch_signing_key(manifest, "batch-signing-key-1")
    >>> key.verify(batch_bytes, signature)
"""

__version__ = "0.1.0"

from peer_manifest.crypto.verifier import ECDSA_P256_SHA256_FIXED, BatchSigningKey
from peer_manifest.errors import (
    AddressConstructionError,
    InvalidKeyError,
    PeerManifestError,
    PemParseError,
    RetrievalError,
    SchemaError,
    SignatureVerificationError,
    TruncatedKeyError,
    UnknownKeyError,
    UnrecognizedKeyTypeError,
    UnsupportedFormatError,
    WrongPemTagError,
)
from peer_manifest.manifest.loader import (
    load_from_bytes,
    load_from_file,
    load_from_https,
    manifest_url,
)
from peer_manifest.manifest.resolver import (
    get_packet_encryption_certificate,
    resolve_batch_signing_key,
)
from peer_manifest.models.manifest import (
    SUPPORTED_MANIFEST_FORMAT,
    BatchSigningPublicKey,
    PacketEncryptionCertificate,
    SpecificManifest,
)

__all__ = [
    "__version__",
    "AddressConstructionError",
    "BatchSigningKey",
    "BatchSigningPublicKey",
    "ECDSA_P256_SHA256_FIXED",
    "InvalidKeyError",
    "PacketEncryptionCertificate",
    "PeerManifestError",
    "PemParseError",
    "RetrievalError",
    "SUPPORTED_MANIFEST_FORMAT",
    "SchemaError",
    "SignatureVerificationError",
    "SpecificManifest",
    "TruncatedKeyError",
    "UnknownKeyError",
    "UnrecognizedKeyTypeError",
    "UnsupportedFormatError",
    "WrongPemTagError",
    "get_packet_encryption_certificate",
    "load_from_bytes",
    "load_from_file",
    "load_from_https",
    "manifest_url",
    "resolve_batch_signing_key",
]
