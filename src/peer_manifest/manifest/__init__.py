"""Specific manifest retrieval and key resolution.

Public exports:
    loader: fetch/read a manifest and validate it (manifest_url, load_from_*)
    resolver: turn manifest entries into verifiers or certificate strings
"""

from peer_manifest.manifest import loader
from peer_manifest.manifest import resolver
from peer_manifest.manifest.loader import (
    MANIFEST_FILENAME,
    load_from_bytes,
    load_from_file,
    load_from_https,
    manifest_url,
)
from peer_manifest.manifest.resolver import (
    get_packet_encryption_certificate,
    resolve_batch_signing_key,
)

__all__ = [
    "MANIFEST_FILENAME",
    "get_packet_encryption_certificate",
    "load_from_bytes",
    "load_from_file",
    "load_from_https",
    "loader",
    "manifest_url",
    "resolve_batch_signing_key",
    "resolver",
]
