"""Peer Manifest Error Taxonomy.

This module defines the error hierarchy for specific manifest ingestion,
providing structured error handling with specific error codes and
context information.

Errors never carry raw key bytes; they identify the offending key by its
manifest identifier and describe the expected versus observed shape.
"""

from __future__ import annotations

from typing import Any


class PeerManifestError(Exception):
    """Base exception for all peer manifest errors.

    Attributes:
        code: Error code following the peer-manifest:<area>/<kind> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class RetrievalError(PeerManifestError):
    """Raised when a manifest cannot be fetched or read.

    Covers unreachable hosts, non-success HTTP statuses and unreadable files.

    Attributes:
        source: URL or filesystem path that was being read
        reason: Short description of the failure
    """

    def __init__(self, source: str, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Failed to retrieve manifest from {source}: {reason}"
        super().__init__(
            code="peer-manifest:retrieval/failed",
            message=message,
            details={"source": source, "reason": reason, **(details or {})},
        )
        self.source = source
        self.reason = reason


class AddressConstructionError(PeerManifestError):
    """Raised when a base URL and peer name cannot be composed into a manifest URL.

    Attributes:
        base_url: The base location supplied by the caller
        peer_name: The peer name supplied by the caller
        reason: Why the address could not be built
    """

    def __init__(
        self,
        base_url: str,
        peer_name: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Cannot build manifest URL from {base_url!r} and {peer_name!r}: {reason}"
        super().__init__(
            code="peer-manifest:retrieval/bad_address",
            message=message,
            details={
                "base_url": base_url,
                "peer_name": peer_name,
                "reason": reason,
                **(details or {}),
            },
        )
        self.base_url = base_url
        self.peer_name = peer_name
        self.reason = reason


class SchemaError(PeerManifestError):
    """Raised when a manifest document does not match the expected shape.

    Invalid JSON, missing required fields, wrong types and unknown fields
    all land here. No partial manifest is ever produced.

    Attributes:
        errors: List of ``{"loc": ..., "msg": ...}`` entries describing each failure
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        details: dict[str, Any] | None = None,
    ) -> None:
        summary = "; ".join(f"{e['loc']}: {e['msg']}" for e in errors[:3]) or "unknown error"
        if len(errors) > 3:
            summary += f" (+{len(errors) - 3} more)"
        super().__init__(
            code="peer-manifest:manifest/schema",
            message=f"Invalid specific manifest: {summary}",
            details={"errors": errors, **(details or {})},
        )
        self.errors = errors


class UnsupportedFormatError(PeerManifestError):
    """Raised when a well-formed manifest declares a format version we do not support.

    Attributes:
        format: The format version found in the document
        supported: The single supported format version
    """

    def __init__(self, format: int, supported: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="peer-manifest:manifest/unsupported_format",
            message=f"Unsupported manifest format {format} (supported: {supported})",
            details={"format": format, "supported": supported, **(details or {})},
        )
        self.format = format
        self.supported = supported


class UnknownKeyError(PeerManifestError):
    """Raised when an identifier is not present in the manifest.

    Attributes:
        identifier: The key identifier that was looked up
        kind: Which map was searched (batch signing keys or certificates)
    """

    def __init__(
        self,
        identifier: str,
        kind: str = "batch-signing-public-keys",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="peer-manifest:key/unknown",
            message=f"No value for key {identifier} in {kind}",
            details={"identifier": identifier, "kind": kind, **(details or {})},
        )
        self.identifier = identifier
        self.kind = kind


class InvalidKeyError(PeerManifestError):
    """Common base for key material that is present but structurally unusable.

    ``identifier`` is optional so pure decoding helpers can raise before the
    resolver knows which manifest entry is involved; the resolver re-raises
    with the identifier attached.
    """

    def __init__(
        self,
        code: str,
        message: str,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            details={"identifier": identifier, **(details or {})},
        )
        self.identifier = identifier


class PemParseError(InvalidKeyError):
    """Raised when PEM armor is missing, mismatched or carries invalid base64."""

    def __init__(
        self,
        reason: str,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        target = f"key entry {identifier}" if identifier is not None else "input"
        super().__init__(
            code="peer-manifest:key/pem_parse",
            message=f"Failed to parse {target} as PEM: {reason}",
            identifier=identifier,
            details={"reason": reason, **(details or {})},
        )
        self.reason = reason


class WrongPemTagError(InvalidKeyError):
    """Raised when a PEM block has a label other than the expected one.

    Related encodings such as ``EC PUBLIC KEY`` are rejected on purpose: only
    the generic SubjectPublicKeyInfo container is accepted.
    """

    def __init__(
        self,
        expected: str,
        observed: str,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        target = f"key for identifier {identifier}" if identifier is not None else "key"
        super().__init__(
            code="peer-manifest:key/wrong_pem_tag",
            message=(
                f"{target} is not a PEM encoded public key: "
                f"expected tag {expected!r}, got {observed!r}"
            ),
            identifier=identifier,
            details={"expected": expected, "observed": observed, **(details or {})},
        )
        self.expected = expected
        self.observed = observed


class TruncatedKeyError(InvalidKeyError):
    """Raised when PEM contents are too short to hold the SubjectPublicKeyInfo prefix."""

    def __init__(
        self,
        expected_min_length: int,
        observed_length: int,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="peer-manifest:key/truncated",
            message=(
                "PEM contents not long enough to contain ASN.1 encoded ECDSA P256 "
                f"SubjectPublicKeyInfo: {observed_length} < {expected_min_length} bytes"
            ),
            identifier=identifier,
            details={
                "expected_min_length": expected_min_length,
                "observed_length": observed_length,
                **(details or {}),
            },
        )
        self.expected_min_length = expected_min_length
        self.observed_length = observed_length


class UnrecognizedKeyTypeError(InvalidKeyError):
    """Raised when PEM contents do not start with the ECDSA P-256 SPKI prefix."""

    def __init__(
        self,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="peer-manifest:key/unrecognized_type",
            message="PEM contents are not ASN.1 encoded ECDSA P256 SubjectPublicKeyInfo",
            identifier=identifier,
            details=details,
        )


class SignatureVerificationError(PeerManifestError):
    """Bad signature length, off-curve key, or signature that does not match the message."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="peer-manifest:signature/invalid",
            message=message,
            details=details or {},
        )
