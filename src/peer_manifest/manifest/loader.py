"""Specific manifest retrieval and decoding.

A manifest comes either from a peer's HTTPS endpoint or from a local file.
Both paths end in :func:`load_from_bytes`, which validates the document
against the SpecificManifest schema and then applies the format gate.
Nothing is cached: every call fetches and parses again.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from peer_manifest.config import LoaderSettings
from peer_manifest.errors import (
    AddressConstructionError,
    RetrievalError,
    SchemaError,
    UnsupportedFormatError,
)
from peer_manifest.models.manifest import SUPPORTED_MANIFEST_FORMAT, SpecificManifest
from peer_manifest.observability import get_logger, log_context

logger = get_logger(__name__)

MANIFEST_FILENAME = "specific-manifest.json"
"""Trailing path component of every peer manifest URL."""

MANIFEST_URL_SCHEME = "https"

_FORBIDDEN_PEER_NAME_CHARS = frozenset("/\\?#")


def _validate_peer_name(base_url: str, peer_name: str) -> None:
    if not peer_name:
        raise AddressConstructionError(base_url, peer_name, "peer name is empty")
    if peer_name in (".", ".."):
        raise AddressConstructionError(base_url, peer_name, "peer name is a dot segment")
    bad = sorted(_FORBIDDEN_PEER_NAME_CHARS.intersection(peer_name))
    if bad:
        raise AddressConstructionError(
            base_url,
            peer_name,
            f"peer name must be a single path segment (contains {''.join(bad)!r})",
        )


def manifest_url(base_url: str, peer_name: str) -> str:
    """Build ``<base_url>/<peer_name>/specific-manifest.json`` over HTTPS.

    The scheme of the result is always https, whatever ``base_url`` uses.

    Args:
        base_url: Absolute URL of the directory holding peer manifests.
        peer_name: Name of the peer; must be a single path segment.

    Returns:
        The manifest URL as a string.

    Raises:
        AddressConstructionError: If the inputs cannot be composed into a URL.
    """
    _validate_peer_name(base_url, peer_name)
    try:
        base = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise AddressConstructionError(base_url, peer_name, f"failed to parse base URL: {e}") from e
    if not base.scheme or not base.host:
        raise AddressConstructionError(base_url, peer_name, "base URL must be absolute")

    directory = base.path if base.path.endswith("/") else base.path + "/"
    try:
        url = base.copy_with(
            scheme=MANIFEST_URL_SCHEME,
            path=f"{directory}{peer_name}/{MANIFEST_FILENAME}",
            query=None,
            fragment=None,
        )
    except httpx.InvalidURL as e:
        raise AddressConstructionError(
            base_url, peer_name, f"failed to build manifest URL: {e}"
        ) from e
    return str(url)


def load_from_bytes(data: bytes | str, source: str = "<bytes>") -> SpecificManifest:
    """Decode and validate a manifest document.

    Args:
        data: Raw JSON document.
        source: Where the document came from, for logs and error context.

    Raises:
        SchemaError: If the document is not JSON or does not match the schema.
        UnsupportedFormatError: If the document declares a format other than 0.
    """
    try:
        manifest = SpecificManifest.model_validate_json(data)
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]) or "<root>", "msg": err["msg"]}
            for err in e.errors(include_url=False, include_input=False)
        ]
        logger.warning("manifest.schema_invalid", source=source, error_count=len(errors))
        raise SchemaError(errors, details={"source": source}) from e

    if manifest.format != SUPPORTED_MANIFEST_FORMAT:
        logger.warning(
            "manifest.unsupported_format",
            source=source,
            format=manifest.format,
        )
        raise UnsupportedFormatError(
            manifest.format,
            SUPPORTED_MANIFEST_FORMAT,
            details={"source": source},
        )

    logger.debug(
        "manifest.loaded",
        source=source,
        batch_signing_keys=len(manifest.batch_signing_public_keys),
        packet_encryption_certificates=len(manifest.packet_encryption_certificates),
    )
    return manifest


def load_from_file(path: str | Path) -> SpecificManifest:
    """Load a manifest from a local file (blocking I/O).

    Raises:
        RetrievalError: If the file cannot be opened or read.
        SchemaError: See :func:`load_from_bytes`.
        UnsupportedFormatError: See :func:`load_from_bytes`.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise RetrievalError(str(path), f"failed to open manifest file: {e.strerror or e}") from e
    return load_from_bytes(data, source=str(path))


def _fetch(
    url: str,
    settings: LoaderSettings,
    transport: httpx.BaseTransport | None,
) -> bytes:
    client_kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(settings.timeout_seconds),
        "headers": {"User-Agent": settings.user_agent, "Accept": "application/json"},
        "follow_redirects": False,
    }
    if transport is not None:
        client_kwargs["transport"] = transport

    logger.info("manifest.fetching", url=url)
    try:
        with httpx.Client(**client_kwargs) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("manifest.fetch_failed", url=url, status_code=status)
        raise RetrievalError(
            url,
            f"failed to fetch specific manifest: HTTP {status}",
            details={"status_code": status},
        ) from e
    except httpx.HTTPError as e:
        logger.warning("manifest.fetch_failed", url=url, error=type(e).__name__)
        raise RetrievalError(
            url,
            f"failed to fetch specific manifest: {str(e) or type(e).__name__}",
        ) from e


def load_from_https(
    base_url: str,
    peer_name: str,
    *,
    settings: LoaderSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> SpecificManifest:
    """Fetch a peer's manifest over HTTPS and validate it.

    Redirects are not followed, so a manifest is never fetched from a
    location other than the computed HTTPS URL. Events logged while the
    manifest is fetched and decoded carry ``peer_name``.

    Args:
        base_url: Absolute URL of the directory holding peer manifests.
        peer_name: Name of the peer.
        settings: Timeout and User-Agent; defaults to LoaderSettings.from_env().
        transport: Optional httpx transport for tests (e.g. MockTransport).

    Raises:
        AddressConstructionError: If the manifest URL cannot be built.
        RetrievalError: On network errors or a non-2xx response.
        SchemaError: See :func:`load_from_bytes`.
        UnsupportedFormatError: See :func:`load_from_bytes`.
        ValueError: If ``settings`` is omitted and the environment holds
            invalid values.
    """
    url = manifest_url(base_url, peer_name)
    settings = settings or LoaderSettings.from_env()

    with log_context(peer_name=peer_name):
        body = _fetch(url, settings, transport)
        return load_from_bytes(body, source=url)
