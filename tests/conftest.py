"""Shared pytest fixtures for peer manifest tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from cryptography.hazmat.primitives.asymmetric import ec

from tests.factories import generate_signing_key, manifest_json, pem_block, spki_base64


@pytest.fixture(autouse=True)
def _clear_log_context() -> None:
    """Keep bound structlog context from leaking between tests."""
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def signing_key() -> ec.EllipticCurvePrivateKey:
    """Fresh ECDSA P-256 private key."""
    return generate_signing_key()


@pytest.fixture
def valid_manifest_json(signing_key: ec.EllipticCurvePrivateKey) -> str:
    """Format-0 manifest whose "fake-key-2" wraps ``signing_key``'s public key."""
    return manifest_json(pem_block(spki_base64(signing_key)))


@pytest.fixture
def manifest_file(tmp_path: Path, valid_manifest_json: str) -> Path:
    """``valid_manifest_json`` written to disk."""
    path = tmp_path / "specific-manifest.json"
    path.write_text(valid_manifest_json, encoding="utf-8")
    return path
