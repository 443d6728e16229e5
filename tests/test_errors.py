"""Tests for the peer manifest error taxonomy."""

import pytest

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


class TestPeerManifestError:
    """Test the base class."""

    def test_basic_error_creation(self) -> None:
        error = PeerManifestError(code="peer-manifest:test/error", message="Test error message")

        assert error.code == "peer-manifest:test/error"
        assert error.message == "Test error message"
        assert error.details == {}
        assert str(error) == "Test error message"

    def test_to_dict(self) -> None:
        error = PeerManifestError("code", "msg", {"key": "value"})
        assert error.to_dict() == {"code": "code", "message": "msg", "details": {"key": "value"}}

    def test_details_not_shared(self) -> None:
        error1 = PeerManifestError("code", "msg")
        error2 = PeerManifestError("code", "msg")
        error1.details["x"] = 1
        assert error2.details == {}


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (RetrievalError("https://x", "boom"), "peer-manifest:retrieval/failed"),
        (AddressConstructionError("b", "p", "bad"), "peer-manifest:retrieval/bad_address"),
        (SchemaError([{"loc": "format", "msg": "bad"}]), "peer-manifest:manifest/schema"),
        (UnsupportedFormatError(1, 0), "peer-manifest:manifest/unsupported_format"),
        (UnknownKeyError("k"), "peer-manifest:key/unknown"),
        (PemParseError("bad armor"), "peer-manifest:key/pem_parse"),
        (WrongPemTagError("PUBLIC KEY", "EC PUBLIC KEY"), "peer-manifest:key/wrong_pem_tag"),
        (TruncatedKeyError(26, 10), "peer-manifest:key/truncated"),
        (UnrecognizedKeyTypeError(), "peer-manifest:key/unrecognized_type"),
        (SignatureVerificationError("nope"), "peer-manifest:signature/invalid"),
    ],
)
def test_codes_are_distinct_and_inherit_base(error: PeerManifestError, code: str) -> None:
    assert isinstance(error, PeerManifestError)
    assert error.code == code


def test_key_errors_share_invalid_key_base() -> None:
    for error in (
        PemParseError("x"),
        WrongPemTagError("PUBLIC KEY", "X"),
        TruncatedKeyError(26, 0),
        UnrecognizedKeyTypeError(),
    ):
        assert isinstance(error, InvalidKeyError)
    assert not isinstance(UnknownKeyError("k"), InvalidKeyError)


def test_wrong_tag_message_includes_identifier() -> None:
    error = WrongPemTagError("PUBLIC KEY", "EC PUBLIC KEY", identifier="fake-key-2")
    assert "fake-key-2" in str(error)
    assert error.details == {
        "identifier": "fake-key-2",
        "expected": "PUBLIC KEY",
        "observed": "EC PUBLIC KEY",
    }


def test_truncated_key_details() -> None:
    error = TruncatedKeyError(26, 10, identifier="k")
    assert error.details == {"identifier": "k", "expected_min_length": 26, "observed_length": 10}
    assert "10 < 26" in error.message


def test_schema_error_summarizes_many_failures() -> None:
    errors = [{"loc": f"f{i}", "msg": "bad"} for i in range(5)]
    error = SchemaError(errors)
    assert "(+2 more)" in error.message
    assert error.details["errors"] == errors


def test_unsupported_format_message() -> None:
    error = UnsupportedFormatError(3, 0)
    assert str(error) == "Unsupported manifest format 3 (supported: 0)"
    assert error.details == {"format": 3, "supported": 0}


def test_retrieval_error_context() -> None:
    error = RetrievalError("/tmp/m.json", "failed to open manifest file: No such file")
    assert error.source == "/tmp/m.json"
    assert error.details["reason"].startswith("failed to open")
