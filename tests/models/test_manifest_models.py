"""Tests for the specific manifest models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from peer_manifest.models.manifest import (
    SUPPORTED_MANIFEST_FORMAT,
    BatchSigningPublicKey,
    PacketEncryptionCertificate,
    SpecificManifest,
)
from tests.factories import manifest_document


def _manifest() -> SpecificManifest:
    return SpecificManifest(
        format=0,
        ingestion_bucket="us-west-1/ingestion",
        peer_validation_bucket="us-west-1/validation",
        batch_signing_public_keys={
            "fake-key-2": BatchSigningPublicKey(public_key="pem", expiration="2021-01-01T00:00:00Z"),
        },
        packet_encryption_certificates={
            "fake-key-1": PacketEncryptionCertificate(certificate="who cares"),
        },
    )


class TestSpecificManifest:
    """Schema behavior of SpecificManifest."""

    def test_supported_format_is_zero(self) -> None:
        assert SUPPORTED_MANIFEST_FORMAT == 0

    def test_validates_wire_names(self) -> None:
        manifest = SpecificManifest.model_validate(manifest_document("pem"))
        assert manifest.format == 0
        assert manifest.ingestion_bucket == "us-west-1/ingestion"
        assert manifest.peer_validation_bucket == "us-west-1/validation"
        assert manifest.batch_signing_public_keys["fake-key-2"].public_key == "pem"
        assert manifest.batch_signing_public_keys["fake-key-2"].expiration == ""
        assert manifest.packet_encryption_certificates["fake-key-1"].certificate == "who cares"

    def test_to_json_uses_wire_names(self) -> None:
        data = json.loads(_manifest().to_json())
        assert set(data) == {
            "format",
            "ingestion-bucket",
            "peer-validation-bucket",
            "batch-signing-public-keys",
            "packet-encryption-certificates",
        }
        assert data["batch-signing-public-keys"]["fake-key-2"] == {
            "public-key": "pem",
            "expiration": "2021-01-01T00:00:00Z",
        }

    def test_json_round_trip(self) -> None:
        manifest = _manifest()
        assert SpecificManifest.model_validate_json(manifest.to_json()) == manifest

    def test_is_frozen(self) -> None:
        manifest = _manifest()
        with pytest.raises(ValidationError):
            manifest.format = 1  # type: ignore[misc]

    def test_empty_maps_are_valid(self) -> None:
        document = manifest_document(
            **{"batch-signing-public-keys": {}, "packet-encryption-certificates": {}}
        )
        manifest = SpecificManifest.model_validate(document)
        assert manifest.batch_signing_public_keys == {}

    def test_format_is_not_gated_by_the_model(self) -> None:
        """The model accepts any uint; the loader applies the version gate."""
        assert SpecificManifest.model_validate(manifest_document(format=7)).format == 7

    @pytest.mark.parametrize("value", ["0", "zero", 0.0, True, None, -1, 2**32, [0]])
    def test_format_must_be_unsigned_int(self, value: object) -> None:
        with pytest.raises(ValidationError):
            SpecificManifest.model_validate_json(json.dumps(manifest_document(format=value)))

    @pytest.mark.parametrize(
        "field",
        [
            "format",
            "ingestion-bucket",
            "peer-validation-bucket",
            "batch-signing-public-keys",
            "packet-encryption-certificates",
        ],
    )
    def test_every_top_level_field_is_required(self, field: str) -> None:
        with pytest.raises(ValidationError):
            SpecificManifest.model_validate(manifest_document(_drop=[field]))

    def test_unknown_top_level_fields_are_ignored(self) -> None:
        manifest = SpecificManifest.model_validate(
            manifest_document(**{"aggregation-bucket": "us-west-1/aggregation"})
        )
        assert manifest == SpecificManifest.model_validate(manifest_document())
        assert "aggregation-bucket" not in json.loads(manifest.to_json())

    def test_unknown_entry_fields_are_ignored(self) -> None:
        document = manifest_document()
        document["batch-signing-public-keys"]["fake-key-2"]["key-type"] = "P-256"
        document["packet-encryption-certificates"]["fake-key-1"]["issuer"] = "ca"
        manifest = SpecificManifest.model_validate(document)
        assert manifest.batch_signing_public_keys["fake-key-2"].expiration == ""
        assert manifest.packet_encryption_certificates["fake-key-1"].certificate == "who cares"

    def test_bucket_must_be_string(self) -> None:
        with pytest.raises(ValidationError):
            SpecificManifest.model_validate(manifest_document(**{"ingestion-bucket": 5}))


class TestEntries:
    """Schema behavior of key and certificate entries."""

    def test_signing_key_requires_expiration(self) -> None:
        with pytest.raises(ValidationError):
            BatchSigningPublicKey.model_validate({"public-key": "pem"})

    def test_signing_key_by_name_or_alias(self) -> None:
        by_alias = BatchSigningPublicKey.model_validate({"public-key": "pem", "expiration": ""})
        by_name = BatchSigningPublicKey(public_key="pem", expiration="")
        assert by_alias == by_name

    def test_public_key_must_be_string(self) -> None:
        with pytest.raises(ValidationError):
            BatchSigningPublicKey.model_validate({"public-key": 1, "expiration": ""})

    def test_certificate_is_opaque(self) -> None:
        cert = PacketEncryptionCertificate.model_validate({"certificate": "who cares"})
        assert cert.certificate == "who cares"
