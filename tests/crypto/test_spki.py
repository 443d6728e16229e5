"""Unit tests for ECDSA P-256 SubjectPublicKeyInfo header validation."""

import base64

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from peer_manifest.crypto.spki import ECDSA_P256_SPKI_PREFIX, extract_ecdsa_p256_point
from peer_manifest.errors import TruncatedKeyError, UnrecognizedKeyTypeError
from tests.factories import BARE_EC_POINT_BASE64, KNOWN_P256_SPKI_BASE64, spki_der


def test_prefix_is_26_bytes() -> None:
    assert len(ECDSA_P256_SPKI_PREFIX) == 26
    assert ECDSA_P256_SPKI_PREFIX.hex() == (
        "3059301306072a8648ce3d020106082a8648ce3d030107034200"
    )


def test_generated_keys_carry_the_prefix(signing_key: ec.EllipticCurvePrivateKey) -> None:
    """cryptography's DER SPKI for any P-256 key starts with the fixed header."""
    der = spki_der(signing_key)
    assert len(der) == 91
    assert der.startswith(ECDSA_P256_SPKI_PREFIX)


def test_extract_returns_uncompressed_point(signing_key: ec.EllipticCurvePrivateKey) -> None:
    point = extract_ecdsa_p256_point(spki_der(signing_key))
    expected = signing_key.public_key().public_bytes(
        encoding=Encoding.X962,
        format=PublicFormat.UncompressedPoint,
    )
    assert point == expected
    assert len(point) == 65
    assert point[0] == 0x04


def test_extract_known_spki() -> None:
    point = extract_ecdsa_p256_point(base64.b64decode(KNOWN_P256_SPKI_BASE64))
    assert len(point) == 65


def test_prefix_alone_yields_empty_point() -> None:
    """Exactly the header is long enough; the empty point fails later at verification."""
    assert extract_ecdsa_p256_point(ECDSA_P256_SPKI_PREFIX) == b""


@pytest.mark.parametrize("length", [0, 1, 10, 25])
def test_short_contents_raise_truncated(length: int) -> None:
    with pytest.raises(TruncatedKeyError) as exc_info:
        extract_ecdsa_p256_point(ECDSA_P256_SPKI_PREFIX[:length], identifier="k")
    err = exc_info.value
    assert err.expected_min_length == 26
    assert err.observed_length == length
    assert err.identifier == "k"
    assert err.details["observed_length"] == length


def test_bare_point_is_unrecognized() -> None:
    with pytest.raises(UnrecognizedKeyTypeError):
        extract_ecdsa_p256_point(base64.b64decode(BARE_EC_POINT_BASE64))


def test_other_curve_is_unrecognized() -> None:
    der = spki_der(ec.generate_private_key(ec.SECP384R1()))
    with pytest.raises(UnrecognizedKeyTypeError):
        extract_ecdsa_p256_point(der)


@pytest.mark.parametrize("index", range(26))
def test_any_single_byte_change_is_rejected(index: int) -> None:
    contents = bytearray(base64.b64decode(KNOWN_P256_SPKI_BASE64))
    contents[index] ^= 0x01
    with pytest.raises(UnrecognizedKeyTypeError):
        extract_ecdsa_p256_point(bytes(contents))
