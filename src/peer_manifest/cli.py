"""Command-line interface for peer manifest utilities.

Example:
    >>> # From terminal:
    >>> # peer-manifest --version
    >>> # peer-manifest url https://manifests.example.com/ peer-a
    >>> # peer-manifest fetch https://manifests.example.com/ peer-a [--json]
    >>> # peer-manifest show specific-manifest.json [--json]
    >>> # peer-manifest resolve-key specific-manifest.json batch-key-1
    >>> # peer-manifest verify specific-manifest.json batch-key-1 --message m.bin --signature s.bin
    >>> # peer-manifest certificate specific-manifest.json packet-key-1
"""

import base64
import binascii
from pathlib import Path
from typing import Annotated

import typer

from peer_manifest import __version__
from peer_manifest.errors import PeerManifestError, SignatureVerificationError
from peer_manifest.manifest.loader import (
    load_from_file,
    load_from_https,
    manifest_url,
)
from peer_manifest.manifest.resolver import (
    get_packet_encryption_certificate,
    resolve_batch_signing_key,
)
from peer_manifest.models.manifest import SpecificManifest
from peer_manifest.observability import configure_logging

app = typer.Typer(help="Peer specific manifest CLI.")


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show peer-manifest version and exit.",
    callback=_version_callback,
    is_eager=True,
)

JSON_OPTION = typer.Option(False, "--json", help="Print the manifest as wire-format JSON.")


@app.callback()
def cli(
    version: bool = VERSION_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """peer-manifest CLI entrypoint."""
    if verbose:
        try:
            configure_logging(log_level="DEBUG", force=True)
        except ValueError as e:
            raise _fail_config(e) from e


def _fail(error: PeerManifestError) -> typer.Exit:
    typer.echo(f"Error [{error.code}]: {error.message}", err=True)
    return typer.Exit(1)


def _fail_config(error: ValueError) -> typer.Exit:
    typer.echo(f"Configuration error: {error}", err=True)
    return typer.Exit(1)


def _echo_manifest(manifest: SpecificManifest, as_json: bool) -> None:
    if as_json:
        typer.echo(manifest.to_json(indent=2))
        return
    typer.echo(f"Format: {manifest.format}")
    typer.echo(f"Ingestion bucket: {manifest.ingestion_bucket}")
    typer.echo(f"Peer validation bucket: {manifest.peer_validation_bucket}")
    typer.echo("Batch signing public keys:")
    for identifier, entry in sorted(manifest.batch_signing_public_keys.items()):
        typer.echo(f"  {identifier} (expiration: {entry.expiration or 'unset'})")
    typer.echo("Packet encryption certificates:")
    for identifier in sorted(manifest.packet_encryption_certificates):
        typer.echo(f"  {identifier}")


def _load(manifest_file: Path) -> SpecificManifest:
    try:
        return load_from_file(manifest_file)
    except PeerManifestError as e:
        raise _fail(e) from e


@app.command("url")
def url_cmd(
    base_url: Annotated[str, typer.Argument(help="Base URL of the manifest directory.")],
    peer_name: Annotated[str, typer.Argument(help="Peer name (single path segment).")],
) -> None:
    """Print the HTTPS URL a peer's manifest is fetched from."""
    try:
        typer.echo(manifest_url(base_url, peer_name))
    except PeerManifestError as e:
        raise _fail(e) from e


@app.command("fetch")
def fetch_cmd(
    base_url: Annotated[str, typer.Argument(help="Base URL of the manifest directory.")],
    peer_name: Annotated[str, typer.Argument(help="Peer name (single path segment).")],
    as_json: bool = JSON_OPTION,
) -> None:
    """Fetch a peer's specific manifest over HTTPS and validate it."""
    try:
        manifest = load_from_https(base_url, peer_name)
    except PeerManifestError as e:
        raise _fail(e) from e
    except ValueError as e:
        raise _fail_config(e) from e
    _echo_manifest(manifest, as_json)


@app.command("show")
def show_cmd(
    manifest_file: Annotated[Path, typer.Argument(help="Path to a specific manifest JSON file.")],
    as_json: bool = JSON_OPTION,
) -> None:
    """Validate a local specific manifest and print a summary."""
    _echo_manifest(_load(manifest_file), as_json)


@app.command("resolve-key")
def resolve_key_cmd(
    manifest_file: Annotated[Path, typer.Argument(help="Path to a specific manifest JSON file.")],
    key_id: Annotated[str, typer.Argument(help="Batch signing key identifier.")],
) -> None:
    """Validate a batch signing key and print its raw EC point as hex."""
    manifest = _load(manifest_file)
    try:
        key = resolve_batch_signing_key(manifest, key_id)
    except PeerManifestError as e:
        raise _fail(e) from e
    typer.echo(f"Algorithm: {key.algorithm}")
    typer.echo(f"Public point: {key.raw_key_bytes.hex()}")


@app.command("verify")
def verify_cmd(
    manifest_file: Annotated[Path, typer.Argument(help="Path to a specific manifest JSON file.")],
    key_id: Annotated[str, typer.Argument(help="Batch signing key identifier.")],
    message: Annotated[
        Path,
        typer.Option(..., "--message", "-m", help="File holding the signed content."),
    ],
    signature: Annotated[
        Path,
        typer.Option(..., "--signature", "-s", help="File holding the 64-byte r||s signature."),
    ],
    signature_base64: Annotated[
        bool,
        typer.Option("--base64", help="Signature file is base64 text rather than raw bytes."),
    ] = False,
) -> None:
    """Verify a fixed-length ECDSA P-256 signature with a manifest key."""
    for path in (message, signature):
        if not path.is_file():
            raise typer.BadParameter(f"File not found: {path}")
    manifest = _load(manifest_file)
    try:
        key = resolve_batch_signing_key(manifest, key_id)
    except PeerManifestError as e:
        raise _fail(e) from e

    raw_signature = signature.read_bytes()
    if signature_base64:
        try:
            raw_signature = base64.b64decode(raw_signature.strip(), validate=True)
        except binascii.Error as exc:
            raise typer.BadParameter(f"Signature is not valid base64: {exc}") from exc

    try:
        key.verify(message.read_bytes(), raw_signature)
    except SignatureVerificationError as e:
        typer.echo(f"Verification failed: {e.message}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Signature valid (key: {key_id})")


@app.command("certificate")
def certificate_cmd(
    manifest_file: Annotated[Path, typer.Argument(help="Path to a specific manifest JSON file.")],
    key_id: Annotated[str, typer.Argument(help="Packet encryption certificate identifier.")],
) -> None:
    """Print a packet encryption certificate exactly as published."""
    manifest = _load(manifest_file)
    try:
        typer.echo(get_packet_encryption_certificate(manifest, key_id))
    except PeerManifestError as e:
        raise _fail(e) from e


def main() -> None:
    """Run the peer-manifest CLI."""
    app()


if __name__ == "__main__":
    main()
