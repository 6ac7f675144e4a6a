"""Command-line interface for the printscout manual printer registry.

Example:
    >>> # From terminal:
    >>> # printscout --version
    >>> # printscout list [--json] [--registry PATH]
    >>> # printscout remove ipp://printer.local:631/ipp/print
    >>> # printscout candidates printer.local
    >>> # printscout show-schema
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from printscout import __version__
from printscout.discovery.probe import IPP_PATHS
from printscout.discovery.registry import EndpointRegistry
from printscout.errors import InvalidHostnameError
from printscout.models.entities import Endpoint, RegistryDocument
from printscout.observability.logging import configure_logging
from printscout.state.store import render_registry_document
from printscout.state.stores import default_registry_path
from printscout.state.stores.json_file import JSONFileRegistryStore
from printscout.uri import build_base_uri, join_path

app = typer.Typer(help="Manage manually added network printers.")

RegistryOption = Annotated[
    Optional[Path],
    typer.Option(
        "--registry",
        "-r",
        help="Registry JSON file (default: $PRINTSCOUT_CACHE_DIR/ManualDiscovery.json).",
    ),
]


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show printscout version and exit.",
    callback=_version_callback,
    is_eager=True,
)


@app.callback()
def cli(
    version: bool = VERSION_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """printscout CLI entrypoint."""
    configure_logging(log_level="DEBUG" if verbose else "WARNING", force=True)


def _open_registry(registry_file: Optional[Path]) -> EndpointRegistry:
    path = registry_file if registry_file is not None else default_registry_path()
    return EndpointRegistry(JSONFileRegistryStore(path))


@app.command("list")
def list_endpoints(
    registry_file: RegistryOption = None,
    as_json: bool = typer.Option(False, "--json", help="Print the registry document as JSON."),
) -> None:
    """List manual printers, most recently added first."""
    registry = _open_registry(registry_file)
    if as_json:
        typer.echo(render_registry_document(registry.endpoints))
        return
    if not registry.endpoints:
        typer.echo("No manual printers.")
        return
    for endpoint in registry:
        typer.echo(f"{endpoint.uri}\t{endpoint.display_name}\t{endpoint.location or ''}")


@app.command("remove")
def remove_endpoint(
    uri: Annotated[str, typer.Argument(help="URI of the printer to remove.")],
    registry_file: RegistryOption = None,
) -> None:
    """Remove the manual printer whose URI path matches URI."""
    try:
        target = Endpoint(uri=uri)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid printer URI: {uri}") from exc

    registry = _open_registry(registry_file)
    removed = registry.remove(target)
    if removed is None:
        typer.echo(f"No manual printer with path {target.path!r}.", err=True)
        raise typer.Exit(1)
    if not registry.save():
        typer.echo(f"Could not write registry to {registry.store.location}.", err=True)
        raise typer.Exit(1)
    typer.echo(f"Removed {removed.uri}")


@app.command("candidates")
def show_candidates(
    hostname: Annotated[str, typer.Argument(help="Hostname or address of the printer.")],
) -> None:
    """Show the URIs probed for HOSTNAME, in order."""
    try:
        base_uri = build_base_uri(hostname)
    except InvalidHostnameError as exc:
        raise typer.BadParameter(exc.message) from exc
    for path in IPP_PATHS:
        typer.echo(join_path(base_uri, path))


@app.command("show-schema")
def show_schema() -> None:
    """Print the JSON schema of the persisted registry document."""
    schema = RegistryDocument.model_json_schema(by_alias=True)
    typer.echo(json.dumps(schema, indent=2))


def main() -> None:
    """Run the printscout CLI."""
    app()


if __name__ == "__main__":
    main()
