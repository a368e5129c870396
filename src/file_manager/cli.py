# cli.py
import logging
from pathlib import Path
from typing import Iterable, Optional

import click
from pydantic import ValidationError

from file_manager.client.api import FileManagerClient
from file_manager.client.formatting import format_file_size
from file_manager.client.orchestrator import UploadOrchestrator, UploadState
from file_manager.config.settings import Settings, configure_logging, get_settings
from file_manager.errors import ListingRequestError
from file_manager.schemas import ObjectSummary

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> FileManagerClient:
    return FileManagerClient.from_settings(settings)


def echo_objects(objects: Iterable[ObjectSummary], delimiter: str = "/") -> None:
    objects = list(objects)
    if not objects:
        click.echo("No files found in S3")
        return
    for obj in objects:
        marker = "d" if obj.is_folder(delimiter) else "-"
        click.echo(
            f"{marker} {obj.key}  {format_file_size(obj.size)}  {obj.last_modified.date().isoformat()}"
        )


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this command")
def cli(log_level: Optional[str]):
    """Upload files to S3 through presigned URLs and list what is stored"""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {str(e)}") from e
    configure_logging(log_level or settings.log_level)


@cli.command()
def show_config():
    """Show current configuration (secrets masked)"""
    settings = get_settings()

    click.echo("Current Configuration:")
    for name, value in settings.public_dict().items():
        click.echo(f"  {name}: {value}")


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int):
    """Serve the API with uvicorn"""
    import uvicorn

    from file_manager.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


@cli.command(name="ls")
@click.option("--prefix", default=None, help="Prefix filter passed to the API")
def list_objects(prefix: Optional[str]):
    """List objects stored in the bucket"""
    settings = get_settings()
    client = build_client(settings)
    try:
        objects = client.list_objects(prefix=prefix)
    except ListingRequestError as e:
        raise click.ClickException(e.message) from e
    finally:
        client.close()
    echo_objects(objects, settings.list_delimiter)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def upload(path: Path):
    """Upload PATH under its file name and show the refreshed listing"""
    settings = get_settings()
    client = build_client(settings)
    try:
        orchestrator = UploadOrchestrator(
            client,
            on_status=lambda message: click.echo(message) if message else None,
        )
        selected = orchestrator.select_file(path)
        click.echo(f"{selected.name} ({format_file_size(selected.size)})")

        if orchestrator.upload() is UploadState.FAILED:
            raise click.ClickException(orchestrator.error)
    finally:
        client.close()

    echo_objects(orchestrator.objects, settings.list_delimiter)


if __name__ == "__main__":
    cli()
