"""CLI entry point for pdum_compute."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pdum.compute import ApiError, AuthError, Compute, TransportError, configure_logging, load_config

app = typer.Typer(
    help="A Google Compute Engine client built on google-auth",
    no_args_is_help=True,
)
project_app = typer.Typer(help="Inspect the Compute Engine project", no_args_is_help=True)
app.add_typer(project_app, name="project")

console = Console()

ProjectOption = typer.Option(
    None,
    "--project",
    "-p",
    help="The project ID (defaults to the config file, GOOGLE_CLOUD_PROJECT or ADC)",
)
ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a pdum_compute YAML config file",
)
VerboseOption = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log every request",
)


def _make_compute(project_id: Optional[str], config_path: Optional[Path]) -> Compute:
    config = load_config(config_path)
    return Compute(project_id, config=config)


def _run(project_id: Optional[str], config_path: Optional[Path], verbose: bool, metadata_only: bool) -> None:
    configure_logging(verbose)
    try:
        with _make_compute(project_id, config_path) as compute:
            project = compute.project()
            if metadata_only:
                metadata, _ = project.get_metadata().result()
                console.print_json(data=metadata)
            else:
                _, api_response = project.get().result()
                console.print_json(data=api_response.body)
    except (ApiError, AuthError, TransportError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(130)


@app.command("version")
def version():
    """Show the version of pdum_compute."""
    from pdum.compute import __version__

    console.print(f"pdum_compute version: [bold green]{__version__}[/bold green]")


@project_app.command("get")
def project_get(
    project_id: Optional[str] = ProjectOption,
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """
    Fetch the project and print the API response.

    Examples:
        pdum_compute project get
        pdum_compute project get --project my-project -v
    """
    _run(project_id, config_path, verbose, metadata_only=False)


@project_app.command("metadata")
def project_metadata(
    project_id: Optional[str] = ProjectOption,
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """Print the project's metadata."""
    _run(project_id, config_path, verbose, metadata_only=True)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
