# notesynth/cli.py
"""
CLI interface for notesynth.

Thin presentation layer over the tools/ service layer.
"""

import asyncio
import json

import typer
import yaml

from notesynth.background.lifecycle import SynthesisLifecycle
from notesynth.config.loader import get_config_path, load_config
from notesynth.config.schema import NoteSynthConfig
from notesynth.errors import NoteSynthError
from notesynth.logging_config import configure_cli_logging
from notesynth.tools.check_availability import check_availability
from notesynth.tools.synthesize import read_request_file, synthesize, synthesize_text

app = typer.Typer(
    name="notesynth",
    help="Synthesize connections between a web page and your saved notes using a local LLM.",
    no_args_is_help=True,
)


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _load(verbose: bool = False) -> NoteSynthConfig:
    """Load config and set up stderr logging."""
    config = load_config()
    configure_cli_logging(
        "verbose" if verbose else config.output.verbosity,
        config.output.log_format,
    )
    return config


def _availability_color(availability: str) -> str:
    """Return ANSI color for an availability value."""
    colors = {
        "available": typer.colors.GREEN,
        "unavailable": typer.colors.YELLOW,
        "error": typer.colors.RED,
    }
    return colors.get(availability, typer.colors.WHITE)


@app.command()
def status(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Check whether the configured model is available."""
    config = _load(verbose)

    async def _status():
        lifecycle = SynthesisLifecycle(config)
        try:
            return await check_availability(lifecycle)
        finally:
            await lifecycle.shutdown()

    try:
        result = _run(_status())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    availability = result["availability"]
    typer.echo(f"Provider:     {result['provider']}")
    typer.echo(f"Model:        {result['model']}")
    typer.echo(typer.style(f"Availability: {availability}", fg=_availability_color(availability)))
    if result.get("detail"):
        typer.echo(f"Detail:       {result['detail']}")

    if availability != "available":
        raise typer.Exit(1)


@app.command("synthesize")
def synthesize_cmd(
    request_file: str = typer.Argument(..., help="JSON request file with 'context' and 'notes' ('-' for stdin)"),
    rank: bool = typer.Option(True, "--rank/--no-rank", help="Sort notes by similarity first"),
    as_json: bool = typer.Option(False, "--json", help="Print the finished synthesis as JSON"),
    markdown: bool = typer.Option(False, "--markdown", "-m", help="Render the finished synthesis as Markdown"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Stream a synthesis of how the notes relate to the page."""
    config = _load(verbose)

    try:
        context, notes = read_request_file(request_file)
    except NoteSynthError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    async def _synthesize():
        lifecycle = SynthesisLifecycle(config)
        try:
            await lifecycle.startup()
            if as_json:
                return await synthesize_text(context, notes, lifecycle.service, rank=rank)

            stream = await synthesize(context, notes, lifecycle.service, rank=rank)
            chunks = []
            async for chunk in stream:
                chunks.append(chunk)
                if not markdown:
                    typer.echo(chunk, nl=False)
            return "".join(chunks)
        finally:
            await lifecycle.shutdown()

    try:
        result = _run(_synthesize())
    except (NoteSynthError, ImportError) as e:
        typer.echo(f"\nError: {e}", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("\nCancelled.", err=True)
        raise typer.Exit(130)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
    elif markdown:
        from rich.console import Console
        from rich.markdown import Markdown

        Console().print(Markdown(result))
    else:
        typer.echo()


@app.command()
def config():
    """Show the config file location and current settings."""
    settings = load_config()
    typer.echo(f"Config file: {get_config_path()}\n")
    typer.echo(yaml.safe_dump(settings.model_dump(mode="json"), default_flow_style=False, sort_keys=False))
