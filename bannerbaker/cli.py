"""
BannerBaker CLI

Command-line interface for baking banners from JSON configurations.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from bannerbaker import logger
from bannerbaker.api import AssetLoader, BannerBaker, Compositor
from bannerbaker.api.baker import stage
from bannerbaker.core.configs import load_request
from bannerbaker.core.defs import BannerBakerError, PipelineStage
from bannerbaker.utils.image import decode_image

USAGE = """Usage: bannerbaker [options...]
Options:
  -j, --json PATH            Json file path (required).
  -v, --verbose              Be more verbose.
  --no-render-background     Reuse the existing background.file instead of
                             painting it.

Commands:
  layout -j PATH             Print icon positions without writing files.
  info IMAGE                 Display information about an image file.
  version                    Show BannerBaker version.

e.g.:
  bannerbaker -j ./jsons/preference.json
"""

app = typer.Typer(
    name="bannerbaker",
    help="BannerBaker - Compose a banner from a background, base images and icon rows",
    add_completion=False,
    invoke_without_command=True,
)


def setup_logging(verbose: bool = False):
    logger.remove()
    # resolve sys.stderr per message so redirected streams are honoured
    logger.add(
        lambda message: sys.stderr.write(message),
        level="DEBUG" if verbose else "INFO",
    )


def fail(error: BannerBakerError):
    stage = error.stage.value if error.stage else "pipeline"
    typer.echo(f"Error [{stage}]: {error}", err=True)
    raise typer.Exit(1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_path: Optional[Path] = typer.Option(
        None, "-j", "--json", help="Json file path."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Be more verbose."),
    render_background: bool = typer.Option(
        True,
        "--render-background/--no-render-background",
        help="Paint background.file before composing, or reuse the existing file.",
    ),
):
    """
    BannerBaker - Compose a banner from a JSON configuration.

    Run with -j to bake the configured output file.
    """
    setup_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    if json_path is None:
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)

    try:
        result = BannerBaker().bake_file(json_path, render_background=render_background)
    except BannerBakerError as e:
        fail(e)

    width, height = result.size
    typer.echo(f"✓ Saved {width}x{height} {result.output_format.value} to: {result.output_path}")


@app.command()
def layout(
    json_path: Path = typer.Option(..., "-j", "--json", help="Json file path."),
):
    """
    Print where every icon would be drawn, without writing any file.
    """
    try:
        with stage(PipelineStage.CONFIG):
            request = load_request(json_path)
        with stage(PipelineStage.LOAD):
            assets = AssetLoader().load(request)
    except BannerBakerError as e:
        fail(e)

    top, bottom = Compositor().plan(assets)
    for row_name, placements in (("top", top), ("bottom", bottom)):
        typer.echo(f"{row_name} row: {len(placements)} icons")
        for i, placement in enumerate(placements):
            image = placement.image
            typer.echo(
                f"  Icon {i}: {image.source} at {placement.position} "
                f"(size={image.width}x{image.height})"
            )


@app.command()
def info(
    image: Path = typer.Argument(..., help="Image file to inspect"),
):
    """
    Display information about an image file.
    """
    try:
        decoded = decode_image(image)
    except BannerBakerError as e:
        fail(e)

    typer.echo(f"Image: {image}")
    typer.echo(f"  Size: {decoded.width} x {decoded.height}")
    typer.echo("  Channels: RGBA")
    typer.echo(f"  Has transparency: {bool((decoded.pixels[..., 3] < 255).any())}")
    typer.echo(f"  File size: {image.stat().st_size / 1024:.2f} KB")


@app.command()
def version():
    """Show BannerBaker version."""
    from bannerbaker import __version__

    typer.echo(f"BannerBaker version {__version__}")


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
