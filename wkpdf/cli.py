"""CLI entry-point: convert HTML to PDF with the bundled wkhtmltopdf."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from wkpdf.config import get_settings
from wkpdf.converter import get_converter
from wkpdf.errors import ConversionError, WkPdfError
from wkpdf.platforms import detect_platform, resource_name

app = typer.Typer(help="HTML to PDF through a bundled wkhtmltopdf binary")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every wkhtmltopdf invocation"),
):
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def convert(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="HTML file to convert, or - to read HTML from stdin"),
    output: str = typer.Argument(..., help="Destination PDF path"),
    landscape: bool = typer.Option(False, "--landscape", help="Landscape instead of portrait"),
):
    """Convert SOURCE to OUTPUT. Anything after the two paths goes to wkhtmltopdf verbatim."""
    console = Console()
    options = list(ctx.args)
    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    converter = get_converter()

    try:
        if source == "-":
            html_bytes = typer.get_binary_stream("stdin").read()
            converter.convert_bytes(html_bytes, out_path, landscape, options)
        else:
            html_path = Path(source)
            if not html_path.is_file():
                console.print(f"[red]Error: HTML file not found: {source}[/red]")
                raise typer.Exit(1)
            converter.convert_file(html_path, out_path, landscape, options)
    except ConversionError as e:
        console.print(f"[red]wkhtmltopdf failed (exit code {e.exit_code})[/red]")
        console.print(e.diagnostics, markup=False, highlight=False)
        raise typer.Exit(1)
    except (WkPdfError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"Wrote {out_path}")


@app.command()
def binary(
    os_name: str = typer.Option(None, "--os", help="Resolve for this OS identifier instead of the host"),
):
    """Show which bundled payload applies and, for the host, where it is extracted."""
    console = Console()
    platform = detect_platform(os_name)
    console.print(f"Platform: {platform.value or 'default'}")
    console.print(f"Resource: {resource_name(platform)}")
    if os_name is not None:
        return
    try:
        path = get_converter().locator.get_path()
    except WkPdfError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"Extracted to: {path}")


if __name__ == "__main__":
    app()
