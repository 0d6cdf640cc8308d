"""
Receipt Printer - command line entry point

    receipt-printer render template.json order.json
    receipt-printer render template.json order.json --format escpos --output receipt.bin
    receipt-printer sample --width 32
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from receipt_printer.core.config import settings
from receipt_printer.models.commands import PrintCommand
from receipt_printer.services.printer.escpos_sink import render_escpos_bytes
from receipt_printer.services.printer.preview import TextPreview
from receipt_printer.services.receipt.conditions import ConditionSyntaxError
from receipt_printer.services.receipt.receipt_renderer import TemplateRenderer
from receipt_printer.services.receipt.samples import default_template, sample_receipt_data
from receipt_printer.services.receipt.template_loader import (
    LoadError,
    load_receipt_data,
    load_template,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("preview", "commands", "escpos")

app = typer.Typer(help=f"{settings.APP_NAME} v{settings.APP_VERSION}")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _emit(commands: List[PrintCommand], width: int, output_format: str, output: Optional[Path]) -> None:
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"format must be one of {', '.join(OUTPUT_FORMATS)}")

    if output_format == "escpos":
        if output is None:
            raise typer.BadParameter("--output is required for escpos format")
        payload = render_escpos_bytes(commands)
        output.write_bytes(payload)
        typer.echo(f"Wrote {len(payload)} bytes to {output}")
        return

    if output_format == "commands":
        text = "\n".join(repr(command) for command in commands)
    else:
        text = TextPreview(width).to_text(commands)

    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
    else:
        typer.echo(text)


@app.command()
def render(
    template_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template JSON file"),
    data_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Receipt data JSON file"),
    width: Optional[int] = typer.Option(None, "--width", "-w", min=1, help="Paper width in columns"),
    strict: bool = typer.Option(False, "--strict", help="Fail on unsupported conditions"),
    output_format: str = typer.Option("preview", "--format", "-f", help="preview | commands | escpos"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Render a receipt from a template and a data file"""
    try:
        template = load_template(template_path)
        data = load_receipt_data(data_path)
        renderer = TemplateRenderer(paper_width=width, strict_conditions=strict or None)
        commands = renderer.render(template, data)
    except (LoadError, ConditionSyntaxError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _emit(commands, renderer.effective_width(template), output_format, output)


@app.command()
def sample(
    width: Optional[int] = typer.Option(None, "--width", "-w", min=1, help="Paper width in columns"),
    output_format: str = typer.Option("preview", "--format", "-f", help="preview | commands | escpos"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Render the built-in test receipt with the default template"""
    renderer = TemplateRenderer(paper_width=width)
    template = default_template()
    commands = renderer.render(template, sample_receipt_data())
    _emit(commands, renderer.effective_width(template), output_format, output)


if __name__ == "__main__":
    app()
