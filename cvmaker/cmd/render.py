"""Document file commands: check, preview and render to PDF."""

import argparse
from pathlib import Path

from pydantic import ValidationError

from cvmaker.config import get_settings
from cvmaker.shared import (
    Color,
    DocumentFileError,
    ExportFailure,
    InvalidPaperSizeError,
    PaperSize,
    TemplateNotFoundError,
    echo,
)
from cvmaker.cv import CVDocument, CVExporter, CVGenerator, get_template
from cvmaker.cv.io import load_document
from cvmaker.cv.preview import render_preview_text
from cvmaker.cv.validation import personal_info_errors


def _load(input_path: str) -> CVDocument | None:
    try:
        return load_document(Path(input_path))
    except DocumentFileError as e:
        echo(str(e), Color.ERROR)
    except ValidationError as e:
        echo("Document validation failed:", Color.ERROR)
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            echo(f"  {loc}: {error['msg']}", Color.ERROR)
    return None


def cmd_check(args: argparse.Namespace) -> int:
    """Handle document validation."""
    document = _load(args.input)
    if document is None:
        return 1

    errors = personal_info_errors(document.personalInfo)
    if errors:
        echo("Personal info is incomplete:", Color.WARNING)
        for field, message in errors.items():
            echo(f"  {field}: {message}", Color.WARNING)
        return 1

    echo(f"{args.input} is a complete CV document", Color.SUCCESS)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    """Handle text preview."""
    try:
        template = get_template(args.template)
    except TemplateNotFoundError as e:
        echo(str(e.args[0]), Color.ERROR)
        return 1

    document = _load(args.input)
    if document is None:
        return 1

    print(render_preview_text(document, template))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Handle CV to PDF conversion."""
    settings = get_settings()
    try:
        template = get_template(args.template)
        paper_size = PaperSize.from_string(args.size or settings.paper_size)
    except (TemplateNotFoundError, InvalidPaperSizeError) as e:
        echo(str(e.args[0]), Color.ERROR)
        return 1

    document = _load(args.input)
    if document is None:
        return 1

    generator = CVGenerator(font_name=args.font or settings.font, paper_size=paper_size)
    exporter = CVExporter(settings.export_dir, generator)
    try:
        path = exporter.export(document, template, args.output)
    except ExportFailure as e:
        echo(str(e), Color.ERROR)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    echo(f"CV PDF created: {path}", Color.SUCCESS)
    return 0
