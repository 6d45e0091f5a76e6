import argparse
import logging
import sys

from cvmaker.config import get_settings
from cvmaker.cmd import cmd_check, cmd_preview, cmd_render, cmd_templates, cmd_wizard


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        help="Output PDF path (default: CV_<name>_<timestamp>.pdf in the export dir)",
    )
    parser.add_argument("-s", "--size", help="Page size (default: A4)")
    parser.add_argument("--font", help="Helvetica, Times or Courier (default: Helvetica)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a CV step by step and export it to PDF.")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    templates_parser = subparsers.add_parser("templates", help="List CV templates")
    templates_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )

    check_parser = subparsers.add_parser("check", help="Validate a CV document file")
    check_parser.add_argument("input", help="CV document (.json, .yaml or .yml)")

    preview_parser = subparsers.add_parser("preview", help="Print a text preview")
    preview_parser.add_argument("input", help="CV document (.json, .yaml or .yml)")
    preview_parser.add_argument("-t", "--template", required=True, help="Template id")

    render_parser = subparsers.add_parser("render", help="Render a CV document to PDF")
    render_parser.add_argument("input", help="CV document (.json, .yaml or .yml)")
    render_parser.add_argument("-t", "--template", required=True, help="Template id")
    _add_output_options(render_parser)

    wizard_parser = subparsers.add_parser("wizard", help="Fill in a CV interactively")
    wizard_parser.add_argument(
        "-t", "--template", help="Template id (asked for when omitted)"
    )
    wizard_parser.add_argument("-i", "--input", help="Start from an existing CV document")
    wizard_parser.add_argument("--save", help="Save the document to .json or .yaml on exit")
    _add_output_options(wizard_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "templates":
        return cmd_templates(args)
    elif args.command == "check":
        return cmd_check(args)
    elif args.command == "preview":
        return cmd_preview(args)
    elif args.command == "render":
        return cmd_render(args)
    elif args.command == "wizard":
        return cmd_wizard(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
