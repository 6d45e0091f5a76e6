"""Template catalog listing command."""

import argparse
import json

from cvmaker.shared import Color, echo
from cvmaker.cv import list_templates


def cmd_templates(args: argparse.Namespace) -> int:
    """Handle template listing."""
    templates = list_templates()

    if args.json:
        print(json.dumps([t.model_dump(mode="json") for t in templates], indent=2))
        return 0

    echo("Available templates:", Color.INFO)
    for template in templates:
        sections = ", ".join(s.value for s in template.sections)
        echo(f"  {template.id}: {template.name} ({template.color})", Color.INFO)
        echo(f"     {template.description}", Color.INFO)
        echo(f"     sections: {sections}", Color.INFO)
    return 0
