"""Command implementations for the cvmaker CLI."""

from cvmaker.cmd.render import cmd_check, cmd_preview, cmd_render
from cvmaker.cmd.templates import cmd_templates
from cvmaker.cmd.wizard import cmd_wizard

__all__ = [
    "cmd_check",
    "cmd_preview",
    "cmd_render",
    "cmd_templates",
    "cmd_wizard",
]
