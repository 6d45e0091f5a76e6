"""One editing session: document, template choice, wizard and export.

Editing, previewing and exporting all need a chosen template; without
one they raise TemplateNotSelectedError so the caller can send the
user to template selection first.
"""

from pathlib import Path
from typing import Callable

from cvmaker.cv.generator import CVExporter
from cvmaker.cv.models import CVDocument
from cvmaker.cv.preview import PreviewSection, build_preview, render_preview_text
from cvmaker.cv.store import DocumentStore
from cvmaker.cv.templates import Template, TemplateSelection
from cvmaker.cv.wizard import WizardController


class CVSession:
    def __init__(
        self,
        exporter: CVExporter,
        document: CVDocument | None = None,
        template: Template | None = None,
    ):
        self.store = DocumentStore(document)
        self.templates = TemplateSelection(template)
        self.exporter = exporter
        self.wizard: WizardController | None = None

    def select_template(self, template_id: str) -> Template:
        return self.templates.select(template_id)

    def start_wizard(self, on_preview: Callable[[], None] | None = None) -> WizardController:
        self.templates.require()
        if self.wizard is None:
            self.wizard = WizardController(self.store, on_preview=on_preview)
        elif on_preview is not None:
            self.wizard.on_preview = on_preview
        return self.wizard

    def preview(self) -> list[PreviewSection]:
        return build_preview(self.store.document, self.templates.require())

    def preview_text(self) -> str:
        return render_preview_text(self.store.document, self.templates.require())

    def export(self, output_path: Path | str | None = None) -> Path:
        template = self.templates.require()
        return self.exporter.export(self.store.document, template, output_path)

    def reset_document(self) -> None:
        self.store.reset()
        if self.wizard is not None:
            self.wizard.reload_draft()
