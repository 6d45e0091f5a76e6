"""CV document editing.

Provides the document model, the in-memory store, the step-by-step
wizard over it, the template catalog, text preview and PDF export.
"""

from cvmaker.cv.models import CVDocument, PersonalInfo, Proficiency
from cvmaker.cv.store import Collection, DocumentStore
from cvmaker.cv.wizard import Step, StepOutcome, WizardController
from cvmaker.cv.templates import Template, TemplateSelection, get_template, list_templates
from cvmaker.cv.generator import CVExporter, CVGenerator
from cvmaker.cv.session import CVSession

__all__ = [
    "CVDocument",
    "PersonalInfo",
    "Proficiency",
    "Collection",
    "DocumentStore",
    "Step",
    "StepOutcome",
    "WizardController",
    "Template",
    "TemplateSelection",
    "get_template",
    "list_templates",
    "CVExporter",
    "CVGenerator",
    "CVSession",
]
