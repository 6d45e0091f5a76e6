"""Template catalog and the session's template choice.

Templates only describe presentation. The document never refers to
one; the selection is held next to it.
"""

from enum import Enum

from pydantic import BaseModel

from cvmaker.shared import TemplateNotFoundError, TemplateNotSelectedError


class Section(str, Enum):
    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    LANGUAGES = "languages"
    CERTIFICATIONS = "certifications"
    PORTFOLIO = "portfolio"
    INTERESTS = "interests"


class Template(BaseModel):
    """Read-only catalog entry."""

    id: str
    name: str
    description: str
    preview: str
    sections: list[Section]
    color: str

    class Config:
        frozen = True


TEMPLATES: tuple[Template, ...] = (
    Template(
        id="1",
        name="Professional Modern",
        description="Clean and modern design perfect for any professional field",
        preview="modern-template.png",
        sections=[
            Section.PERSONAL,
            Section.EXPERIENCE,
            Section.EDUCATION,
            Section.SKILLS,
            Section.LANGUAGES,
            Section.CERTIFICATIONS,
        ],
        color="#2563eb",
    ),
    Template(
        id="2",
        name="Creative Design",
        description="Stand out with this creative template design",
        preview="creative-template.png",
        sections=[
            Section.PERSONAL,
            Section.PORTFOLIO,
            Section.EXPERIENCE,
            Section.SKILLS,
            Section.INTERESTS,
        ],
        color="#4f46e5",
    ),
    Template(
        id="3",
        name="Classic Professional",
        description="Traditional and elegant design for corporate environments",
        preview="classic-template.png",
        sections=[
            Section.PERSONAL,
            Section.SUMMARY,
            Section.EXPERIENCE,
            Section.EDUCATION,
            Section.SKILLS,
            Section.CERTIFICATIONS,
        ],
        color="#1e293b",
    ),
)


def list_templates() -> list[Template]:
    return list(TEMPLATES)


def get_template(template_id: str) -> Template:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    raise TemplateNotFoundError(template_id)


class TemplateSelection:
    """Single optional template reference for a session."""

    def __init__(self, template: Template | None = None):
        self._selected = template

    @property
    def selected(self) -> Template | None:
        return self._selected

    def select(self, template_id: str) -> Template:
        self._selected = get_template(template_id)
        return self._selected

    def clear(self) -> None:
        self._selected = None

    def require(self) -> Template:
        """Return the selection, or raise so the caller goes back to choosing one."""
        if self._selected is None:
            raise TemplateNotSelectedError()
        return self._selected
