"""Plain-text preview of a document as a given template lays it out."""

from dataclasses import dataclass, field

from cvmaker.cv.models import CVDocument
from cvmaker.cv.templates import Section, Template


@dataclass
class PreviewSection:
    section: Section
    title: str
    lines: list[str] = field(default_factory=list)


def format_date_range(start: str, end: str) -> str:
    if not start and not end:
        return ""
    return f"{start} - {end or 'Present'}" if start else end


def _join(*parts: str, sep: str = " | ") -> str:
    return sep.join(p for p in parts if p)


def _personal(doc: CVDocument, with_summary: bool) -> list[str]:
    info = doc.personalInfo
    lines = [line for line in (info.fullName, info.email, info.phone, info.address) if line]
    if with_summary and info.summary:
        lines.append(info.summary)
    return lines


def _education(doc: CVDocument) -> list[str]:
    lines = []
    for edu in doc.education:
        lines.append(_join(f"{edu.degree}, {edu.fieldOfStudy}", edu.institution))
        lines.append(_join(format_date_range(edu.startDate, edu.endDate), edu.grade))
        if edu.description:
            lines.append(edu.description)
    return [line for line in lines if line]


def _experience(doc: CVDocument) -> list[str]:
    lines = []
    for exp in doc.experience:
        lines.append(_join(exp.position, exp.company, sep=" at "))
        lines.append(_join(format_date_range(exp.startDate, exp.endDate), exp.location))
        if exp.description:
            lines.append(exp.description)
    return [line for line in lines if line]


def _certifications(doc: CVDocument) -> list[str]:
    lines = []
    for cert in doc.certifications:
        expiry = f"expires {cert.expiry}" if cert.expiry else ""
        lines.append(_join(cert.name, cert.issuer, cert.date, expiry))
        if cert.description:
            lines.append(cert.description)
    return lines


def _projects(doc: CVDocument) -> list[str]:
    lines = []
    for project in doc.projects:
        lines.append(_join(project.name, project.url or ""))
        dates = format_date_range(project.startDate, project.endDate)
        if dates:
            lines.append(dates)
        if project.description:
            lines.append(project.description)
    return lines


def build_preview(document: CVDocument, template: Template) -> list[PreviewSection]:
    """Return the template's sections in order, leaving out empty ones."""
    # The personal header carries the summary unless the template gives it its own section.
    separate_summary = Section.SUMMARY in template.sections
    builders = {
        Section.PERSONAL: ("Personal Information", lambda d: _personal(d, not separate_summary)),
        Section.SUMMARY: ("Summary", lambda d: [d.personalInfo.summary] if d.personalInfo.summary else []),
        Section.EDUCATION: ("Education", _education),
        Section.EXPERIENCE: ("Experience", _experience),
        Section.SKILLS: ("Skills", lambda d: [", ".join(d.skills)] if d.skills else []),
        Section.LANGUAGES: (
            "Languages",
            lambda d: [f"{lang.language} ({lang.proficiency.value})" for lang in d.languages],
        ),
        Section.CERTIFICATIONS: ("Certifications", _certifications),
        Section.PORTFOLIO: ("Projects", _projects),
        Section.INTERESTS: ("Interests", lambda d: [", ".join(d.interests)] if d.interests else []),
    }

    sections = []
    for section in template.sections:
        title, build = builders[section]
        lines = build(document)
        if lines:
            sections.append(PreviewSection(section, title, lines))
    return sections


def render_preview_text(document: CVDocument, template: Template) -> str:
    blocks = [f"[{template.name}]"]
    for section in build_preview(document, template):
        underline = "-" * len(section.title)
        blocks.append("\n".join([section.title, underline, *section.lines]))
    return "\n\n".join(blocks)
