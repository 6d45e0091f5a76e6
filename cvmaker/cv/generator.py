"""PDF generation for CV documents using reportlab.

Renders a CVDocument to PDF following a template's section order and
accent color. CVExporter wraps the generator with output-path naming
and turns any failure into ExportFailure.
"""

import logging
import re
import time
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
)

from cvmaker.shared import ExportFailure, PaperSize, sanitize_filename
from cvmaker.cv.models import CVDocument
from cvmaker.cv.preview import format_date_range
from cvmaker.cv.templates import Section, Template


logger = logging.getLogger(__name__)

MARGIN_H = 0.75 * inch
MARGIN_V = 0.5 * inch
FONT_SIZE_NAME = 24
FONT_SIZE_SECTION = 14
FONT_SIZE_BODY = 10
FONT_SIZE_SMALL = 9
DEFAULT_ACCENT = "#000000"

BASE_FONTS = {
    "helvetica": ("Helvetica", "Helvetica-Bold"),
    "times": ("Times-Roman", "Times-Bold"),
    "courier": ("Courier", "Courier-Bold"),
}


def _text(value: str) -> str:
    return escape(value).replace("\n", "<br/>")


class CVGenerator:
    """Generates PDF files from CV documents."""

    def __init__(self, font_name: str = "Helvetica", paper_size: PaperSize = PaperSize.A4):
        try:
            self.font, self.bold_font = BASE_FONTS[font_name.lower()]
        except KeyError:
            logger.warning("Font '%s' not available, using Helvetica", font_name)
            self.font, self.bold_font = BASE_FONTS["helvetica"]
        self.paper_size = paper_size
        self.styles = self._create_styles(DEFAULT_ACCENT)

    def _create_styles(self, accent: str) -> dict[str, ParagraphStyle]:
        """Create paragraph styles for the CV elements."""
        base = getSampleStyleSheet()
        accent_color = HexColor(accent)

        return {
            "name": ParagraphStyle(
                "Name",
                parent=base["Normal"],
                fontName=self.bold_font,
                fontSize=FONT_SIZE_NAME,
                leading=FONT_SIZE_NAME * 1.2,
                alignment=TA_CENTER,
                textColor=accent_color,
                spaceAfter=4,
            ),
            "contact": ParagraphStyle(
                "Contact",
                parent=base["Normal"],
                fontName=self.font,
                fontSize=FONT_SIZE_SMALL,
                leading=FONT_SIZE_SMALL * 1.4,
                alignment=TA_CENTER,
                spaceAfter=12,
            ),
            "section_header": ParagraphStyle(
                "SectionHeader",
                parent=base["Normal"],
                fontName=self.bold_font,
                fontSize=FONT_SIZE_SECTION,
                leading=FONT_SIZE_SECTION * 1.2,
                textColor=accent_color,
                spaceBefore=12,
                spaceAfter=6,
            ),
            "entry_title": ParagraphStyle(
                "EntryTitle",
                parent=base["Normal"],
                fontName=self.font,
                fontSize=FONT_SIZE_BODY + 1,
                leading=(FONT_SIZE_BODY + 1) * 1.2,
                spaceBefore=6,
                spaceAfter=2,
            ),
            "entry_subtitle": ParagraphStyle(
                "EntrySubtitle",
                parent=base["Normal"],
                fontName=self.font,
                fontSize=FONT_SIZE_SMALL,
                leading=FONT_SIZE_SMALL * 1.2,
                textColor="gray",
                spaceAfter=4,
            ),
            "body": ParagraphStyle(
                "Body",
                parent=base["Normal"],
                fontName=self.font,
                fontSize=FONT_SIZE_BODY,
                leading=FONT_SIZE_BODY * 1.4,
                alignment=TA_LEFT,
                spaceAfter=4,
            ),
            "bullet": ParagraphStyle(
                "Bullet",
                parent=base["Normal"],
                fontName=self.font,
                fontSize=FONT_SIZE_BODY,
                leading=FONT_SIZE_BODY * 1.3,
                leftIndent=6,
                spaceAfter=1,
            ),
        }

    def generate(self, document: CVDocument, template: Template, output_path: Path) -> None:
        """Generate PDF from a document laid out by ``template``."""
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=(self.paper_size.width, self.paper_size.height),
            leftMargin=MARGIN_H,
            rightMargin=MARGIN_H,
            topMargin=MARGIN_V,
            bottomMargin=MARGIN_V,
            title=document.personalInfo.fullName or "CV",
        )
        self.styles = self._create_styles(template.color)

        story = []
        separate_summary = Section.SUMMARY in template.sections
        for section in template.sections:
            if section == Section.PERSONAL:
                self._add_personal(story, document, with_summary=not separate_summary)
            elif section == Section.SUMMARY and document.personalInfo.summary:
                self._add_header(story, "Summary")
                story.append(Paragraph(_text(document.personalInfo.summary), self.styles["body"]))
            elif section == Section.EXPERIENCE and document.experience:
                self._add_experience(story, document.experience)
            elif section == Section.EDUCATION and document.education:
                self._add_education(story, document.education)
            elif section == Section.SKILLS and document.skills:
                self._add_header(story, "Skills")
                story.append(Paragraph(_text(", ".join(document.skills)), self.styles["body"]))
            elif section == Section.LANGUAGES and document.languages:
                self._add_header(story, "Languages")
                self._add_bullet_list(
                    story,
                    [f"{lang.language} ({lang.proficiency.value})" for lang in document.languages],
                )
            elif section == Section.CERTIFICATIONS and document.certifications:
                self._add_certifications(story, document.certifications)
            elif section == Section.PORTFOLIO and document.projects:
                self._add_projects(story, document.projects)
            elif section == Section.INTERESTS and document.interests:
                self._add_header(story, "Interests")
                story.append(Paragraph(_text(", ".join(document.interests)), self.styles["body"]))

        if not story:
            story.append(Spacer(1, 1))
        doc.build(story)

    def _add_header(self, story: list, title: str) -> None:
        story.append(Paragraph(title, self.styles["section_header"]))

    def _add_personal(self, story: list, document: CVDocument, with_summary: bool) -> None:
        """Add header section with name and contact info."""
        info = document.personalInfo
        if info.fullName:
            story.append(Paragraph(_text(info.fullName), self.styles["name"]))

        contact_parts = [p for p in (info.email, info.phone, info.address) if p]
        if contact_parts:
            story.append(
                Paragraph(_text(" | ".join(contact_parts)), self.styles["contact"])
            )

        if with_summary and info.summary:
            story.append(Spacer(1, 8))
            story.append(Paragraph(_text(info.summary), self.styles["body"]))

    def _add_experience(self, story: list, entries: list) -> None:
        self._add_header(story, "Experience")

        for entry in entries:
            title = f"<b>{_text(entry.position)}</b> at {_text(entry.company)}"
            story.append(Paragraph(title, self.styles["entry_title"]))

            subtitle = " | ".join(
                p for p in (format_date_range(entry.startDate, entry.endDate), entry.location) if p
            )
            if subtitle:
                story.append(Paragraph(_text(subtitle), self.styles["entry_subtitle"]))

            if entry.description:
                story.append(Paragraph(_text(entry.description), self.styles["body"]))

    def _add_education(self, story: list, entries: list) -> None:
        self._add_header(story, "Education")

        for entry in entries:
            title = f"<b>{_text(entry.degree)}, {_text(entry.fieldOfStudy)}</b> - {_text(entry.institution)}"
            story.append(Paragraph(title, self.styles["entry_title"]))

            subtitle_parts = []
            date_str = format_date_range(entry.startDate, entry.endDate)
            if date_str:
                subtitle_parts.append(date_str)
            if entry.grade:
                subtitle_parts.append(f"Grade: {entry.grade}")

            if subtitle_parts:
                story.append(
                    Paragraph(_text(" | ".join(subtitle_parts)), self.styles["entry_subtitle"])
                )

            if entry.description:
                story.append(Paragraph(_text(entry.description), self.styles["body"]))

    def _add_certifications(self, story: list, entries: list) -> None:
        self._add_header(story, "Certifications")

        for cert in entries:
            story.append(
                Paragraph(
                    f"<b>{_text(cert.name)}</b> - {_text(cert.issuer)}",
                    self.styles["entry_title"],
                )
            )
            subtitle = cert.date + (f" (expires {cert.expiry})" if cert.expiry else "")
            story.append(Paragraph(_text(subtitle), self.styles["entry_subtitle"]))

            if cert.description:
                story.append(Paragraph(_text(cert.description), self.styles["body"]))

    def _add_projects(self, story: list, projects: list) -> None:
        self._add_header(story, "Projects")

        for project in projects:
            title = f"<b>{_text(project.name)}</b>"
            if project.url:
                url = _text(project.url)
                title += f' (<a href="{url}">{url}</a>)'

            story.append(Paragraph(title, self.styles["entry_title"]))

            if project.description:
                story.append(Paragraph(_text(project.description), self.styles["body"]))

            date_str = format_date_range(project.startDate, project.endDate)
            if date_str:
                story.append(Paragraph(date_str, self.styles["entry_subtitle"]))

    def _add_bullet_list(self, story: list, items: list[str]) -> None:
        """Add a bulleted list to the story."""
        list_items = [ListItem(Paragraph(_text(item), self.styles["bullet"])) for item in items]
        story.append(
            ListFlowable(
                list_items,
                bulletType="bullet",
                start="circle",
                leftIndent=6,
                bulletFontSize=6,
                bulletOffsetY=-2,
            )
        )


def default_filename(document: CVDocument, now_ms: int | None = None) -> str:
    """CV_<Full_Name>_<epoch ms>.pdf"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    name = re.sub(r"\s+", "_", document.personalInfo.fullName.strip())
    return sanitize_filename(f"CV_{name}_{now_ms}.pdf")


class CVExporter:
    """Writes a document to disk as PDF.

    The contract is document in, file path or ExportFailure out; neither
    the document nor anything holding it is modified.
    """

    def __init__(self, export_dir: Path, generator: CVGenerator | None = None):
        self.export_dir = Path(export_dir)
        self.generator = generator or CVGenerator()

    def export(
        self,
        document: CVDocument,
        template: Template,
        output_path: Path | str | None = None,
    ) -> Path:
        path = Path(output_path) if output_path else self.export_dir / default_filename(document)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.generator.generate(document, template, path)
        except Exception as e:
            logger.error("PDF export failed for %s: %s", path, e)
            raise ExportFailure(str(path), e) from e

        logger.info("Exported CV to %s", path)
        return path
