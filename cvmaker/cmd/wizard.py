"""Interactive terminal wizard for building a CV step by step."""

import argparse
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from cvmaker.config import get_settings
from cvmaker.shared import (
    Color,
    DocumentFileError,
    ExportFailure,
    InvalidPaperSizeError,
    PaperSize,
    RecordValidationError,
    TemplateNotFoundError,
    echo,
)
from cvmaker.cv import (
    Collection,
    CVExporter,
    CVGenerator,
    CVSession,
    Proficiency,
    Step,
    StepOutcome,
    list_templates,
)
from cvmaker.cv.io import dump_document, load_document
from cvmaker.cv.validation import personal_info_errors
from cvmaker.cv.wizard import STEP_COLLECTIONS, STEP_COUNT


FORM_FIELDS: dict[Collection | str, list[tuple[str, str]]] = {
    "personalInfo": [
        ("fullName", "Full Name"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("address", "Address"),
        ("summary", "Professional Summary"),
    ],
    Collection.EDUCATION: [
        ("institution", "Institution"),
        ("degree", "Degree"),
        ("fieldOfStudy", "Field of Study"),
        ("startDate", "Start Date (MM/YYYY)"),
        ("endDate", "End Date (MM/YYYY or Present, optional)"),
        ("grade", "Grade (optional)"),
        ("description", "Description (optional)"),
    ],
    Collection.EXPERIENCE: [
        ("company", "Company"),
        ("position", "Position"),
        ("startDate", "Start Date (MM/YYYY)"),
        ("endDate", "End Date (MM/YYYY or Present, optional)"),
        ("location", "Location (optional)"),
        ("description", "Description (optional)"),
    ],
    Collection.CERTIFICATIONS: [
        ("name", "Certification Name"),
        ("issuer", "Issuing Organization"),
        ("date", "Date Earned (MM/YYYY)"),
        ("expiry", "Expiry Date (optional)"),
        ("description", "Description (optional)"),
    ],
}

HELP = {
    Step.PERSONAL_INFO: "e: edit",
    Step.EDUCATION: "a: add  u N: update  d N: delete",
    Step.EXPERIENCE: "a: add  u N: update  d N: delete",
    Step.SKILLS: "a SKILL: add  d N: delete",
    Step.LANGUAGES: "a: add  d N: delete",
    Step.CERTIFICATIONS: "a: add  u N: update  d N: delete",
}


class QuitWizard(Exception):
    pass


class InvalidItemNumberError(ValueError):
    def __init__(self, arg: str):
        super().__init__(f"Invalid item number: {arg or '(none)'}")


def _item_index(arg: str, length: int) -> int:
    """Turn a 1-based item number typed by the user into a list index."""
    try:
        index = int(arg) - 1
    except ValueError as exc:
        raise InvalidItemNumberError(arg) from exc
    if not 0 <= index < length:
        raise InvalidItemNumberError(arg)
    return index


class WizardRunner:
    """Drives a session's wizard from line-based terminal input."""

    def __init__(
        self,
        session: CVSession,
        output: str | None = None,
        prompt: Callable[[str], str] = input,
    ):
        self.session = session
        self.output = output
        self.prompt = prompt
        self.wizard = session.start_wizard()
        self._retained: dict[tuple[Collection | str, int | None], dict] = {}

    def ask(self, text: str) -> str:
        try:
            return self.prompt(text)
        except EOFError as exc:
            raise QuitWizard() from exc

    def run(self) -> int:
        try:
            while True:
                if self._step_once():
                    return 0
        except QuitWizard:
            self.wizard.commit_draft()
            echo("Wizard closed.", Color.WARNING)
            return 0

    def _step_once(self) -> bool:
        """Handle one command; True once the CV has been exported."""
        step = self.wizard.current_step
        echo(f"Step {step + 1} of {STEP_COUNT}: {step.title}", Color.INFO)
        self._show_step(step)
        line = self.ask(f"[{HELP[step]}  n: next  b: back  p: preview  q: quit] > ").strip()
        command, _, arg = line.partition(" ")

        if command == "q":
            raise QuitWizard()
        if command == "b":
            self.wizard.retreat()
        elif command == "n":
            outcome = self.wizard.advance()
            if outcome == StepOutcome.BLOCKED:
                self._show_errors(personal_info_errors(self.session.store.personal_info))
            elif outcome == StepOutcome.PREVIEW_REQUESTED:
                return self._preview()
        elif command == "p":
            self.wizard.jump_to_preview()
            return self._preview()
        else:
            self._step_command(step, command, arg.strip())
        return False

    def _step_command(self, step: Step, command: str, arg: str) -> None:
        try:
            if step == Step.PERSONAL_INFO and command == "e":
                self._edit_personal_info()
            elif step in STEP_COLLECTIONS and command in ("a", "u", "d"):
                self._record_command(STEP_COLLECTIONS[step], command, arg)
            elif step == Step.SKILLS and command == "a":
                if not self.wizard.add_skill(arg):
                    echo("Skill is empty or already listed", Color.WARNING)
            elif step == Step.SKILLS and command == "d":
                self.wizard.remove_skill(_item_index(arg, len(self.wizard.skills_draft)))
            elif step == Step.LANGUAGES and command == "a":
                self._add_language()
            elif step == Step.LANGUAGES and command == "d":
                self.wizard.remove_language(
                    _item_index(arg, len(self.wizard.languages_draft))
                )
            else:
                echo(f"Unknown command: {command or '(empty)'}", Color.WARNING)
        except RecordValidationError as e:
            self._show_errors(e.field_errors)
        except InvalidItemNumberError as e:
            echo(str(e), Color.WARNING)

    def _show_step(self, step: Step) -> None:
        store = self.session.store
        if step == Step.PERSONAL_INFO:
            for key, label in FORM_FIELDS["personalInfo"]:
                echo(f"  {label}: {getattr(store.personal_info, key)}", Color.INFO)
        elif step in STEP_COLLECTIONS:
            fields = FORM_FIELDS[STEP_COLLECTIONS[step]]
            for i, record in enumerate(store.get_collection(STEP_COLLECTIONS[step]), start=1):
                echo(f"  {i}. {getattr(record, fields[0][0])} - {getattr(record, fields[1][0])}")
        elif step == Step.SKILLS:
            for i, skill in enumerate(self.wizard.skills_draft, start=1):
                echo(f"  {i}. {skill}")
        elif step == Step.LANGUAGES:
            for i, lang in enumerate(self.wizard.languages_draft, start=1):
                echo(f"  {i}. {lang.language} ({lang.proficiency.value})")

    def _show_errors(self, errors: dict[str, str]) -> None:
        for field, message in errors.items():
            echo(f"  {field}: {message}", Color.ERROR)

    def _ask_form(self, fields: list[tuple[str, str]], initial: dict) -> dict:
        values = {}
        for key, label in fields:
            current = initial.get(key) or ""
            answer = self.ask(f"{label} [{current}]: " if current else f"{label}: ").strip()
            values[key] = answer or current
        return values

    def _edit_personal_info(self) -> None:
        key = ("personalInfo", None)
        initial = self._retained.pop(key, self.session.store.personal_info.model_dump())
        values = self._ask_form(FORM_FIELDS["personalInfo"], initial)
        try:
            outcome = self.wizard.submit_personal_info(values)
        except RecordValidationError:
            self._retained[key] = values
            raise
        if outcome == StepOutcome.ADVANCED:
            echo("Personal info saved", Color.SUCCESS)

    def _record_command(self, collection: Collection, command: str, arg: str) -> None:
        records = self.session.store.get_collection(collection)
        if command == "d":
            self.wizard.remove_record(collection, _item_index(arg, len(records)))
            # later items shift down, so kept update values no longer line up
            for key in [k for k in self._retained if k[0] == collection and k[1] is not None]:
                del self._retained[key]
            return

        index = _item_index(arg, len(records)) if command == "u" else None
        key = (collection, index)
        default = records[index].model_dump() if index is not None else {}
        initial = self._retained.pop(key, default)

        values = self._ask_form(FORM_FIELDS[collection], initial)
        try:
            if index is None:
                self.wizard.add_record(collection, values)
            else:
                self.wizard.update_record(collection, index, values)
        except RecordValidationError:
            self._retained[key] = values
            raise
        echo("Saved", Color.SUCCESS)

    def _add_language(self) -> None:
        language = self.ask("Language: ")
        levels = ", ".join(p.value for p in Proficiency)
        proficiency = self.ask(f"Proficiency ({levels}): ")
        if not self.wizard.add_language(language, proficiency):
            echo("Language and proficiency are both needed", Color.WARNING)

    def _preview(self) -> bool:
        print(self.session.preview_text())
        if self.ask("Generate PDF? [y/N] ").strip().lower() != "y":
            return False
        try:
            path = self.session.export(self.output)
        except ExportFailure as e:
            echo(str(e), Color.ERROR)
            return False
        echo(f"CV PDF created: {path}", Color.SUCCESS)
        return True


def choose_template(session: CVSession, prompt: Callable[[str], str] = input) -> bool:
    """Ask for a template until one is picked; False if input ends first."""
    templates = list_templates()
    echo("Choose a template:", Color.INFO)
    for template in templates:
        echo(f"  {template.id}: {template.name} - {template.description}", Color.INFO)

    while True:
        try:
            answer = prompt("Template id: ").strip()
        except EOFError:
            return False
        try:
            session.select_template(answer)
            return True
        except TemplateNotFoundError as e:
            echo(str(e.args[0]), Color.WARNING)


def cmd_wizard(args: argparse.Namespace, prompt: Callable[[str], str] = input) -> int:
    """Handle the interactive wizard command."""
    settings = get_settings()
    try:
        paper_size = PaperSize.from_string(args.size or settings.paper_size)
    except InvalidPaperSizeError as e:
        echo(str(e), Color.ERROR)
        return 1

    document = None
    if args.input:
        try:
            document = load_document(Path(args.input))
        except (DocumentFileError, ValidationError) as e:
            echo(f"Cannot start from {args.input}: {e}", Color.ERROR)
            return 1

    exporter = CVExporter(
        settings.export_dir,
        CVGenerator(font_name=args.font or settings.font, paper_size=paper_size),
    )
    session = CVSession(exporter, document=document)

    if args.template:
        try:
            session.select_template(args.template)
        except TemplateNotFoundError as e:
            echo(str(e.args[0]), Color.ERROR)
            return 1
    elif not choose_template(session, prompt):
        return 1

    result = WizardRunner(session, output=args.output, prompt=prompt).run()

    if args.save:
        try:
            path = dump_document(session.store.document, args.save)
        except (DocumentFileError, OSError) as e:
            echo(f"Could not save document: {e}", Color.ERROR)
            return 1
        echo(f"Document saved: {path}", Color.SUCCESS)
    return result
