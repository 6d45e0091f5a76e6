"""Step-by-step editing flow over a DocumentStore.

The wizard walks six fixed steps. Moving forward is gated by the
current step's completion predicate, moving back never is, and both
clamp at the ends instead of failing. Advancing past the last step, or
calling jump_to_preview(), raises the preview signal without moving.

Record forms (education, experience, certifications) are validated per
submission; a rejected submission leaves both the store and the step
untouched. Skills and languages are edited in a draft that is loaded
when the step is entered and committed to the store on advance or when
the preview is requested. A draft loaded before some other change to
the document, such as a reset, is reloaded rather than written back.
"""

import logging
from enum import Enum, IntEnum
from typing import Any, Callable, Mapping

from cvmaker.shared import CollectionTypeError
from cvmaker.cv.models import LanguageEntry
from cvmaker.cv.store import Collection, DocumentStore, RECORD_TYPES
from cvmaker.cv.validation import (
    is_personal_info_complete,
    validate_personal_info,
    validate_record,
)


logger = logging.getLogger(__name__)


class Step(IntEnum):
    PERSONAL_INFO = 0
    EDUCATION = 1
    EXPERIENCE = 2
    SKILLS = 3
    LANGUAGES = 4
    CERTIFICATIONS = 5

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()


class StepOutcome(str, Enum):
    ADVANCED = "advanced"
    BLOCKED = "blocked"
    PREVIEW_REQUESTED = "preview_requested"


STEP_COUNT = len(Step)

STEP_COLLECTIONS = {
    Step.EDUCATION: Collection.EDUCATION,
    Step.EXPERIENCE: Collection.EXPERIENCE,
    Step.CERTIFICATIONS: Collection.CERTIFICATIONS,
}


class WizardController:
    def __init__(
        self,
        store: DocumentStore,
        on_preview: Callable[[], None] | None = None,
    ):
        self.store = store
        self.on_preview = on_preview
        self._current = Step.PERSONAL_INFO
        self.skills_draft: list[str] = []
        self.languages_draft: list[LanguageEntry] = []
        self._draft_revision = store.revision

    @property
    def current_step(self) -> Step:
        return self._current

    @property
    def progress(self) -> float:
        return round(self._current / (STEP_COUNT - 1), 2)

    def is_step_complete(self, step: Step | None = None) -> bool:
        step = self._current if step is None else step
        if step == Step.PERSONAL_INFO:
            return is_personal_info_complete(self.store.personal_info)
        return True

    def advance(self) -> StepOutcome:
        if not self.is_step_complete():
            logger.info("Cannot leave %s: step incomplete", self._current.title)
            return StepOutcome.BLOCKED

        if self._current == STEP_COUNT - 1:
            return self.jump_to_preview()

        self.commit_draft()
        self._move_to(Step(self._current + 1))
        return StepOutcome.ADVANCED

    def retreat(self) -> Step:
        if self._current > 0:
            self._move_to(Step(self._current - 1))
        return self._current

    def jump_to_preview(self) -> StepOutcome:
        self.commit_draft()
        logger.debug("Preview requested from %s", self._current.title)
        if self.on_preview is not None:
            self.on_preview()
        return StepOutcome.PREVIEW_REQUESTED

    def submit_personal_info(self, values: Mapping[str, Any]) -> StepOutcome:
        """Validate and store personal info, then try to move on."""
        info = validate_personal_info(values)
        self.store.set_personal_info(info.model_dump())
        return self.advance()

    def add_record(self, collection: Collection | str, values: Mapping[str, Any]) -> int:
        """Validate a record form and append it. Returns the new list length."""
        name = Collection(collection)
        record = validate_record(self._record_type(name), values)
        return self.store.append_item(name, record)

    def update_record(
        self, collection: Collection | str, index: int, values: Mapping[str, Any]
    ) -> None:
        name = Collection(collection)
        record = validate_record(self._record_type(name), values)
        self.store.replace_item(name, index, record)

    def remove_record(self, collection: Collection | str, index: int) -> None:
        self.store.remove_item(collection, index)

    def add_skill(self, text: str) -> bool:
        skill = text.strip()
        if not skill or skill in self.skills_draft:
            return False
        self.skills_draft.append(skill)
        return True

    def remove_skill(self, index: int) -> str:
        return self.skills_draft.pop(index)

    def add_language(self, language: str, proficiency: str) -> bool:
        """Add a language pair to the draft; an incomplete pair is ignored."""
        if not language.strip() or not proficiency.strip():
            return False
        entry = validate_record(
            LanguageEntry, {"language": language, "proficiency": proficiency}
        )
        self.languages_draft.append(entry)
        return True

    def remove_language(self, index: int) -> LanguageEntry:
        return self.languages_draft.pop(index)

    def commit_draft(self) -> None:
        """Write the current step's skills or languages draft to the store."""
        if self._current not in (Step.SKILLS, Step.LANGUAGES):
            return
        if self.store.revision != self._draft_revision:
            logger.info(
                "Document changed since the %s draft was loaded, reloading",
                self._current.title,
            )
            self.reload_draft()
            return

        name, draft = self._draft()
        if draft != self.store.get_collection(name):
            self.store.set_scalar_collection(name, draft)
        self._draft_revision = self.store.revision

    def reload_draft(self) -> None:
        """Replace the current step's draft with what the store holds."""
        if self._current == Step.SKILLS:
            self.skills_draft = self.store.get_collection(Collection.SKILLS)
        elif self._current == Step.LANGUAGES:
            self.languages_draft = self.store.get_collection(Collection.LANGUAGES)
        self._draft_revision = self.store.revision

    def _draft(self) -> tuple[Collection, list]:
        if self._current == Step.SKILLS:
            return Collection.SKILLS, self.skills_draft
        return Collection.LANGUAGES, self.languages_draft

    def _record_type(self, name: Collection) -> type:
        record_type = RECORD_TYPES.get(name)
        if record_type is None:
            raise CollectionTypeError(name.value, "not a record form")
        return record_type

    def _move_to(self, step: Step) -> None:
        logger.debug("Step %s -> %s", self._current.title, step.title)
        self._current = step
        self.reload_draft()
