"""In-memory holder of the CV document.

Every mutation is one explicit method; none of them validates field
contents, callers hand over records that already passed their form
rules. Positions are plain list indices, so removing index i shifts
everything after it down by one. ``revision`` increases on each change
and lets a caller notice that indices it holds may be stale.
"""

import logging
from enum import Enum
from typing import Any, Mapping, Sequence

from pydantic import BaseModel

from cvmaker.shared import CollectionTypeError, IndexOutOfRangeError
from cvmaker.cv.models import (
    Certification,
    CVDocument,
    Education,
    Experience,
    LanguageEntry,
    PersonalInfo,
    Project,
)


logger = logging.getLogger(__name__)


class Collection(str, Enum):
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    SKILLS = "skills"
    LANGUAGES = "languages"
    INTERESTS = "interests"


RECORD_TYPES: dict[Collection, type[BaseModel]] = {
    Collection.EDUCATION: Education,
    Collection.EXPERIENCE: Experience,
    Collection.PROJECTS: Project,
    Collection.CERTIFICATIONS: Certification,
}

SCALAR_TYPES: dict[Collection, type] = {
    Collection.SKILLS: str,
    Collection.LANGUAGES: LanguageEntry,
    Collection.INTERESTS: str,
}


class DocumentStore:
    """Owns one CVDocument and applies mutations to it."""

    def __init__(self, document: CVDocument | None = None):
        self._document = document.model_copy(deep=True) if document else CVDocument()
        self.revision = 0

    @property
    def document(self) -> CVDocument:
        return self._document.model_copy(deep=True)

    @property
    def personal_info(self) -> PersonalInfo:
        return self._document.personalInfo.model_copy()

    def get_collection(self, collection: Collection | str) -> list:
        name = Collection(collection)
        return [
            item.model_copy() if isinstance(item, BaseModel) else item
            for item in getattr(self._document, name.value)
        ]

    def set_personal_info(self, partial: Mapping[str, Any]) -> PersonalInfo:
        """Merge the given fields into personal info; other fields are kept."""
        unknown = set(partial) - set(PersonalInfo.model_fields)
        if unknown:
            raise TypeError(f"Unknown personal info fields: {sorted(unknown)}")
        if not partial:
            return self.personal_info

        self._document.personalInfo = self._document.personalInfo.model_copy(
            update=dict(partial)
        )
        self._bump("personalInfo")
        return self.personal_info

    def append_item(self, collection: Collection | str, item: BaseModel) -> int:
        """Append a record and return the collection's new length."""
        items = self._records(collection, item)
        items.append(item)
        self._bump(collection)
        return len(items)

    def replace_item(self, collection: Collection | str, index: int, item: BaseModel) -> None:
        items = self._records(collection, item)
        self._check_index(collection, index, items)
        items[index] = item
        self._bump(collection)

    def remove_item(self, collection: Collection | str, index: int) -> BaseModel:
        """Delete the record at ``index`` and return it."""
        items = self._records(collection)
        self._check_index(collection, index, items)
        removed = items.pop(index)
        self._bump(collection)
        return removed

    def set_scalar_collection(self, collection: Collection | str, items: Sequence) -> None:
        """Replace skills, languages or interests wholesale."""
        name = Collection(collection)
        if name not in SCALAR_TYPES:
            raise CollectionTypeError(name.value, "use append/replace/remove for records")

        expected = SCALAR_TYPES[name]
        bad = [item for item in items if not isinstance(item, expected)]
        if bad:
            raise CollectionTypeError(name.value, f"expected {expected.__name__} items")

        setattr(self._document, name.value, list(items))
        self._bump(name)

    def reset(self) -> None:
        """Restore empty defaults. Wizard position and template are not ours to touch."""
        self._document = CVDocument()
        self._bump("document")

    def _records(self, collection: Collection | str, item: BaseModel | None = None) -> list:
        name = Collection(collection)
        record_type = RECORD_TYPES.get(name)
        if record_type is None:
            raise CollectionTypeError(name.value, "use set_scalar_collection for this list")
        if item is not None and not isinstance(item, record_type):
            raise CollectionTypeError(
                name.value, f"expected {record_type.__name__}, got {type(item).__name__}"
            )
        return getattr(self._document, name.value)

    def _check_index(self, collection: Collection | str, index: int, items: list) -> None:
        if not 0 <= index < len(items):
            err = IndexOutOfRangeError(Collection(collection).value, index, len(items))
            logger.error("Stale or invalid index: %s", err)
            raise err

    def _bump(self, what: Collection | str) -> None:
        self.revision += 1
        label = what.value if isinstance(what, Collection) else what
        logger.debug("Updated %s (revision %d)", label, self.revision)
