"""Tests for wizard navigation, gating and drafts."""

import pytest

from cvmaker.shared import CollectionTypeError, IndexOutOfRangeError, RecordValidationError
from cvmaker.cv.store import Collection, DocumentStore
from cvmaker.cv.wizard import STEP_COUNT, Step, StepOutcome, WizardController


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def wizard(store):
    return WizardController(store)


@pytest.fixture
def filled_wizard(store, personal_info_values):
    store.set_personal_info(personal_info_values)
    return WizardController(store)


def walk_to(wizard: WizardController, step: Step) -> None:
    while wizard.current_step < step:
        assert wizard.advance() == StepOutcome.ADVANCED


def test_initial_state(wizard):
    assert wizard.current_step == Step.PERSONAL_INFO
    assert wizard.progress == 0
    assert STEP_COUNT == 6


def test_advance_blocked_without_email(store, wizard, personal_info_values):
    del personal_info_values["email"]
    store.set_personal_info(personal_info_values)

    assert wizard.advance() == StepOutcome.BLOCKED
    assert wizard.current_step == Step.PERSONAL_INFO

    store.set_personal_info({"email": "jane.doe@gmail.com"})

    assert wizard.advance() == StepOutcome.ADVANCED
    assert wizard.current_step == Step.EDUCATION


def test_retreat_is_clamped_at_first_step(wizard):
    assert wizard.retreat() == Step.PERSONAL_INFO
    assert wizard.current_step == Step.PERSONAL_INFO


def test_retreat_needs_no_validation(filled_wizard, store):
    walk_to(filled_wizard, Step.EXPERIENCE)
    store.set_personal_info({"email": ""})

    filled_wizard.retreat()
    filled_wizard.retreat()

    assert filled_wizard.current_step == Step.PERSONAL_INFO
    assert filled_wizard.advance() == StepOutcome.BLOCKED


def test_advance_from_last_step_requests_preview(store, personal_info_values):
    calls = []
    store.set_personal_info(personal_info_values)
    wizard = WizardController(store, on_preview=lambda: calls.append(True))
    walk_to(wizard, Step.CERTIFICATIONS)

    assert wizard.advance() == StepOutcome.PREVIEW_REQUESTED
    assert wizard.current_step == Step.CERTIFICATIONS
    assert wizard.progress == 1
    assert calls == [True]


def test_jump_to_preview_keeps_step(filled_wizard):
    walk_to(filled_wizard, Step.SKILLS)

    assert filled_wizard.jump_to_preview() == StepOutcome.PREVIEW_REQUESTED
    assert filled_wizard.current_step == Step.SKILLS


def test_wizard_can_cycle(filled_wizard):
    walk_to(filled_wizard, Step.CERTIFICATIONS)
    for _ in range(STEP_COUNT):
        filled_wizard.retreat()
    walk_to(filled_wizard, Step.LANGUAGES)

    assert filled_wizard.current_step == Step.LANGUAGES


def test_submit_personal_info_stores_and_advances(wizard, store, personal_info_values):
    assert wizard.submit_personal_info(personal_info_values) == StepOutcome.ADVANCED

    assert wizard.current_step == Step.EDUCATION
    assert store.personal_info.fullName == "Jane Doe"


def test_invalid_personal_info_leaves_state_alone(wizard, store, personal_info_values):
    personal_info_values["phone"] = "12345"

    with pytest.raises(RecordValidationError) as exc_info:
        wizard.submit_personal_info(personal_info_values)

    assert "phone" in exc_info.value.field_errors
    assert store.personal_info.phone == ""
    assert store.revision == 0
    assert wizard.current_step == Step.PERSONAL_INFO


def test_record_forms(filled_wizard, store, education_values):
    walk_to(filled_wizard, Step.EDUCATION)

    assert filled_wizard.add_record(Collection.EDUCATION, education_values) == 1
    filled_wizard.update_record(
        "education", 0, {**education_values, "endDate": "06/2022"}
    )

    records = store.get_collection("education")
    assert len(records) == 1
    assert records[0].endDate == "06/2022"

    filled_wizard.remove_record("education", 0)
    assert store.get_collection("education") == []
    assert filled_wizard.current_step == Step.EDUCATION


def test_invalid_record_is_not_added(filled_wizard, store):
    walk_to(filled_wizard, Step.EXPERIENCE)
    revision = store.revision

    with pytest.raises(RecordValidationError) as exc_info:
        filled_wizard.add_record("experience", {"company": "Acme", "startDate": "01/2020"})

    assert exc_info.value.field_errors == {"position": "Position is required"}
    assert store.get_collection("experience") == []
    assert store.revision == revision
    assert filled_wizard.current_step == Step.EXPERIENCE


def test_stale_index_propagates(filled_wizard, education_values):
    with pytest.raises(IndexOutOfRangeError):
        filled_wizard.update_record("education", 0, education_values)
    with pytest.raises(IndexOutOfRangeError):
        filled_wizard.remove_record("certifications", 3)


def test_skills_draft_committed_on_advance(filled_wizard, store):
    walk_to(filled_wizard, Step.SKILLS)

    assert filled_wizard.add_skill("Python")
    assert filled_wizard.add_skill(" SQL ")
    assert not filled_wizard.add_skill("Python")
    assert not filled_wizard.add_skill("   ")
    assert store.get_collection("skills") == []

    filled_wizard.advance()

    assert store.get_collection("skills") == ["Python", "SQL"]
    assert filled_wizard.current_step == Step.LANGUAGES


def test_skills_draft_discarded_on_retreat(filled_wizard, store):
    store.set_scalar_collection("skills", ["Go"])
    walk_to(filled_wizard, Step.SKILLS)
    assert filled_wizard.skills_draft == ["Go"]

    filled_wizard.add_skill("Rust")
    filled_wizard.remove_skill(0)
    filled_wizard.retreat()

    assert store.get_collection("skills") == ["Go"]


def test_languages_draft(filled_wizard, store):
    walk_to(filled_wizard, Step.LANGUAGES)

    assert filled_wizard.add_language("English", "Native/Fluent")
    assert not filled_wizard.add_language("French", "")
    assert not filled_wizard.add_language("", "Basic")
    with pytest.raises(RecordValidationError):
        filled_wizard.add_language("German", "Fluent-ish")

    filled_wizard.advance()

    languages = store.get_collection("languages")
    assert [lang.language for lang in languages] == ["English"]
    assert filled_wizard.current_step == Step.CERTIFICATIONS


def test_reset_keeps_wizard_step(filled_wizard, store):
    store.set_scalar_collection("skills", ["Go"])
    walk_to(filled_wizard, Step.SKILLS)
    store.reset()

    assert filled_wizard.current_step == Step.SKILLS
    assert store.personal_info.fullName == ""

    assert filled_wizard.advance() == StepOutcome.ADVANCED
    assert store.get_collection("skills") == []


def test_preview_commits_draft(filled_wizard, store):
    walk_to(filled_wizard, Step.SKILLS)
    filled_wizard.add_skill("Rust")

    assert filled_wizard.jump_to_preview() == StepOutcome.PREVIEW_REQUESTED
    assert store.get_collection("skills") == ["Rust"]

    filled_wizard.add_skill("Go")
    filled_wizard.advance()

    assert store.get_collection("skills") == ["Rust", "Go"]


def test_unchanged_draft_is_not_written(filled_wizard, store):
    walk_to(filled_wizard, Step.SKILLS)
    revision = store.revision

    filled_wizard.advance()

    assert store.revision == revision


@pytest.mark.parametrize("collection", ["skills", "languages", "interests"])
def test_record_forms_reject_scalar_collections(filled_wizard, collection):
    with pytest.raises(CollectionTypeError):
        filled_wizard.add_record(collection, {"name": "x"})
    with pytest.raises(CollectionTypeError):
        filled_wizard.update_record(collection, 0, {"name": "x"})


def test_step_titles():
    assert [s.title for s in Step] == [
        "Personal Info",
        "Education",
        "Experience",
        "Skills",
        "Languages",
        "Certifications",
    ]
