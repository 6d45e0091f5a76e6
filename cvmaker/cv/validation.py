"""Field rules and user-facing messages for wizard forms.

Pydantic does the checking; this module maps its error types onto the
messages shown next to each field. A blank or missing value always
reports the field's "required" message, whatever rule tripped.
"""

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from cvmaker.shared import RecordValidationError
from cvmaker.cv.models import (
    Certification,
    Education,
    Experience,
    LanguageEntry,
    PersonalInfo,
    PersonalInfoForm,
    Project,
)


R = TypeVar("R", bound=BaseModel)

DATE_FORMAT = "Use MM/YYYY"
END_DATE_FORMAT = "Use MM/YYYY or Present"

MESSAGES: dict[type[BaseModel], dict[str, dict[str, str]]] = {
    PersonalInfoForm: {
        "fullName": {"required": "Full name is required", "string_too_short": "Name is too short"},
        "email": {"required": "Email is required", "value_error": "Invalid email"},
        "phone": {
            "required": "Phone number is required",
            "string_pattern_mismatch": "Phone number must be 10 digits",
        },
        "address": {"required": "Address is required"},
        "summary": {
            "required": "Professional summary is required",
            "string_too_short": "Summary should be at least 50 characters",
            "string_too_long": "Summary should not exceed 500 characters",
        },
    },
    Education: {
        "institution": {"required": "Institution name is required"},
        "degree": {"required": "Degree is required"},
        "fieldOfStudy": {"required": "Field of study is required"},
        "startDate": {"required": "Start date is required", "string_pattern_mismatch": DATE_FORMAT},
        "endDate": {"string_pattern_mismatch": END_DATE_FORMAT},
    },
    Experience: {
        "company": {"required": "Company name is required"},
        "position": {"required": "Position is required"},
        "startDate": {"required": "Start date is required", "string_pattern_mismatch": DATE_FORMAT},
        "endDate": {"string_pattern_mismatch": END_DATE_FORMAT},
    },
    Certification: {
        "name": {"required": "Certification name is required"},
        "issuer": {"required": "Issuer is required"},
        "date": {"required": "Date is required", "string_pattern_mismatch": DATE_FORMAT},
        "expiry": {"string_pattern_mismatch": DATE_FORMAT},
    },
    Project: {
        "name": {"required": "Project name is required"},
        "startDate": {"string_pattern_mismatch": DATE_FORMAT},
        "endDate": {"string_pattern_mismatch": END_DATE_FORMAT},
    },
    LanguageEntry: {
        "language": {"required": "Language name is required"},
        "proficiency": {
            "required": "Proficiency level is required",
            "enum": "Proficiency must be Basic, Intermediate, Advanced or Native/Fluent",
        },
    },
}

RECORD_NAMES = {
    PersonalInfoForm: "personal info",
    Education: "education",
    Experience: "experience",
    Certification: "certification",
    Project: "project",
    LanguageEntry: "language",
}


def _is_blank(error: Mapping[str, Any]) -> bool:
    if error["type"] == "missing":
        return True
    value = error.get("input")
    return value is None or (isinstance(value, str) and not value.strip())


def field_errors(record_type: type[BaseModel], exc: ValidationError) -> dict[str, str]:
    """Collapse a pydantic error list to one message per field."""
    rules = MESSAGES.get(record_type, {})
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        if field in errors:
            continue
        kind = "required" if _is_blank(error) else error["type"]
        errors[field] = rules.get(field, {}).get(kind, error["msg"])
    return errors


def validate_record(record_type: type[R], values: Mapping[str, Any]) -> R:
    """Build a record from form values or raise RecordValidationError."""
    try:
        return record_type.model_validate(dict(values))
    except ValidationError as e:
        raise RecordValidationError(
            RECORD_NAMES.get(record_type, record_type.__name__),
            field_errors(record_type, e),
            dict(values),
        ) from e


def validate_personal_info(values: Mapping[str, Any]) -> PersonalInfo:
    """Check personal info against its form rules and return it storable."""
    form = validate_record(PersonalInfoForm, values)
    return PersonalInfo(**form.model_dump(mode="json"))


def personal_info_errors(info: PersonalInfo) -> dict[str, str]:
    try:
        PersonalInfoForm.model_validate(info.model_dump())
    except ValidationError as e:
        return field_errors(PersonalInfoForm, e)
    return {}


def is_personal_info_complete(info: PersonalInfo) -> bool:
    return not personal_info_errors(info)
