"""Pydantic models for the CV document.

Field names follow the camelCase keys used in document files, so a
loaded file maps straight onto the models. Record models carry their
required-field and date-format rules; the personal info stored in the
document is lenient because it starts out empty, and its rules live in
PersonalInfoForm.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field, StringConstraints


MONTH_YEAR = r"(0[1-9]|1[0-2])/\d{4}"

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
MonthYear = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=rf"^{MONTH_YEAR}$")
]
OptionalMonthYear = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=rf"^({MONTH_YEAR})?$")
]
EndDate = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=rf"^({MONTH_YEAR}|Present)?$")
]


class Proficiency(str, Enum):
    BASIC = "Basic"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    NATIVE = "Native/Fluent"


class PersonalInfo(BaseModel):
    """Contact details and summary as currently stored."""

    fullName: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    summary: str = ""


class PersonalInfoForm(BaseModel):
    """Personal info as it must look to leave the first wizard step."""

    fullName: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    email: EmailStr
    phone: Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[0-9]{10}$")]
    address: RequiredText
    summary: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=50, max_length=500)
    ]


class Education(BaseModel):
    """Education entry."""

    institution: RequiredText
    degree: RequiredText
    fieldOfStudy: RequiredText
    startDate: MonthYear
    endDate: EndDate = ""
    grade: str = ""
    description: str = ""


class Experience(BaseModel):
    """Work experience entry."""

    company: RequiredText
    position: RequiredText
    startDate: MonthYear
    endDate: EndDate = ""
    location: str = ""
    description: str = ""


class Certification(BaseModel):
    """Certificate or license entry."""

    name: RequiredText
    issuer: RequiredText
    date: MonthYear
    expiry: OptionalMonthYear = ""
    description: str = ""


class Project(BaseModel):
    """Personal or professional project."""

    name: RequiredText
    description: str = ""
    startDate: OptionalMonthYear = ""
    endDate: EndDate = ""
    url: Optional[str] = None


class LanguageEntry(BaseModel):
    """Spoken language with its proficiency level."""

    language: RequiredText
    proficiency: Proficiency


class CVDocument(BaseModel):
    """Root CV document, one per editing session."""

    personalInfo: PersonalInfo = Field(default_factory=PersonalInfo)
    education: list[Education] = []
    experience: list[Experience] = []
    projects: list[Project] = []
    certifications: list[Certification] = []
    skills: list[str] = []
    languages: list[LanguageEntry] = []
    interests: list[str] = []

    class Config:
        extra = "ignore"
