import pytest
import yaml

from cvmaker.cv.models import (
    Certification,
    CVDocument,
    Education,
    Experience,
    LanguageEntry,
    PersonalInfo,
    Project,
)


SUMMARY = (
    "Backend engineer with eight years of experience building payment "
    "platforms and data pipelines in Python."
)


@pytest.fixture
def personal_info_values():
    return {
        "fullName": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "phone": "5551234567",
        "address": "12 Main Street, Springfield",
        "summary": SUMMARY,
    }


@pytest.fixture
def education_values():
    return {
        "institution": "MIT",
        "degree": "BSc",
        "fieldOfStudy": "CS",
        "startDate": "09/2018",
    }


@pytest.fixture
def sample_document(personal_info_values):
    return CVDocument(
        personalInfo=PersonalInfo(**personal_info_values),
        education=[
            Education(
                institution="MIT",
                degree="BSc",
                fieldOfStudy="CS",
                startDate="09/2018",
                endDate="06/2022",
                grade="A",
            )
        ],
        experience=[
            Experience(
                company="Acme & Sons",
                position="Engineer",
                startDate="07/2022",
                endDate="Present",
                location="Remote",
                description="Built <fast> things.",
            )
        ],
        projects=[Project(name="cvmaker", description="CV builder", url="https://example.com")],
        certifications=[
            Certification(name="AWS SAA", issuer="Amazon", date="01/2023", expiry="01/2026")
        ],
        skills=["Python", "SQL"],
        languages=[LanguageEntry(language="English", proficiency="Native/Fluent")],
        interests=["Climbing"],
    )


@pytest.fixture
def document_file(tmp_path, sample_document):
    path = tmp_path / "cv.yaml"
    path.write_text(yaml.safe_dump(sample_document.model_dump(mode="json")))
    return path
