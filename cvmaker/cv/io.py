"""Reading and writing CV documents as JSON or YAML files."""

import json
from pathlib import Path

import yaml

from cvmaker.shared import DocumentFileError
from cvmaker.cv.models import CVDocument


SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DocumentFileError(str(path), "unsupported file format, use .json or .yaml")
    return suffix


def load_document(path: Path | str) -> CVDocument:
    """Load and validate a document file.

    Raises DocumentFileError for missing or undecodable files and parse errors, and lets
    pydantic's ValidationError through for schema problems.
    """
    path = Path(path)
    suffix = _check_suffix(path)
    if not path.exists():
        raise DocumentFileError(str(path), "file not found")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise DocumentFileError(str(path), f"invalid JSON: {e}") from e
    except yaml.YAMLError as e:
        raise DocumentFileError(str(path), f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentFileError(str(path), f"not UTF-8 text: {e}") from e

    return CVDocument.model_validate(data or {})


def dump_document(document: CVDocument, path: Path | str) -> Path:
    path = Path(path)
    suffix = _check_suffix(path)
    data = document.model_dump(mode="json")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if suffix == ".json":
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    return path
