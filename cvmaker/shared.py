from enum import Enum
from typing import Any


class Color(str, Enum):
    SUCCESS = "\033[92m"
    ERROR = "\033[91m"
    INFO = "\033[94m"
    WARNING = "\033[93m"
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    return f"{color.value}{text}{Color.RESET.value}"


def echo(text: str, color: Color = Color.INFO) -> None:
    print(colored(text, color))


class InvalidPaperSizeError(ValueError):
    def __init__(self, size_str: str):
        super().__init__(
            f"Invalid paper size: {size_str}. Valid sizes: {[s.name for s in PaperSize]}"
        )


class RecordValidationError(ValueError):
    """A submitted form failed its field rules.

    Carries one message per failing field and the values as entered, so the
    form can be shown again without losing input.
    """

    def __init__(self, record: str, field_errors: dict[str, str], values: dict[str, Any]):
        self.record = record
        self.field_errors = field_errors
        self.values = values
        fields = ", ".join(field_errors)
        super().__init__(f"Invalid {record}: {fields}")


class IndexOutOfRangeError(IndexError):
    def __init__(self, collection: str, index: int, length: int):
        self.collection = collection
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} out of range for {collection} (length {length})"
        )


class CollectionTypeError(TypeError):
    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")


class TemplateNotFoundError(KeyError):
    def __init__(self, template_id: str):
        super().__init__(f"Template not found: {template_id}")


class TemplateNotSelectedError(Exception):
    def __init__(self):
        super().__init__("No template selected. Choose a template first")


class DocumentFileError(Exception):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")


class ExportFailure(Exception):
    def __init__(self, path: str, reason: Any):
        self.path = path
        super().__init__(f"Export to {path} failed: {reason}")


class PaperSize(Enum):
    A3 = (842, 1191)
    A4 = (595, 842)
    A5 = (420, 595)
    B5 = (499, 709)
    LETTER = (612, 792)
    LEGAL = (612, 1008)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @staticmethod
    def from_string(size_str: str) -> "PaperSize":
        try:
            return PaperSize[size_str.upper()]
        except KeyError as exc:
            raise InvalidPaperSizeError(size_str) from exc


def sanitize_filename(name: str) -> str:
    """Sanitize a string for safe use as a filename."""
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        name = name.replace(char, "_")
    return name.strip()
