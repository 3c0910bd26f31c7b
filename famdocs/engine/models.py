"""Document engine domain models.

Pydantic models shared by the readers, the resolver, the renderer and the
API layer. Inputs (tasks, profiles, templates) are frozen: the engine only
reads them.
"""

from collections.abc import Iterator, Mapping
from datetime import date, datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Rendered in place of any variable that could not be resolved.
BLANK_MARKER = "____________"


def _calendar_day(v: object) -> object:
    """Keep only the calendar day of an ISO date or datetime string."""
    if isinstance(v, str):
        raw = v.strip()
        if not raw:
            return None
        return raw[:10]
    if isinstance(v, datetime):
        return v.date()
    return v


class TemplateKind(str, Enum):
    """Broad shape of a document template."""

    LETTER = "lettre"
    ATTESTATION = "attestation"
    FORM = "formulaire"


class Child(BaseModel):
    """A child listed on the family profile."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    first_name: str
    birth_date: date | None = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def parse_birth_date(cls, v: object) -> object:
        return _calendar_day(v)


class Spouse(BaseModel):
    """The profile owner's spouse."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    birth_date: date | None = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def parse_birth_date(cls, v: object) -> object:
        return _calendar_day(v)


class Profile(BaseModel):
    """Family profile read by the engine."""

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    postal_code: str | None = None
    city: str | None = None
    children: tuple[Child, ...] = ()
    spouse: Spouse | None = None

    @property
    def full_name(self) -> str:
        """First and last name joined, skipping empty parts."""
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)


class Task(BaseModel):
    """A task produced by the classification pipeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    category: str | None = None
    deadline: datetime | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    contact_name: str | None = None
    # Older task files name the attachment "imageUrl".
    attachment_url: str | None = Field(
        default=None, validation_alias=AliasChoices("attachment_url", "image_url")
    )

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v: object) -> object:
        """Accept ISO strings, including bare dates and a trailing 'Z'."""
        if isinstance(v, str):
            raw = v.strip()
            if not raw:
                return None
            if raw.endswith("Z"):
                raw = raw[:-1] + "+00:00"
            return datetime.fromisoformat(raw)
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day)
        return v

    @property
    def text(self) -> str:
        """Title and description as one block of free text."""
        return f"{self.title or ''}\n{self.description or ''}".strip()

    @property
    def deadline_date(self) -> date | None:
        """Calendar day of the deadline, as written (no timezone shift)."""
        return self.deadline.date() if self.deadline else None


class Template(BaseModel):
    """A static document skeleton with ``{{name}}`` placeholders."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    category: str
    kind: TemplateKind = TemplateKind.LETTER
    variables: tuple[str, ...]
    body: str
    task_categories: tuple[str, ...] = ()


class VariableSet(Mapping[str, str]):
    """Immutable result of merging all variable layers.

    Only resolved keys are present. A key mapped to an empty string was
    deliberately blanked by the caller.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"VariableSet({self._data!r})"

    def is_blank(self, key: str) -> bool:
        """True when the key is unset or holds only whitespace."""
        value = self._data.get(key)
        return value is None or not value.strip()

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)


class AttachmentFacts(BaseModel):
    """Facts read from an attached source document."""

    model_config = ConfigDict(frozen=True)

    invoice_ref: str | None = None
    invoice_amount: str | None = None
    invoice_date: str | None = None
    text_length: int = 0


class LayoutKind(str, Enum):
    """How a single line of filled content is laid out on the page."""

    TITLE = "title"
    HEADING = "heading"
    FILLABLE = "fillable"
    BODY = "body"
    BREAK = "break"


class LayoutBlock(BaseModel):
    """One laid-out line of a rendered document."""

    model_config = ConfigDict(frozen=True)

    kind: LayoutKind
    text: str = ""


class RenderedDocument(BaseModel):
    """Output of a generation call."""

    content: str = Field(description="Filled, normalized text content")
    document_bytes: bytes = Field(repr=False)
    filename: str
    content_type: str
    document_url: str | None = None


class PreviewResult(BaseModel):
    """Output of a preview call."""

    content: str
    missing_variables: list[str] = Field(default_factory=list)
