"""
Card Schemas.

Pydantic contracts for card input and output, plus the functions that
apply them to raw request data.

Input arrives as loosely-typed JSON, so the entry points here take plain
mappings and raise the application ValidationError (first bad field and
the reason) instead of pydantic's own error type:

    validate_create(payload) -> CardCreate
    validate_update(payload) -> CardChanges
    parse_card_id(raw)       -> int

Wire names are camelCase (dueDate, createdAt); snake_case is accepted on
input too.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from cardbox.backend.core.exceptions import ValidationError
from cardbox.backend.core.field_change import CLEAR, UNSET, FieldChange, SetValue
from cardbox.backend.core.tag_codec import MAX_TAG_LENGTH, decode_tags
from cardbox.backend.core.utils import to_naive_utc
from cardbox.backend.models.card import Card, CardStatus, CardType

TITLE_MAX_LENGTH = 120
CONTENT_MAX_LENGTH = 4000

_CARD_ID_PATTERN = re.compile(r"[0-9]+")
_ISO_TIMESTAMP_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


def _require_timestamp_string(value: Any) -> Any:
    if value is None:
        return None
    if not isinstance(value, str) or not _ISO_TIMESTAMP_PREFIX.match(value):
        raise ValueError("must be an ISO 8601 timestamp string")
    return value


def _normalize_timestamp(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError("must include a timezone designator")
    return to_naive_utc(value)


Title = Annotated[str, StringConstraints(min_length=1, max_length=TITLE_MAX_LENGTH)]
Content = Annotated[str, StringConstraints(max_length=CONTENT_MAX_LENGTH)]
Tag = Annotated[str, StringConstraints(min_length=1, max_length=MAX_TAG_LENGTH)]
DueDate = Annotated[
    datetime | None,
    BeforeValidator(_require_timestamp_string),
    AfterValidator(_normalize_timestamp),
]


class _CardInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CardCreate(_CardInput):
    """Schema for creating a new card."""

    title: Title = Field(..., examples=["Ship v1"])
    content: Content | None = Field(default=None, examples=["Meeting notes"])
    type: CardType = CardType.TASK
    status: CardStatus = CardStatus.TODO
    tags: list[Tag] = Field(default_factory=list, examples=[["work", "q3"]])
    due_date: DueDate = Field(default=None, examples=["2026-11-01T09:00:00Z"])


class CardUpdate(_CardInput):
    """
    Schema for updating an existing card.

    Every field is optional. Only content and dueDate may be sent as null
    (which clears them); null for any other field is rejected.
    """

    title: Title | None = None
    content: Content | None = None
    type: CardType | None = None
    status: CardStatus | None = None
    tags: list[Tag] | None = None
    due_date: DueDate = None

    @field_validator("title", "type", "status", "tags", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value

    def to_changes(self) -> "CardChanges":
        """Convert to explicit per-field changes, keeping absent apart from null."""
        sent = self.model_fields_set

        def change(name: str) -> FieldChange:
            if name not in sent:
                return UNSET
            value = getattr(self, name)
            return CLEAR if value is None else SetValue(value)

        return CardChanges(
            title=change("title"),
            content=change("content"),
            type=change("type"),
            status=change("status"),
            tags=change("tags"),
            due_date=change("due_date"),
        )


@dataclass(frozen=True)
class CardChanges:
    """Validated partial update; each field is Unset, Clear or SetValue."""

    title: FieldChange = UNSET
    content: FieldChange = UNSET
    type: FieldChange = UNSET
    status: FieldChange = UNSET
    tags: FieldChange = UNSET
    due_date: FieldChange = UNSET

    def supplied(self) -> dict[str, FieldChange]:
        """Changes for fields present in the request."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class CardQuery(BaseModel):
    """Optional list filters, as received in the query string."""

    q: str | None = None
    type: str | None = None
    status: str | None = None
    tag: str | None = None


class CardResponse(BaseModel):
    """Schema for a card in API responses. Tags are always a decoded list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(description="Card identifier")
    title: str
    content: str | None
    type: CardType
    status: CardStatus
    tags: list[str]
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, card: Card, tags: list[str] | None = None) -> "CardResponse":
        """
        Build a response from a stored card.

        Args:
            card: ORM card
            tags: Tags already known to the caller; when omitted the
                stored blob is decoded
        """
        return cls(
            id=card.id,
            title=card.title,
            content=card.content,
            type=card.type,
            status=card.status,
            tags=decode_tags(card.tags) if tags is None else list(tags),
            due_date=card.due_date,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


def _first_error(exc: PydanticValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    loc = error.get("loc", ())
    field = str(loc[0]) if loc else "body"
    if len(loc) > 1 and isinstance(loc[1], int):
        field = f"{field}[{loc[1]}]"
    return field, error.get("msg", "invalid value")


def _validate(model: type[_CardInput], payload: Any) -> Any:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            "Request body must be a JSON object",
            field="body",
            reason="must be an object",
        )
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as e:
        field, reason = _first_error(e)
        raise ValidationError(
            f"Invalid {field}: {reason}",
            field=field,
            reason=reason,
        ) from e


def validate_create(payload: Any) -> CardCreate:
    """
    Validate a create request body.

    Raises:
        ValidationError: On the first violated constraint
    """
    return _validate(CardCreate, payload)


def validate_update(payload: Any) -> CardChanges:
    """
    Validate an update request body.

    Raises:
        ValidationError: On the first violated constraint
    """
    update: CardUpdate = _validate(CardUpdate, payload)
    return update.to_changes()


def parse_card_id(raw: str) -> int:
    """
    Parse a path identifier, which must be a string of digits.

    Raises:
        ValidationError: If raw is not all digits
    """
    if not _CARD_ID_PATTERN.fullmatch(raw):
        raise ValidationError(
            f"Invalid card id: {raw!r}",
            field="id",
            reason="must be a string of digits",
        )
    return int(raw)
