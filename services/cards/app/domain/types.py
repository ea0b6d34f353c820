"""Domain-level dataclasses for cards and mutation bookkeeping."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..errors import CardValidationError, ErrorKind

DEFAULT_COLOR = "#000000"
TRANSIENT_PREFIX = "temp-"


def is_transient_id(card_id: str) -> bool:
    return card_id.startswith(TRANSIENT_PREFIX)


@dataclass(frozen=True)
class Card:
    id: str
    title: str
    description: str
    color: str = DEFAULT_COLOR
    icon_url: str | None = None

    @property
    def transient(self) -> bool:
        return is_transient_id(self.id)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "color": self.color,
        }
        if self.icon_url:
            payload["iconUrl"] = self.icon_url
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Card":
        card_id = payload["id"]
        if card_id is None or card_id == "":
            raise ValueError("Card payload has an empty id")
        icon_url = payload.get("iconUrl")
        return cls(
            id=str(card_id),
            title=str(payload.get("title") or ""),
            description=str(payload.get("description") or ""),
            color=str(payload.get("color") or DEFAULT_COLOR),
            icon_url=str(icon_url) if icon_url else None,
        )


@dataclass(frozen=True)
class CardDraft:
    """Validated, trimmed input for a new card."""

    title: str
    description: str
    color: str = DEFAULT_COLOR
    icon_url: str | None = None

    @classmethod
    def from_fields(
        cls,
        title: str | None,
        description: str | None,
        icon_url: str | None = None,
        color: str | None = None,
        default_color: str = DEFAULT_COLOR,
    ) -> "CardDraft":
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            raise CardValidationError("Title and description are required.")
        return cls(
            title=title,
            description=description,
            color=(color or "").strip() or default_color,
            icon_url=(icon_url or "").strip() or None,
        )

    @classmethod
    def from_form(cls, form: Mapping[str, Any], default_color: str = DEFAULT_COLOR) -> "CardDraft":
        return cls.from_fields(
            form.get("title"),
            form.get("description"),
            icon_url=form.get("iconUrl"),
            color=form.get("color"),
            default_color=default_color,
        )

    def to_card(self, card_id: str) -> Card:
        return Card(
            id=card_id,
            title=self.title,
            description=self.description,
            color=self.color,
            icon_url=self.icon_url,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "description": self.description, "color": self.color}
        if self.icon_url:
            payload["iconUrl"] = self.icon_url
        return payload


@dataclass(frozen=True)
class DisplayCard:
    card: Card
    pending: bool = False

    @property
    def id(self) -> str:
        return self.card.id


class MutationKind(enum.Enum):
    create = "create"
    delete = "delete"


@dataclass(frozen=True)
class SpeculativeMutation:
    kind: MutationKind | str
    payload: Card | str
    token: int = 0


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str = ""
    card: Card | None = None
    kind: ErrorKind | None = None

    @classmethod
    def success(cls, card: Card | None, message: str = "") -> "ActionResult":
        return cls(ok=True, message=message, card=card)

    @classmethod
    def failure(cls, message: str, kind: ErrorKind = ErrorKind.server) -> "ActionResult":
        return cls(ok=False, message=message, kind=kind)


INITIAL_RESULT = ActionResult(ok=False)


@dataclass
class Page:
    items: list[Card] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_items: int = 0


__all__ = [
    "DEFAULT_COLOR",
    "TRANSIENT_PREFIX",
    "is_transient_id",
    "Card",
    "CardDraft",
    "DisplayCard",
    "MutationKind",
    "SpeculativeMutation",
    "ActionResult",
    "INITIAL_RESULT",
    "Page",
]
