"""Client-side store of server-confirmed cards."""
from __future__ import annotations

from typing import Callable, Iterable

import structlog

from .types import Card

logger = structlog.get_logger(__name__)

Listener = Callable[[tuple[Card, ...]], None]


class EntityStore:
    """Authoritative card list, written only by confirmed action results.

    Transient cards are rejected; they live in the projection only.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = self._checked(cards)
        self._listeners: list[Listener] = []

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return any(card.id == card_id for card in self._cards)

    def get(self, card_id: str) -> Card | None:
        return next((card for card in self._cards if card.id == card_id), None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def replace_all(self, cards: Iterable[Card]) -> None:
        self._cards = self._checked(cards)
        self._notify()

    def append(self, card: Card) -> None:
        """Add a confirmed card; a card whose id is already stored is replaced in place."""
        [card] = self._checked([card])
        if card.id in self:
            self._cards = [card if existing.id == card.id else existing for existing in self._cards]
        else:
            self._cards = [*self._cards, card]
        self._notify()

    def remove(self, card_id: str) -> Card | None:
        removed = self.get(card_id)
        if removed is None:
            return None
        self._cards = [card for card in self._cards if card.id != card_id]
        self._notify()
        return removed

    @staticmethod
    def _checked(cards: Iterable[Card]) -> list[Card]:
        checked: dict[str, Card] = {}
        for card in cards:
            if card.transient:
                raise ValueError(f"Transient card {card.id} cannot enter the confirmed store")
            checked[card.id] = card
        return list(checked.values())

    def _notify(self) -> None:
        snapshot = self.cards
        for listener in list(self._listeners):
            listener(snapshot)
        logger.debug("store.changed", size=len(snapshot))


__all__ = ["EntityStore"]
