"""In-process card repository for the cards service.

State lives only for the lifetime of the process; a restart loses every card.
"""
from __future__ import annotations

import asyncio
import json
import uuid
from pathlib import Path

import structlog

from ..domain.types import Card, CardDraft
from ..errors import CardNotFoundError

logger = structlog.get_logger(__name__)


def load_seed_cards(path: Path) -> list[Card]:
    """Read the seed fixture, returning an empty list when it is unavailable."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
        return [Card.from_payload(item) for item in data]
    except (OSError, KeyError, TypeError, ValueError) as exc:
        logger.error("cards.seed_failed", path=str(path), error=str(exc))
        return []


class CardRepository:
    def __init__(self, seed_path: Path | None = None) -> None:
        self._cards: list[Card] = []
        self._seed_path = seed_path
        self._seeded = seed_path is None
        self._seed_lock = asyncio.Lock()

    async def list_cards(self) -> list[Card]:
        await self._ensure_seeded()
        return list(self._cards)

    async def create(self, draft: CardDraft) -> Card:
        card = draft.to_card(str(uuid.uuid4()))
        self._cards.append(card)
        logger.info("cards.created", card_id=card.id)
        return card

    async def delete(self, card_id: str) -> Card:
        for index, card in enumerate(self._cards):
            if card.id == card_id:
                del self._cards[index]
                logger.info("cards.deleted", card_id=card_id)
                return card
        raise CardNotFoundError(card_id)

    async def _ensure_seeded(self) -> None:
        async with self._seed_lock:
            if self._seeded:
                return
            self._seeded = True
            if not self._cards and self._seed_path is not None:
                self._cards = load_seed_cards(self._seed_path)
                logger.info("cards.seeded", size=len(self._cards))


__all__ = ["CardRepository", "load_seed_cards"]
