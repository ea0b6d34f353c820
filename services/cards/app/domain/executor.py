"""Action executors that submit card mutations to the cards service."""
from __future__ import annotations

import asyncio
import time
from typing import Any, Protocol

import httpx
import structlog

from ..config import CardsSettings, get_settings
from ..errors import CardsFetchError, ErrorKind
from .types import ActionResult, Card, CardDraft, MutationKind

logger = structlog.get_logger(__name__)

_SUCCESS_MESSAGES = {
    MutationKind.create: "Card created successfully.",
    MutationKind.delete: "Card deleted.",
}
_FAILURE_MESSAGES = {
    MutationKind.create: "Failed to create card.",
    MutationKind.delete: "Failed to delete card.",
}
_SERVER_ERROR_MESSAGES = {
    MutationKind.create: "An error occurred while creating the card.",
    MutationKind.delete: "An error occurred while deleting the card.",
}


def _parse_card(payload: Any) -> Card:
    card = Card.from_payload(payload)
    if card.transient:
        raise ValueError(f"Service returned unconfirmed card id {card.id}")
    return card


class ActionExecutor(Protocol):
    async def submit(self, operation: MutationKind, payload: CardDraft | str) -> ActionResult:
        ...

    async def fetch_cards(self) -> list[Card]:
        ...


class HttpActionExecutor:
    """Submit mutations over HTTP and normalize every outcome into an ActionResult.

    One request per call; failures are reported, never retried.
    """

    def __init__(self, settings: CardsSettings | None = None, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings or get_settings()
        self._client = client

    async def submit(self, operation: MutationKind, payload: CardDraft | str) -> ActionResult:
        kind = MutationKind(operation)
        if kind is MutationKind.create and not isinstance(payload, CardDraft):
            return ActionResult.failure("Card fields are required.", ErrorKind.validation)
        if kind is MutationKind.delete and not payload:
            return ActionResult.failure("Card id is required.", ErrorKind.validation)

        start = time.perf_counter()
        try:
            if kind is MutationKind.create:
                response = await self._request("POST", "/cards", json=payload.to_payload())
            else:
                response = await self._request("DELETE", "/cards", params={"id": payload})
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("executor.submit_failed", operation=kind.value, error=str(exc))
            return ActionResult.failure(_SERVER_ERROR_MESSAGES[kind], ErrorKind.server)

        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info("executor.submit", operation=kind.value, status_code=response.status_code, latency_ms=latency_ms)

        if not response.is_success or not isinstance(data, dict) or not data.get("success"):
            error = data.get("error") if isinstance(data, dict) else None
            return ActionResult.failure(error or _FAILURE_MESSAGES[kind], ErrorKind.api)

        try:
            card_payload = data.get("card")
            card = _parse_card(card_payload) if card_payload else None
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("executor.malformed_card", operation=kind.value, error=str(exc))
            return ActionResult.failure(_SERVER_ERROR_MESSAGES[kind], ErrorKind.server)

        await self._pause()
        return ActionResult.success(card, _SUCCESS_MESSAGES[kind])

    async def fetch_cards(self) -> list[Card]:
        try:
            response = await self._request("GET", "/cards")
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("executor.fetch_failed", error=str(exc))
            raise CardsFetchError("Failed to load cards.") from exc
        if not response.is_success or not isinstance(data, dict) or not data.get("success"):
            error = data.get("error") if isinstance(data, dict) else None
            raise CardsFetchError(error or "Failed to load cards.")
        try:
            items = data.get("cards", [])
            if not isinstance(items, list):
                raise TypeError(f"Expected a card list, got {type(items).__name__}")
            cards = [_parse_card(item) for item in items]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("executor.fetch_malformed", error=str(exc))
            raise CardsFetchError("Service returned malformed card data.") from exc
        await self._pause()
        return cards

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        timeout = self._settings.client.timeout_seconds
        if self._client is not None:
            return await self._client.request(method, path, timeout=timeout, **kwargs)
        async with httpx.AsyncClient(base_url=self._settings.client.base_url) as client:
            return await client.request(method, path, timeout=timeout, **kwargs)

    async def _pause(self) -> None:
        delay_ms = self._settings.client.action_delay_ms
        if delay_ms:
            await asyncio.sleep(delay_ms / 1000)


__all__ = ["ActionExecutor", "HttpActionExecutor"]
