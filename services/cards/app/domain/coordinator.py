"""Coordinate optimistic card mutations against an action executor."""
from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping

import structlog

from ..errors import CardValidationError, ErrorKind
from .executor import ActionExecutor
from .projection import project_display
from .store import EntityStore
from .types import (
    DEFAULT_COLOR,
    INITIAL_RESULT,
    TRANSIENT_PREFIX,
    ActionResult,
    Card,
    CardDraft,
    DisplayCard,
    MutationKind,
    SpeculativeMutation,
    is_transient_id,
)

logger = structlog.get_logger(__name__)

ProjectionListener = Callable[[list[DisplayCard]], None]


class MutationCoordinator:
    """Drive create and delete through speculative, submitted and resolved states.

    Every mutation is queued speculatively, submitted once, and removed from
    the queue when its result arrives. Only confirmed results write to the
    store, so dropping the queue entry is all a rollback needs. Each call
    reconciles its own result, so concurrent resolutions are never merged away.
    """

    def __init__(
        self,
        executor: ActionExecutor,
        store: EntityStore | None = None,
        default_color: str = DEFAULT_COLOR,
    ) -> None:
        self._executor = executor
        self.store = store if store is not None else EntityStore()
        self._default_color = default_color
        self._pending: dict[int, SpeculativeMutation] = {}
        self._tokens = itertools.count(1)
        self._transient_ids = itertools.count(1)
        self._deleting: set[str] = set()
        self._listeners: list[ProjectionListener] = []
        self._hold = 0
        self.last_result: ActionResult = INITIAL_RESULT
        self.loading = False
        self.store.subscribe(lambda _cards: self._emit())

    @property
    def pending_mutations(self) -> tuple[SpeculativeMutation, ...]:
        return tuple(self._pending.values())

    @property
    def projection(self) -> list[DisplayCard]:
        return project_display(self.store.cards, self._pending.values())

    @property
    def in_flight(self) -> bool:
        return bool(self._pending)

    def is_pending(self, card_id: str) -> bool:
        return is_transient_id(card_id) or card_id in self._deleting

    def subscribe(self, listener: ProjectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def hydrate(self) -> tuple[Card, ...]:
        """Load the confirmed card list; fetch errors propagate to the caller."""
        self.loading = True
        try:
            cards = await self._executor.fetch_cards()
        finally:
            self.loading = False
        self.store.replace_all(cards)
        logger.info("coordinator.hydrated", size=len(self.store))
        return self.store.cards

    async def create(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            draft = CardDraft.from_form(form, default_color=self._default_color)
        except CardValidationError as exc:
            return self._record(ActionResult.failure(exc.message, ErrorKind.validation))

        transient = draft.to_card(f"{TRANSIENT_PREFIX}{next(self._transient_ids)}")
        token = self._enqueue(MutationKind.create, transient)
        result: ActionResult | None = None
        try:
            result = await self._submit(MutationKind.create, draft)
            if result.ok and result.card is None:
                result = ActionResult.failure("Service response did not include the created card.", ErrorKind.api)
        finally:
            with self._reconciling(token):
                if result is not None and result.ok and result.card is not None:
                    self.store.append(result.card)
        return self._record(result)

    async def delete(self, card_id: str) -> ActionResult:
        if not card_id:
            return self._record(ActionResult.failure("Card id is required.", ErrorKind.validation))
        if is_transient_id(card_id):
            return self._record(ActionResult.failure("Card is still being created.", ErrorKind.validation))
        if card_id in self._deleting:
            return self._record(ActionResult.failure(f"Card {card_id} is already being deleted.", ErrorKind.validation))

        self._deleting.add(card_id)
        token = self._enqueue(MutationKind.delete, card_id)
        result: ActionResult | None = None
        try:
            result = await self._submit(MutationKind.delete, card_id)
        finally:
            self._deleting.discard(card_id)
            with self._reconciling(token):
                if result is not None and result.ok:
                    self.store.remove(card_id)
        return self._record(result)

    async def _submit(self, operation: MutationKind, payload: CardDraft | str) -> ActionResult:
        try:
            return await self._executor.submit(operation, payload)
        except Exception:
            logger.exception("coordinator.executor_error", operation=operation.value)
            return ActionResult.failure(f"An error occurred while trying to {operation.value} the card.", ErrorKind.server)

    def _enqueue(self, kind: MutationKind, payload: Card | str) -> int:
        token = next(self._tokens)
        self._pending[token] = SpeculativeMutation(kind=kind, payload=payload, token=token)
        logger.debug("coordinator.speculative", kind=kind.value, token=token)
        self._emit()
        return token

    @contextmanager
    def _reconciling(self, token: int) -> Iterator[None]:
        self._hold += 1
        try:
            yield
        finally:
            self._pending.pop(token, None)
            self._hold -= 1
            self._emit()

    def _record(self, result: ActionResult) -> ActionResult:
        self.last_result = result
        if result.ok:
            logger.info("coordinator.resolved", ok=True, message=result.message)
        else:
            logger.info("coordinator.resolved", ok=False, kind=result.kind.value if result.kind else None, message=result.message)
        return result

    def _emit(self) -> None:
        if self._hold:
            return
        projection = self.projection
        for listener in list(self._listeners):
            listener(projection)


__all__ = ["MutationCoordinator"]
