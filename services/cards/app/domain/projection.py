"""Optimistic projection of the confirmed card list.

The projection is a pure function of the confirmed cards and the ordered
queue of speculative mutations. Nothing here holds state: rollback happens by
dropping a mutation from the queue and projecting again.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from .types import Card, DisplayCard, MutationKind, SpeculativeMutation


def _kind_of(mutation: SpeculativeMutation) -> MutationKind | None:
    try:
        return MutationKind(mutation.kind)
    except ValueError:
        return None


def apply_mutation(base: Sequence[Card], mutation: SpeculativeMutation) -> list[Card]:
    """Return a new list with ``mutation`` applied to ``base``.

    ``create`` appends the payload card, ``delete`` drops the card whose id
    matches the payload. Any other kind leaves the list unchanged.
    """
    kind = _kind_of(mutation)
    if kind is MutationKind.create and isinstance(mutation.payload, Card):
        return [*base, mutation.payload]
    if kind is MutationKind.delete:
        return [card for card in base if card.id != mutation.payload]
    return list(base)


def project(base: Sequence[Card], mutations: Iterable[SpeculativeMutation]) -> list[Card]:
    projected = list(base)
    for mutation in mutations:
        projected = apply_mutation(projected, mutation)
    return projected


def project_display(base: Sequence[Card], mutations: Iterable[SpeculativeMutation]) -> list[DisplayCard]:
    """Project and flag cards that are not yet confirmed by the service."""
    return [DisplayCard(card=card, pending=card.transient) for card in project(base, mutations)]


__all__ = ["apply_mutation", "project", "project_display"]
