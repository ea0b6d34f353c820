"""Search and pagination helpers for the card list view."""
from __future__ import annotations

import math
from typing import Sequence

from .types import Card, Page

DEFAULT_PAGE_SIZE = 12
ELLIPSIS = "..."


def filter_cards(cards: Sequence[Card], query: str) -> list[Card]:
    needle = query.strip().lower()
    if not needle:
        return list(cards)
    return [card for card in cards if needle in card.title.lower() or needle in card.description.lower()]


def paginate(cards: Sequence[Card], page: int, per_page: int = DEFAULT_PAGE_SIZE) -> Page:
    if per_page < 1:
        raise ValueError("per_page must be positive")
    total_pages = math.ceil(len(cards) / per_page)
    current = min(max(page, 1), max(total_pages, 1))
    start = (current - 1) * per_page
    return Page(
        items=list(cards[start : start + per_page]),
        page=current,
        total_pages=total_pages,
        total_items=len(cards),
    )


def page_window(current: int, total: int, max_visible: int = 5) -> list[int | str]:
    """Page numbers to render around ``current``, with ellipsis gaps.

    The first and last pages are always reachable. Nothing is rendered for a
    single page.
    """
    if total <= 1:
        return []
    half = max_visible // 2
    start = max(1, current - half)
    end = min(total, current + half)
    if end - start + 1 < max_visible:
        if start == 1:
            end = min(total, start + max_visible - 1)
        else:
            start = max(1, end - max_visible + 1)

    pages: list[int | str] = []
    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total:
        if end < total - 1:
            pages.append(ELLIPSIS)
        pages.append(total)
    return pages


__all__ = ["DEFAULT_PAGE_SIZE", "ELLIPSIS", "filter_cards", "paginate", "page_window"]
