"""FastAPI dependency helpers."""
from __future__ import annotations

import asyncio

from fastapi import Depends, Request

from ..config import CardsSettings
from ..persistence.memory import CardRepository


def get_app_settings(request: Request) -> CardsSettings:
    return request.app.state.settings


def get_card_repository(request: Request) -> CardRepository:
    return request.app.state.card_repository


async def simulate_latency(settings: CardsSettings = Depends(get_app_settings)) -> None:
    delay_ms = settings.backend.simulated_latency_ms
    if delay_ms:
        await asyncio.sleep(delay_ms / 1000)


__all__ = ["get_app_settings", "get_card_repository", "simulate_latency"]
