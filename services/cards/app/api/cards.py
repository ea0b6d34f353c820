"""Card CRUD API."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from ..config import CardsSettings
from ..domain.types import Card, CardDraft
from ..errors import CardValidationError
from ..persistence.memory import CardRepository
from .deps import get_app_settings, get_card_repository, simulate_latency

router = APIRouter(prefix="/cards", tags=["cards"], dependencies=[Depends(simulate_latency)])


class CardCreateRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    icon_url: str | None = Field(default=None, alias="iconUrl")
    color: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class CardModel(BaseModel):
    id: str
    title: str
    description: str
    color: str
    icon_url: str | None = Field(default=None, alias="iconUrl")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(id=card.id, title=card.title, description=card.description, color=card.color, iconUrl=card.icon_url)


class CardResponse(BaseModel):
    success: bool = True
    card: CardModel


class CardListResponse(BaseModel):
    success: bool = True
    cards: List[CardModel] = Field(default_factory=list)


@router.post(
    "",
    response_model=CardResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_card(
    request: CardCreateRequest,
    repository: CardRepository = Depends(get_card_repository),
    settings: CardsSettings = Depends(get_app_settings),
):
    draft = CardDraft.from_fields(
        request.title,
        request.description,
        icon_url=request.icon_url,
        color=request.color,
        default_color=settings.backend.default_color,
    )
    card = await repository.create(draft)
    return CardResponse(card=CardModel.from_card(card))


@router.delete("", response_model=CardResponse, response_model_exclude_none=True)
async def delete_card(
    card_id: str | None = Query(default=None, alias="id"),
    repository: CardRepository = Depends(get_card_repository),
):
    if not card_id:
        raise CardValidationError("Card id is required.")
    card = await repository.delete(card_id)
    return CardResponse(card=CardModel.from_card(card))


@router.get("", response_model=CardListResponse, response_model_exclude_none=True)
async def list_cards(repository: CardRepository = Depends(get_card_repository)):
    cards = await repository.list_cards()
    return CardListResponse(cards=[CardModel.from_card(card) for card in cards])


__all__ = ["router"]
