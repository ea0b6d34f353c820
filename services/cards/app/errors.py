"""Exception hierarchy shared by the cards service and the client runtime."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    validation = "validation_error"
    api = "api_error"
    server = "server_error"
    not_found = "not_found"


class CardsError(RuntimeError):
    """Base exception for card failures."""

    kind: ErrorKind = ErrorKind.server
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CardValidationError(CardsError):
    """Raised when a required card field is missing or blank."""

    kind = ErrorKind.validation
    status_code = 400


class CardNotFoundError(CardsError):
    kind = ErrorKind.not_found
    status_code = 404

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Card {card_id} not found")
        self.card_id = card_id


class CardsFetchError(CardsError):
    """Raised when the card list cannot be loaded from the service."""

    kind = ErrorKind.api


__all__ = ["ErrorKind", "CardsError", "CardValidationError", "CardNotFoundError", "CardsFetchError"]
