"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


# Request schemas
class NewGameRequest(BaseModel):
    """Request to start a run."""

    seed: int | None = Field(default=None, description="Seed for a reproducible deal")


class PlayRequest(BaseModel):
    """Request to play selected hand cards."""

    indices: list[int] = Field(..., max_length=52, description="Hand positions to play")


class BuyRequest(BaseModel):
    """Request to buy a shop upgrade."""

    item_id: str


class MagicRequest(BaseModel):
    """Request to apply a level-up magic."""

    choice: Literal[
        "hand_score_upgrade",
        "suit_change",
        "card_multiplier",
        "discard_redraw",
        "draw_boost",
    ]
    card_index: int | None = Field(default=None, ge=0)


# Response schemas
class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    rank_value: int
    suit_letter: str


class ModifiersResponse(BaseModel):
    """Active modifiers."""

    bonuses: dict[str, int]
    card_multiplier_rank: int
    card_multiplier_factor: int
    draw_boost_available: bool
    discard_redraw_available: bool


class GameStateResponse(BaseModel):
    """Current run state."""

    state: str
    level: int
    target: float
    score: float
    gold: float
    chain_type: str
    chain_count: int
    chain_multiplier: float
    deck_size: int
    hand_size: int
    discard_size: int
    hand: list[CardResponse]
    modifiers: ModifiersResponse
    cleared: bool
    failed: bool
    finished_all: bool
    log: list[str]


class PlayResponse(BaseModel):
    """Result of a play plus the state after it."""

    eval_type: str
    points: float
    gold: float
    chain_multiplier: float
    game: GameStateResponse


class ShopItemResponse(BaseModel):
    """A shop upgrade."""

    item_id: str
    name: str
    eval_type: str
    bonus: int
    cost: int
    affordable: bool


class ShopResponse(BaseModel):
    """Shop listing."""

    is_open: bool
    gold: float
    items: list[ShopItemResponse]


class NewGameResponse(BaseModel):
    """Session created for a new run."""

    session_id: str
    game: GameStateResponse


class ErrorResponse(BaseModel):
    """Rejection detail."""

    detail: Literal[
        "invalid_combination",
        "not_available",
        "insufficient_funds",
        "unknown_item",
        "invalid_target",
        "unknown_choice",
        "game_over",
    ]
