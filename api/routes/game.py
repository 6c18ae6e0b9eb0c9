"""Game API endpoints."""

import time
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated, Any

from api.schemas import (
    BuyRequest,
    CardResponse,
    ErrorResponse,
    GameStateResponse,
    MagicRequest,
    ModifiersResponse,
    NewGameRequest,
    NewGameResponse,
    PlayRequest,
    PlayResponse,
    ShopItemResponse,
    ShopResponse,
)
from api.session import create_session, extract_session_id, get_session, update_session
from bigtwo.cards import Card
from bigtwo.game import GameSession, RunState
from bigtwo.game.actions import (
    buy_upgrade,
    choose_magic,
    continue_from_shop,
    new_game as start_game,
    redraw,
    restart,
    submit_play,
)
from bigtwo.game.engine import ActionResult
from bigtwo.rules import RuleSet
from config import config

router = APIRouter()

REJECTED = {400: {"model": ErrorResponse}}

# Session data keys
SESSION_KEY_GAME = "game"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _card_response(card: Card) -> CardResponse:
    return CardResponse(
        rank=str(card.rank),
        suit=str(card.suit),
        rank_value=card.rank.value,
        suit_letter=card.suit.letter,
    )


def _game_state_response(game: GameSession) -> GameStateResponse:
    """Convert game state to response."""
    snap = game.snapshot()
    return GameStateResponse(
        state=snap.state.name,
        level=snap.level,
        target=float(snap.target),
        score=float(snap.score),
        gold=float(snap.gold),
        chain_type=snap.chain_type.name,
        chain_count=snap.chain_count,
        chain_multiplier=float(snap.chain_multiplier),
        deck_size=snap.deck_size,
        hand_size=snap.hand_size,
        discard_size=snap.discard_size,
        hand=[_card_response(c) for c in snap.hand],
        modifiers=ModifiersResponse(**snap.modifiers),
        cleared=snap.cleared,
        failed=snap.failed,
        finished_all=snap.finished_all,
        log=list(snap.log),
    )


def _new_session_game(seed: int | None) -> GameSession:
    rules = RuleSet(
        hand_size=config.game.hand_size,
        log_size=config.game.log_size,
        history_size=config.game.history_size,
    )
    return start_game(seed=seed if seed is not None else config.game.seed, rules=rules)


async def _save_game(session_id: str, game: GameSession, data: dict[str, Any] | None = None) -> None:
    """Store the game and refresh session activity."""
    session_data = data or {}
    session_data[SESSION_KEY_GAME] = game
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    session_data.setdefault(SESSION_KEY_CREATED_AT, int(time.time()))
    await update_session(session_id, session_data)


async def _get_game(session_id: str) -> tuple[GameSession, dict[str, Any]]:
    """Load the session's game or 404. Tokens with a bad or stale signature are unknown."""
    if extract_session_id(session_id) is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    session_data = await get_session(session_id)
    if not session_data or SESSION_KEY_GAME not in session_data:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return session_data[SESSION_KEY_GAME], session_data


def _raise_if_rejected(result: ActionResult) -> None:
    if not result.success:
        raise HTTPException(status_code=400, detail=result.reason.value)


@router.post("/new")
async def new_game(
    request: NewGameRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewGameResponse:
    """Create a new run, reusing the session if one is given."""
    if (
        session_id is None
        or extract_session_id(session_id) is None
        or await get_session(session_id) is None
    ):
        session_id = await create_session()

    game = _new_session_game(request.seed if request else None)
    await _save_game(session_id, game, await get_session(session_id))
    return NewGameResponse(session_id=session_id, game=_game_state_response(game))


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current run state."""
    game, _ = await _get_game(session_id)
    return _game_state_response(game)


@router.post("/play", responses=REJECTED)
async def play(
    request: PlayRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> PlayResponse:
    """Play the selected cards."""
    game, data = await _get_game(session_id)

    result = submit_play(game, request.indices)
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.error.value)

    await _save_game(session_id, game, data)
    return PlayResponse(
        eval_type=result.eval_type.name,
        points=float(result.points),
        gold=float(result.gold),
        chain_multiplier=float(result.chain_multiplier),
        game=_game_state_response(game),
    )


@router.post("/pass", responses=REJECTED)
async def pass_(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Draw back up to a full hand without playing."""
    game, data = await _get_game(session_id)
    _raise_if_rejected(game.pass_turn())
    await _save_game(session_id, game, data)
    return _game_state_response(game)


@router.post("/redraw", responses=REJECTED)
async def use_redraw(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Use the Discard/Redraw magic."""
    game, data = await _get_game(session_id)
    _raise_if_rejected(redraw(game))
    await _save_game(session_id, game, data)
    return _game_state_response(game)


@router.get("/shop")
async def get_shop(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ShopResponse:
    """List shop items and whether each is affordable."""
    game, _ = await _get_game(session_id)
    return ShopResponse(
        is_open=game.state == RunState.AWAITING_SHOP,
        gold=float(game.gold),
        items=[
            ShopItemResponse(
                item_id=item.item_id,
                name=item.name,
                eval_type=item.eval_type.name,
                bonus=item.bonus,
                cost=item.cost,
                affordable=game.gold >= item.cost,
            )
            for item in game.shop_items
        ],
    )


@router.post("/shop/buy", responses=REJECTED)
async def buy(
    request: BuyRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Buy one shop upgrade."""
    game, data = await _get_game(session_id)
    _raise_if_rejected(buy_upgrade(game, request.item_id))
    await _save_game(session_id, game, data)
    return _game_state_response(game)


@router.post("/shop/continue", responses=REJECTED)
async def leave_shop(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Close the shop and move on to the magic choice."""
    game, data = await _get_game(session_id)
    _raise_if_rejected(continue_from_shop(game))
    await _save_game(session_id, game, data)
    return _game_state_response(game)


@router.post("/magic", responses=REJECTED)
async def magic(
    request: MagicRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Apply a level-up magic and advance."""
    game, data = await _get_game(session_id)
    _raise_if_rejected(choose_magic(game, request.choice, request.card_index))
    await _save_game(session_id, game, data)
    return _game_state_response(game)


@router.post("/restart")
async def restart_run(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Start over from level 1 with a fresh deck."""
    game, data = await _get_game(session_id)
    restart(game)
    await _save_game(session_id, game, data)
    return _game_state_response(game)
