"""Function-style entry points for presentation layers."""

from random import Random
from typing import Iterable

from bigtwo.magic import MagicChoice
from bigtwo.rules import RuleSet
from bigtwo.game.engine import ActionResult, GameSession, PlayResult, SessionSnapshot


def new_game(seed: int | None = None, rules: RuleSet | None = None) -> GameSession:
    """Start a run. The same seed always deals the same cards."""
    return GameSession(rules=rules, rng=Random(seed))


def submit_play(session: GameSession, indices: Iterable[int]) -> PlayResult:
    return session.play(indices)


def pass_turn(session: GameSession) -> GameSession:
    session.pass_turn()
    return session


def redraw(session: GameSession) -> ActionResult:
    return session.redraw()


def buy_upgrade(session: GameSession, item_id: str) -> ActionResult:
    return session.buy(item_id)


def continue_from_shop(session: GameSession) -> ActionResult:
    return session.continue_from_shop()


def choose_magic(
    session: GameSession,
    choice: MagicChoice | str,
    card_index: int | None = None,
) -> ActionResult:
    """Apply a magic choice given as an enum member or its string id."""
    return session.choose_magic(choice, card_index)


def restart(session: GameSession) -> GameSession:
    session.restart()
    return session


def snapshot(session: GameSession) -> SessionSnapshot:
    return session.snapshot()
