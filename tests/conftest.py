"""Pytest fixtures for Big-Two climb tests."""

import pytest
from random import Random

from bigtwo.cards import Card, Deck, DiscardPile
from bigtwo.chain import ChainTracker
from bigtwo.hand import Hand
from bigtwo.magic import ModifierSet
from bigtwo.rules import RuleSet
from bigtwo.game import GameSession


def cards(*specs: str) -> list[Card]:
    """Build cards from strings like 'AS', '10H'."""
    return [Card.from_string(s) for s in specs]


def _rig_hand(game: GameSession, *specs: str) -> list[Card]:
    """
    Put exactly the given cards in the session's hand.

    The previous hand goes back into the deck, so deck + hand + discard still
    holds all 52 cards.
    """
    wanted = cards(*specs)
    pool = list(game.deck) + game.hand.take_all()
    missing = [c for c in wanted if c not in pool]
    if missing:
        raise ValueError(f"Cards not available to rig: {missing}")
    game.deck._cards = [c for c in pool if c not in wanted]
    game.hand.extend(wanted)
    return wanted


def _advance_to_magic(game: GameSession) -> GameSession:
    """Clear the current level and leave the shop."""
    game.score = max(game.score, game.target)
    game.pass_turn()
    game.continue_from_shop()
    return game


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def discard(rng):
    """An empty discard pile."""
    return DiscardPile(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def modifiers():
    """Default modifiers."""
    return ModifierSet()


@pytest.fixture
def chain():
    """A fresh chain tracker."""
    return ChainTracker()


@pytest.fixture
def game(rng):
    """A new game session."""
    return GameSession(rng=rng)


@pytest.fixture
def rig():
    """Function that places specific cards in a session's hand."""
    return _rig_hand


@pytest.fixture
def magic_game(game):
    """A session waiting for its level 1 magic choice."""
    return _advance_to_magic(game)


@pytest.fixture
def advance_to_magic():
    """Function that clears the current level and closes the shop."""
    return _advance_to_magic


@pytest.fixture
def make_cards():
    """Function that builds cards from strings like 'AS', '10H'."""
    return cards
