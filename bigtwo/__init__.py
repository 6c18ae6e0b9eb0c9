"""Big-Two climb rules engine - 100% UI-agnostic."""

from bigtwo.cards import Card, Deck, DiscardPile, Rank, Suit
from bigtwo.evaluator import EvalType, evaluate
from bigtwo.hand import Hand
from bigtwo.magic import MagicChoice, ModifierSet
from bigtwo.rules import RuleSet

__all__ = [
    "Card",
    "Deck",
    "DiscardPile",
    "Rank",
    "Suit",
    "EvalType",
    "evaluate",
    "Hand",
    "MagicChoice",
    "ModifierSet",
    "RuleSet",
]
