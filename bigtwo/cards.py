"""Card, Deck, and DiscardPile classes - value-immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator


class Suit(Enum):
    """Card suits, in suit-change cycle order."""

    DIAMONDS = 0
    CLUBS = 1
    HEARTS = 2
    SPADES = 3

    def __str__(self) -> str:
        symbols = {
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def letter(self) -> str:
        """Return the single-letter suit code (D, C, H, S)."""
        return self.name[0]

    def next(self) -> "Suit":
        """Return the following suit in the cycle D → C → H → S → D."""
        return Suit((self.value + 1) % len(Suit))


class Rank(Enum):
    """Card ranks. Aces are high only."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]


@dataclass(frozen=True, slots=True)
class Card:
    """Playing card. Suit changes produce a new card via with_suit()."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def short_text(self) -> str:
        """Return the compact text form used in logs, e.g. '(10H)'."""
        return f"({self.rank}{self.suit.letter})"

    def with_suit(self, suit: Suit) -> "Card":
        """Return a copy of this card with a different suit."""
        return Card(self.rank, suit)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10d', 'K♥'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank): rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {suit.letter: suit for suit in Suit}
        suit_map.update({str(suit): suit for suit in Suit})

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def full_card_set() -> list[Card]:
    """Return the 52 unique cards in construction order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """A standard 52-card deck drawn from the top."""

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new deck."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = full_card_set()

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise IndexError("Cannot draw from empty deck")
        return self._cards.pop()

    def clear(self) -> None:
        """Remove every card from the deck."""
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def is_empty(self) -> bool:
        """Check if no cards remain."""
        return not self._cards

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)


class DiscardPile:
    """Cards removed from the hand by playing or discarding."""

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = []

    def add(self, card: Card) -> None:
        """Put a card on the pile."""
        self._cards.append(card)

    def extend(self, cards: Iterable[Card]) -> None:
        """Put several cards on the pile."""
        self._cards.extend(cards)

    def draw_random(self, count: int) -> list[Card]:
        """
        Remove up to `count` cards chosen uniformly at random.

        Args:
            count: Number of cards wanted

        Returns:
            The drawn cards; fewer than requested when the pile runs out
        """
        drawn: list[Card] = []
        while len(drawn) < count and self._cards:
            index = self._rng.randrange(len(self._cards))
            drawn.append(self._cards.pop(index))
        return drawn

    def clear(self) -> None:
        """Empty the pile."""
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def is_empty(self) -> bool:
        """Check if the pile is empty."""
        return not self._cards
