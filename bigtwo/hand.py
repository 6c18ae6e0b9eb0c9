"""The player's held cards."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from bigtwo.cards import Card, Deck


@dataclass
class Hand:
    """Cards held by the player, addressed by position."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def extend(self, cards: Iterable[Card]) -> None:
        """Add several cards to the hand."""
        self.cards.extend(cards)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    def take_all(self) -> list[Card]:
        """Remove and return every held card."""
        taken = list(self.cards)
        self.cards.clear()
        return taken

    def valid_selection(self, indices: Iterable[int]) -> bool:
        """Check that indices are unique and all address held cards."""
        indices = list(indices)
        if len(set(indices)) != len(indices):
            return False
        return all(0 <= i < len(self.cards) for i in indices)

    def select(self, indices: Iterable[int]) -> list[Card]:
        """Return the cards at the given positions without removing them."""
        return [self.cards[i] for i in indices]

    def remove_indices(self, indices: Iterable[int]) -> list[Card]:
        """
        Remove the cards at the given positions.

        Removal runs from the highest index down so earlier positions stay
        valid while removing.

        Returns:
            The removed cards, in hand order
        """
        removed = []
        for i in sorted(set(indices), reverse=True):
            removed.append(self.cards.pop(i))
        removed.reverse()
        return removed

    def replace(self, index: int, card: Card) -> Card:
        """Swap the card at `index` for another, returning the old one."""
        old = self.cards[index]
        self.cards[index] = card
        return old

    def refill(self, deck: Deck, size: int) -> int:
        """
        Draw from the deck until the hand holds `size` cards or the deck runs out.

        Returns:
            Number of cards drawn
        """
        drawn = 0
        while len(self.cards) < size and not deck.is_empty:
            self.cards.append(deck.draw())
            drawn += 1
        return drawn

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.cards)

    @property
    def is_empty(self) -> bool:
        """Check if no cards are held."""
        return not self.cards
