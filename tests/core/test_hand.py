"""Tests for the Hand class."""

from bigtwo.cards import Deck
from bigtwo.hand import Hand


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        assert len(empty_hand) == 0
        assert empty_hand.is_empty

    def test_add_card(self, empty_hand, make_cards):
        empty_hand.add_card(make_cards("AS")[0])
        assert len(empty_hand) == 1
        assert not empty_hand.is_empty

    def test_select_keeps_cards(self, make_cards):
        hand = Hand(make_cards("2C", "3D", "4H"))
        assert hand.select([2, 0]) == make_cards("4H", "2C")
        assert len(hand) == 3

    def test_remove_indices_in_hand_order(self, make_cards):
        """Test that removal returns cards in hand order and keeps the rest."""
        hand = Hand(make_cards("2C", "3D", "4H", "5S", "6C"))

        removed = hand.remove_indices([3, 0, 1])

        assert removed == make_cards("2C", "3D", "5S")
        assert hand.cards == make_cards("4H", "6C")

    def test_valid_selection(self, make_cards):
        hand = Hand(make_cards("2C", "3D", "4H"))
        assert hand.valid_selection([0, 2])
        assert hand.valid_selection([])
        assert not hand.valid_selection([0, 0])
        assert not hand.valid_selection([3])
        assert not hand.valid_selection([-1])

    def test_replace(self, make_cards):
        hand = Hand(make_cards("2C", "3D"))
        old = hand.replace(1, make_cards("3H")[0])
        assert old == make_cards("3D")[0]
        assert hand.cards == make_cards("2C", "3H")

    def test_take_all(self, make_cards):
        hand = Hand(make_cards("2C", "3D"))
        taken = hand.take_all()
        assert taken == make_cards("2C", "3D")
        assert hand.is_empty

    def test_refill_to_size(self, deck):
        """Test drawing up to the target size."""
        hand = Hand()
        drawn = hand.refill(deck, 7)
        assert drawn == 7
        assert len(hand) == 7
        assert len(deck) == 45

    def test_refill_full_hand_draws_nothing(self, deck):
        hand = Hand()
        hand.refill(deck, 7)
        assert hand.refill(deck, 7) == 0

    def test_refill_stops_when_deck_runs_out(self):
        """Test that a short deck leaves the hand short."""
        deck = Deck()
        for _ in range(49):
            deck.draw()
        hand = Hand()

        drawn = hand.refill(deck, 7)

        assert drawn == 3
        assert len(hand) == 3
        assert deck.is_empty
