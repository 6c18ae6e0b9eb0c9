"""Game session engine with progression state machine."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from random import Random
from typing import Callable, Iterable

from transitions import Machine

from bigtwo.cards import Card, Deck, DiscardPile
from bigtwo.chain import ChainTracker
from bigtwo.evaluator import VALID_PLAY_SIZES, EvalType, evaluate
from bigtwo.hand import Hand
from bigtwo.magic import HAND_SCORE_UPGRADE_BONUS, MagicChoice, ModifierSet
from bigtwo.rules import RuleSet
from bigtwo.scoring import score_play
from bigtwo.shop import SHOP_ITEMS, PurchaseError, ShopItem, purchase
from bigtwo.game.events import EventEmitter, EventType, GameEvent
from bigtwo.game.state import RunState

logger = logging.getLogger(__name__)


class Rejection(str, Enum):
    """Reasons an action is refused. None of them end the run."""

    INVALID_COMBINATION = "invalid_combination"
    NOT_AVAILABLE = "not_available"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_ITEM = "unknown_item"
    INVALID_TARGET = "invalid_target"
    UNKNOWN_CHOICE = "unknown_choice"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PlayResult:
    """Outcome of submitting a selection."""

    eval_type: EvalType
    points: Decimal = Decimal("0")
    gold: Decimal = Decimal("0")
    chain_multiplier: Decimal = Decimal("1")
    error: Rejection | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a non-play action."""

    success: bool
    reason: Rejection | None = None

    @classmethod
    def rejected(cls, reason: Rejection) -> "ActionResult":
        return cls(success=False, reason=reason)


OK = ActionResult(success=True)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for the presentation layer."""

    state: RunState
    level: int
    target: Decimal
    score: Decimal
    gold: Decimal
    chain_type: EvalType
    chain_count: int
    chain_multiplier: Decimal
    deck_size: int
    hand_size: int
    discard_size: int
    hand: tuple[Card, ...]
    modifiers: dict
    cleared: bool
    failed: bool
    finished_all: bool
    log: tuple[str, ...] = field(default_factory=tuple)


class GameSession:
    """
    One run of the game, from level 1 to completion or failure.

    This is the core game logic, completely UI-agnostic. Every player intent
    is a method call that runs to completion and returns a result; nothing
    blocks waiting for input.
    """

    # State machine states
    STATES = [s.name.lower() for s in RunState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "clear_level", "source": "in_progress", "dest": "awaiting_shop"},
        {"trigger": "close_shop", "source": "awaiting_shop", "dest": "awaiting_magic_choice"},
        {"trigger": "next_level", "source": "awaiting_magic_choice", "dest": "in_progress"},
        {"trigger": "complete_run", "source": "awaiting_magic_choice", "dest": "completed"},
        {"trigger": "fail_run", "source": "in_progress", "dest": "failed"},
        {"trigger": "restart_run", "source": "*", "dest": "in_progress"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new run and deal the opening hand.

        Args:
            rules: Game rules (uses defaults if not provided)
            rng: Random number generator for reproducible games
        """
        self.rules = rules or RuleSet()
        self.rng = rng or Random()

        self.deck = Deck(rng=self.rng)
        self.hand = Hand()
        self.discard = DiscardPile(rng=self.rng)
        self.modifiers = ModifierSet()
        self.chain = ChainTracker(step=self.rules.chain_step)
        self.events = EventEmitter(
            log_size=self.rules.log_size,
            history_size=self.rules.history_size,
        )

        self.level = 1
        self.score = Decimal("0")
        self.gold = Decimal("0")

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="in_progress",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self._deal_new_run()
        self.events.emit_new(
            EventType.GAME_STARTED,
            "Welcome. Select 1, 2 or 5 cards and play, or pass to draw.",
            level=self.level,
            target=float(self.target),
        )

    @property
    def state(self) -> RunState:
        """Get current run state as enum."""
        return RunState[self._machine_state.upper()]  # type: ignore

    @property
    def target(self) -> Decimal:
        """Cumulative score needed to clear the current level."""
        return self.rules.target_for(self.level)

    @property
    def cleared(self) -> bool:
        return self.state in (RunState.AWAITING_SHOP, RunState.AWAITING_MAGIC_CHOICE)

    @property
    def failed(self) -> bool:
        return self.state == RunState.FAILED

    @property
    def finished_all(self) -> bool:
        return self.state == RunState.COMPLETED

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # ----- run lifecycle -----

    def _deal_new_run(self) -> None:
        """Fresh shuffled deck, full hand, empty discard."""
        self.deck.reset()
        self.deck.shuffle()
        self.hand.clear()
        self.discard.clear()
        self.hand.refill(self.deck, self.rules.hand_size)

    def restart(self) -> None:
        """Reset everything to a brand new run. Allowed from any state."""
        self._deal_new_run()
        self.level = 1
        self.score = Decimal("0")
        self.gold = Decimal("0")
        self.modifiers.reset()
        self.chain.reset()
        self.events.clear_history()
        self.restart_run()
        logger.debug("Run restarted")
        self.events.emit_new(EventType.GAME_RESTARTED, "Restarted.")

    # ----- guards -----

    def _reject(self, reason: Rejection, message: str) -> Rejection:
        event_type = (
            EventType.INSUFFICIENT_FUNDS
            if reason == Rejection.INSUFFICIENT_FUNDS
            else EventType.INVALID_ACTION
        )
        self.events.emit_new(event_type, message, reason=reason.value)
        return reason

    def _require_state(self, expected: RunState, action: str) -> Rejection | None:
        """Reject an action outside its state. Terminal states report game over."""
        if self.state.is_terminal:
            return self._reject(Rejection.GAME_OVER, f"Cannot {action}: the run is over.")
        if self.state != expected:
            return self._reject(
                Rejection.NOT_AVAILABLE,
                f"Cannot {action} while {str(self.state).lower()}.",
            )
        return None

    # ----- player actions -----

    def play(self, indices: Iterable[int]) -> PlayResult:
        """
        Play the selected hand cards.

        Args:
            indices: Positions of the selected cards in the hand

        Returns:
            The evaluation and what it earned, or the rejection reason
        """
        indices = list(indices)
        error = self._require_state(RunState.IN_PROGRESS, "play")
        if error:
            return PlayResult(eval_type=EvalType.INVALID, error=error)

        if not self.hand.valid_selection(indices) or len(indices) not in VALID_PLAY_SIZES:
            return self._invalid_play()

        played = self.hand.select(indices)
        eval_type = evaluate(played)
        if not eval_type.is_valid:
            return self._invalid_play()

        compatible = self.chain.is_compatible(eval_type)
        chain_mult = self.chain.record(eval_type)
        if compatible:
            self.events.emit_new(
                EventType.CHAIN_EXTENDED,
                f"CHAIN x{chain_mult:.2f}! (chain {self.chain.chain_count})",
                chain_count=self.chain.chain_count,
                multiplier=float(chain_mult),
            )

        breakdown = score_play(
            eval_type, played, self.level, self.modifiers, chain_mult, self.rules
        )
        self.score += breakdown.points
        self.gold += breakdown.gold
        self.events.emit_new(
            EventType.HAND_PLAYED,
            f"Played {' '.join(c.short_text for c in played)} => {eval_type}, "
            f"+{breakdown.points:.1f} pts, +{breakdown.gold:.1f} gold",
            eval_type=eval_type.name,
            points=float(breakdown.points),
            gold=float(breakdown.gold),
            details=breakdown.details,
        )

        self.discard.extend(self.hand.remove_indices(indices))
        drawn = self.hand.refill(self.deck, self.rules.hand_size)
        if drawn:
            self.events.emit_new(EventType.CARDS_DRAWN, count=drawn)

        if self.modifiers.consume_draw_boost():
            boosted = self.discard.draw_random(len(played))
            self.hand.extend(boosted)
            self.events.emit_new(
                EventType.DRAW_BOOST_USED,
                f"Draw Boost: {len(boosted)} extra card(s) from the discard pile.",
                requested=len(played),
                drawn=len(boosted),
            )

        self._check_progress()
        return PlayResult(
            eval_type=eval_type,
            points=breakdown.points,
            gold=breakdown.gold,
            chain_multiplier=chain_mult,
        )

    def _invalid_play(self) -> PlayResult:
        error = self._reject(
            Rejection.INVALID_COMBINATION,
            "Invalid play. Try 1, 2 (pair), or 5-card combos.",
        )
        return PlayResult(eval_type=EvalType.INVALID, error=error)

    def pass_turn(self) -> ActionResult:
        """Skip scoring and draw back up to a full hand."""
        error = self._require_state(RunState.IN_PROGRESS, "pass")
        if error:
            return ActionResult.rejected(error)

        drawn = self.hand.refill(self.deck, self.rules.hand_size)
        self.events.emit_new(
            EventType.PLAYER_PASSED,
            f"Passed. Drew {drawn} card(s).",
            drawn=drawn,
        )
        self._check_progress()
        return OK

    def redraw(self) -> ActionResult:
        """
        Swap the hand for random cards from the discard pile.

        Draws min(hand, discard) cards at random, discards the whole hand, and
        falls back to the deck only when nothing came from the discard pile.
        """
        error = self._require_state(RunState.IN_PROGRESS, "redraw")
        if error:
            return ActionResult.rejected(error)
        if not self.modifiers.consume_discard_redraw():
            return ActionResult.rejected(
                self._reject(Rejection.NOT_AVAILABLE, "No redraw available.")
            )

        hand_size = len(self.hand)
        staged = self.discard.draw_random(hand_size)
        self.discard.extend(self.hand.take_all())
        self.hand.extend(staged)

        from_deck = 0
        if not staged:
            from_deck = self.hand.refill(self.deck, hand_size)

        self.events.emit_new(
            EventType.REDRAW_USED,
            f"REDRAW complete: hand={len(self.hand)}, deck={len(self.deck)}, "
            f"discard={len(self.discard)} (deck draws: {from_deck})",
            from_discard=len(staged),
            from_deck=from_deck,
        )

        if self.hand.is_empty and self.deck.is_empty and self.discard.is_empty:
            self._fail("No cards available after REDRAW -> failed.")
            return OK

        self._check_progress()
        return OK

    # ----- shop -----

    @property
    def shop_items(self) -> list[ShopItem]:
        return list(SHOP_ITEMS.values())

    def buy(self, item_id: str) -> ActionResult:
        """Buy one shop upgrade. Only possible while the shop is open."""
        error = self._require_state(RunState.AWAITING_SHOP, "buy")
        if error:
            return ActionResult.rejected(error)

        try:
            self.gold = purchase(item_id, self.gold, self.modifiers)
        except PurchaseError as e:
            return ActionResult.rejected(self._reject(Rejection(e.code.lower()), str(e)))

        item = SHOP_ITEMS[item_id]
        self.events.emit_new(
            EventType.ITEM_PURCHASED,
            f"Bought: +{item.bonus} {item.eval_type} Bonus",
            item_id=item_id,
            cost=item.cost,
            gold=float(self.gold),
        )
        return OK

    def continue_from_shop(self) -> ActionResult:
        """Close the shop and open the magic choice."""
        error = self._require_state(RunState.AWAITING_SHOP, "leave the shop")
        if error:
            return ActionResult.rejected(error)

        self.close_shop()
        self.events.emit_new(EventType.SHOP_CLOSED, "Shop closed. Now choose Magic upgrade.")
        return OK

    # ----- magic -----

    def choose_magic(
        self,
        choice: MagicChoice | str,
        card_index: int | None = None,
    ) -> ActionResult:
        """
        Apply the level-up magic and advance to the next level.

        Args:
            choice: The selected upgrade, as a member or its string id
            card_index: Hand position for suit change and card multiplier

        Returns:
            Success, or a rejection that leaves the choice pending
        """
        error = self._require_state(RunState.AWAITING_MAGIC_CHOICE, "choose magic")
        if error:
            return ActionResult.rejected(error)

        try:
            choice = MagicChoice(choice)
        except ValueError:
            return ActionResult.rejected(
                self._reject(Rejection.UNKNOWN_CHOICE, f"Unknown magic choice: {choice}")
            )

        if choice.needs_target_card and (
            card_index is None or not 0 <= card_index < len(self.hand)
        ):
            return ActionResult.rejected(
                self._reject(Rejection.INVALID_TARGET, f"{choice} needs a card from your hand.")
            )

        if choice == MagicChoice.HAND_SCORE_UPGRADE:
            self.modifiers.add_bonus(EvalType.PAIR, HAND_SCORE_UPGRADE_BONUS)
            message = f"Chosen: Hand Score Upgrade (+{HAND_SCORE_UPGRADE_BONUS} to Pairs)"
        elif choice == MagicChoice.SUIT_CHANGE:
            card = self.hand[card_index]
            changed = card.with_suit(card.suit.next())
            self.hand.replace(card_index, changed)
            message = f"Suit Change: {card.short_text} -> {changed.short_text}"
        elif choice == MagicChoice.CARD_MULTIPLIER:
            rank = self.hand[card_index].rank
            self.modifiers.set_card_multiplier(rank, self.rules.card_multiplier_factor)
            message = f"Card Multiplier set to rank {rank} (x{self.rules.card_multiplier_factor})"
        elif choice == MagicChoice.DISCARD_REDRAW:
            self.modifiers.discard_redraw_available = True
            message = "Chosen: Discard/Redraw (one-time use)"
        else:
            self.modifiers.draw_boost_available = True
            message = "Chosen: Draw Boost (extra draw on next play only)"

        self.events.emit_new(EventType.MAGIC_CHOSEN, message, choice=choice.value)
        self._advance_level()
        return OK

    def _advance_level(self) -> None:
        self.level += 1
        if self.level > self.rules.max_level:
            self.complete_run()
            logger.debug("Run completed")
            self.events.emit_new(EventType.RUN_COMPLETED, "All levels cleared!")
            return

        self.next_level()
        self.events.emit_new(
            EventType.LEVEL_STARTED,
            f"Starting Level {self.level} (target {self.target})",
            level=self.level,
            target=float(self.target),
        )
        self._check_progress()

    # ----- progression -----

    def _check_progress(self) -> None:
        """Level clear check, then the exhaustion check."""
        if self.state != RunState.IN_PROGRESS:
            return

        if self.score >= self.target:
            self.clear_level()
            logger.debug("Level %d cleared with score %s", self.level, self.score)
            self.events.emit_new(
                EventType.LEVEL_CLEARED,
                f"Level {self.level} cleared! Visit Shop. Gold:{self.gold:.0f}",
                level=self.level,
                score=float(self.score),
            )
            self.events.emit_new(EventType.SHOP_OPENED, gold=float(self.gold))
            return

        # The discard pile is deliberately not considered here
        if self.deck.is_empty and self.hand.is_empty:
            self._fail("Deck empty and hand empty -> GAME OVER.")

    def _fail(self, message: str) -> None:
        self.fail_run()
        logger.debug("Run failed at level %d with score %s", self.level, self.score)
        self.events.emit_new(
            EventType.RUN_FAILED,
            message,
            level=self.level,
            score=float(self.score),
        )

    def check_progress(self) -> RunState:
        """Re-run the clear and failure checks, e.g. after external edits."""
        self._check_progress()
        return self.state

    # ----- views -----

    @property
    def recent_log(self) -> list[str]:
        return self.events.recent_log

    @property
    def total_cards(self) -> int:
        """Cards across deck, hand, and discard pile."""
        return len(self.deck) + len(self.hand) + len(self.discard)

    def snapshot(self) -> SessionSnapshot:
        """Build a read-only view of the session."""
        return SessionSnapshot(
            state=self.state,
            level=self.level,
            target=self.target,
            score=self.score,
            gold=self.gold,
            chain_type=self.chain.last_type,
            chain_count=self.chain.chain_count,
            chain_multiplier=self.chain.chain_multiplier,
            deck_size=len(self.deck),
            hand_size=len(self.hand),
            discard_size=len(self.discard),
            hand=tuple(self.hand),
            modifiers=self.modifiers.to_dict(),
            cleared=self.cleared,
            failed=self.failed,
            finished_all=self.finished_all,
            log=tuple(self.recent_log),
        )
