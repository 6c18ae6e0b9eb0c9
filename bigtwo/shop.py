"""Shop: trade gold for permanent combination bonuses."""

from dataclasses import dataclass
from decimal import Decimal

from bigtwo.evaluator import EvalType
from bigtwo.magic import ModifierSet


@dataclass(frozen=True)
class ShopItem:
    """A repeatable upgrade adding a permanent bonus to one combination."""

    item_id: str
    name: str
    eval_type: EvalType
    bonus: int
    cost: int

    def __str__(self) -> str:
        return f"{self.name} (+{self.bonus} / {self.cost}g)"


SHOP_ITEMS: dict[str, ShopItem] = {
    item.item_id: item
    for item in (
        ShopItem("pair_bonus", "Pair Bonus", EvalType.PAIR, 5, 30),
        ShopItem("straight_bonus", "Straight Bonus", EvalType.STRAIGHT, 7, 40),
        ShopItem("flush_bonus", "Flush Bonus", EvalType.FLUSH, 8, 50),
        ShopItem("full_house_bonus", "Full House Bonus", EvalType.FULL_HOUSE, 10, 60),
        ShopItem("four_of_a_kind_bonus", "Four of a Kind Bonus", EvalType.FOUR_OF_A_KIND, 12, 75),
        ShopItem("straight_flush_bonus", "Straight Flush Bonus", EvalType.STRAIGHT_FLUSH, 15, 100),
    )
}


class PurchaseError(Exception):
    """Raised when a purchase cannot be completed."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def get_item(item_id: str) -> ShopItem:
    """Look up a shop item by id."""
    try:
        return SHOP_ITEMS[item_id]
    except KeyError:
        raise PurchaseError("UNKNOWN_ITEM", f"Unknown shop item: {item_id}") from None


def can_afford(item: ShopItem, gold: Decimal) -> bool:
    return gold >= item.cost


def purchase(item_id: str, gold: Decimal, modifiers: ModifierSet) -> Decimal:
    """
    Buy one unit of an upgrade.

    Args:
        item_id: Shop item identifier
        gold: Gold currently held
        modifiers: Modifier set receiving the bonus

    Returns:
        Gold remaining after the purchase

    Raises:
        PurchaseError: Unknown item or not enough gold; nothing is changed
    """
    item = get_item(item_id)
    if not can_afford(item, gold):
        raise PurchaseError(
            "INSUFFICIENT_FUNDS",
            f"{item.name} costs {item.cost} gold, have {gold}",
        )
    modifiers.add_bonus(item.eval_type, item.bonus)
    return gold - item.cost
