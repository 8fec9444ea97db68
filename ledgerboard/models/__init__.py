import importlib

from ledgerboard.models.inventory_item import InventoryItem
from ledgerboard.models.recommendation import Recommendation
from ledgerboard.models.transaction import Transaction
from ledgerboard.models.user import User


def import_all_models() -> None:
    for module_name in (
        "ledgerboard.models.inventory_item",
        "ledgerboard.models.recommendation",
        "ledgerboard.models.transaction",
        "ledgerboard.models.user",
    ):
        importlib.import_module(module_name)


__all__ = [
    "InventoryItem",
    "Recommendation",
    "Transaction",
    "User",
    "import_all_models",
]
