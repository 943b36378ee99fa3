"""
Resultats structures des operations du catalogue.

"Non trouve" et "non rafraichi" sont des resultats ordinaires, pas des
exceptions, pour que les appelants par lot puissent journaliser et continuer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from watchlog.core.entities.media import Item


class OperationStatus(str, Enum):
    """Issue d'une operation sur un item."""

    DONE = "done"
    NOT_FOUND = "not_found"
    NOT_REFRESHED = "not_refreshed"


@dataclass
class OperationResult:
    """Issue d'une operation avec l'item concerne quand il existe."""

    status: OperationStatus
    item: Optional[Item] = None

    @property
    def ok(self) -> bool:
        """True si l'operation a ete appliquee."""
        return self.status == OperationStatus.DONE

    @classmethod
    def done(cls, item: Item) -> "OperationResult":
        return cls(OperationStatus.DONE, item)

    @classmethod
    def not_found(cls) -> "OperationResult":
        return cls(OperationStatus.NOT_FOUND)
