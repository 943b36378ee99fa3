"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ItemFields : Champs enrichissables d'un item, avec merge_fields pour la fusion
- ItemDraft : Donnees d'entree de creation d'un item
- ItemSortField : Champ de tri de la liste du catalogue
- ItemListing, ItemPage : Vues du catalogue
- EpisodeOverview : Episodes groupes par saison
- OperationStatus, OperationResult : Issue des operations
"""

from watchlog.core.value_objects.item_fields import (
    ItemDraft,
    ItemFields,
    merge_fields,
)
from watchlog.core.value_objects.listing import (
    EpisodeOverview,
    ItemListing,
    ItemPage,
    ItemSortField,
)
from watchlog.core.value_objects.results import (
    OperationResult,
    OperationStatus,
)

__all__ = [
    "ItemDraft",
    "ItemFields",
    "merge_fields",
    "EpisodeOverview",
    "ItemListing",
    "ItemPage",
    "ItemSortField",
    "OperationResult",
    "OperationStatus",
]
