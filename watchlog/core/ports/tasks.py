"""
Interface port pour la soumission de taches de fond.
"""

from abc import ABC, abstractmethod


class ITaskSink(ABC):
    """
    Recepteur de taches "rafraichir l'item N".

    Aucun contrat d'ordre ni de collecte des resultats : chaque tache est
    independante et son echec n'affecte pas les autres.
    """

    @abstractmethod
    def submit(self, item_id: int) -> None:
        """Soumet le rafraichissement d'un item."""
        ...
