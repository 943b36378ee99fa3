"""
Watchlog - Catalogue personnel de films et series.

Ce package synchronise un catalogue local avec les metadonnees TMDB et les
notes IMDb, maintient les episodes, titres alternatifs et genres de chaque
item, et expose les vues triees autour de l'historique de visionnage.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (synchronisation, orchestration)
- adapters/ : Couche infrastructure (CLI, clients API, images, taches)
- infrastructure/ : Persistance SQLModel
"""

__version__ = "0.1.0"
