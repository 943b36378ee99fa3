"""
Adaptateurs (couche infrastructure).

Implementations concretes des ports du domaine :
- api/ : Clients TMDB et IMDb
- assets/ : Stockage local des images
- tasks/ : Execution des rafraichissements en tache de fond
- cli/ : Interface en ligne de commande
"""
