"""
Constantes globales pour Watchlog.

Ce module contient les constantes utilisees dans l'application:
- URLs des API externes (TMDB, IMDb, CDN des images)
- Valeurs par defaut du catalogue
"""

# API TMDB v3
TMDB_BASE_URL = "https://api.themoviedb.org/3"

# CDN des images TMDB (la taille est inseree entre la base et le chemin)
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

# Page d'un titre IMDb (note extraite du JSON-LD)
IMDB_BASE_URL = "https://www.imdb.com"

# Langue de repli pour les bandes-annonces
FALLBACK_VIDEO_LANGUAGE = "en"

# Slug utilise quand le titre ne contient aucun caractere exploitable
EMPTY_SLUG = "no-slug"

# Note personnelle "sans note"
NEUTRAL_RATING = 0

# Sens de tri acceptes pour la liste du catalogue
SORT_DIRECTIONS = frozenset({"asc", "desc"})
