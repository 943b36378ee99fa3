"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- Item: A movie or TV show in the catalog
- Episode: Individual episode of a TV show
- AlternativeTitle: Alternative title of an item
- Genre: Provider genre
- MediaType: Kind of catalog item
"""

from watchlog.core.entities.media import (
    AlternativeTitle,
    Episode,
    Genre,
    Item,
    MediaType,
)

__all__ = [
    "AlternativeTitle",
    "Episode",
    "Genre",
    "Item",
    "MediaType",
]
