"""
Synchronisation des episodes des series.

TMDB fait autorite sur la structure saisons/episodes : l'ensemble des
episodes d'une serie est remplace a chaque synchronisation. Les champs
locaux (vu, fichier, sous-titres) sont reportes sur les nouveaux episodes
de meme numero.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from loguru import logger

from watchlog.core.entities.media import Episode, Item, MediaType
from watchlog.core.ports.api_clients import IMetadataProvider
from watchlog.core.ports.repositories import (
    IEpisodeRepository,
    ISettingRepository,
    ITransactionManager,
)
from watchlog.core.value_objects.listing import EpisodeOverview
from watchlog.utils.helpers import parse_flag, parse_timestamp

# Champs propres a l'utilisateur, absents de TMDB
_LOCAL_FIELDS = ("seen", "src", "fp_name", "subtitles")


class EpisodeSyncService:
    """
    Service de gestion des episodes.

    Les films n'ont pas d'episodes : create() et fetch() ne font rien pour eux.
    """

    def __init__(
        self,
        episode_repo: IEpisodeRepository,
        tmdb_client: IMetadataProvider,
        setting_repo: ISettingRepository,
        transaction: ITransactionManager,
    ) -> None:
        """
        Initialise le service.

        Args:
            episode_repo: Repository des episodes
            tmdb_client: Client TMDB
            setting_repo: Lecture des reglages (protection anti-spoiler)
            transaction: Gestionnaire de transaction
        """
        self._episode_repo = episode_repo
        self._tmdb_client = tmdb_client
        self._setting_repo = setting_repo
        self._transaction = transaction

    async def fetch(self, item: Item) -> Optional[list[Episode]]:
        """
        Recupere la structure complete des saisons d'une serie.

        Returns:
            Episodes TMDB, ou None si l'item n'est pas une serie
        """
        if item.media_type != MediaType.TV or item.tmdb_id is None:
            return None
        provider_episodes = await self._tmdb_client.tv_episodes(item.tmdb_id)
        return [
            Episode(
                tmdb_id=item.tmdb_id,
                season_number=episode.season_number,
                episode_number=episode.episode_number,
                name=episode.name,
                air_date=episode.air_date,
                episode_tmdb_id=episode.episode_tmdb_id,
                season_tmdb_id=episode.season_tmdb_id,
            )
            for episode in provider_episodes
        ]

    def replace(self, item: Item, episodes: Optional[list[Episode]]) -> list[Episode]:
        """
        Remplace les episodes d'une serie en conservant les champs locaux.

        Args:
            item: Serie concernee
            episodes: Episodes recuperes par fetch(), None pour ne rien faire
        """
        if episodes is None:
            return []

        with self._transaction.atomic():
            previous = {e.number: e for e in self._episode_repo.list_by_tmdb_id(item.tmdb_id)}
            for episode in episodes:
                old = previous.get(episode.number)
                if old is None:
                    continue
                for name in _LOCAL_FIELDS:
                    if not getattr(episode, name):
                        setattr(episode, name, getattr(old, name))
            stored = self._episode_repo.replace_all(item.tmdb_id, episodes)

        logger.debug(f"{len(stored)} episodes synchronises pour '{item.title}'")
        return stored

    async def create(self, item: Item) -> list[Episode]:
        """Synchronise les episodes d'une serie, sans effet pour un film."""
        episodes = await self.fetch(item)
        return self.replace(item, episodes)

    def remove(self, tmdb_id: int) -> int:
        """Supprime tous les episodes d'une serie."""
        with self._transaction.atomic():
            return self._episode_repo.delete_by_tmdb_id(tmdb_id)

    def get_all_by_tmdb_id(self, tmdb_id: int) -> EpisodeOverview:
        """Episodes d'une serie groupes par saison, avec le reglage anti-spoiler."""
        seasons: dict[int, list[Episode]] = {}
        for episode in self._episode_repo.list_by_tmdb_id(tmdb_id):
            seasons.setdefault(episode.season_number, []).append(episode)
        return EpisodeOverview(
            episodes=seasons,
            spoiler=self._setting_repo.get().episode_spoiler_protection,
        )

    def toggle_seen(self, episode_id: int) -> Optional[Episode]:
        """Inverse l'etat vu d'un episode, None si l'episode n'existe pas."""
        episode = self._episode_repo.get_by_id(episode_id)
        if episode is None:
            return None
        episode.seen = not episode.seen
        with self._transaction.atomic():
            return self._episode_repo.update(episode)

    def toggle_season(self, tmdb_id: int, season_number: int, seen: bool) -> int:
        """Fixe l'etat vu de tous les episodes d'une saison."""
        with self._transaction.atomic():
            return self._episode_repo.set_season_seen(tmdb_id, season_number, seen)

    def find_by(
        self, kind: str, value: Any, episode: Optional[int] = None
    ) -> Union[Episode, list[Episode], None]:
        """
        Recherche d'episodes.

        Args:
            kind: "src" (un episode), "tmdb_id" (tous les episodes de la serie)
                ou "episode" (saison = value, episode = episode)
            value: Valeur recherchee
            episode: Numero d'episode pour kind="episode"
        """
        if kind == "src":
            return self._episode_repo.find_by_src(value)
        if kind == "tmdb_id":
            return self._episode_repo.list_by_tmdb_id(int(value))
        if kind == "episode" and episode is not None:
            return self._episode_repo.find_specific(int(value), int(episode))
        return None

    def import_episode(self, record: Mapping[str, Any]) -> Episode:
        """
        Importe un episode depuis un export.

        L'ID interne de l'export est ignore. release_episode (timestamp Unix)
        est accepte a la place de air_date.
        """
        released = parse_timestamp(record.get("air_date") or record.get("release_episode"))
        episode = Episode(
            tmdb_id=int(record["tmdb_id"]),
            season_number=int(record["season_number"]),
            episode_number=int(record["episode_number"]),
            name=record.get("name") or "",
            air_date=released.date() if released else None,
            episode_tmdb_id=record.get("episode_tmdb_id"),
            season_tmdb_id=record.get("season_tmdb_id"),
            seen=parse_flag(record.get("seen")),
            src=record.get("src"),
            fp_name=record.get("fp_name"),
            subtitles=record.get("subtitles"),
        )
        with self._transaction.atomic():
            return self._episode_repo.add(episode)
