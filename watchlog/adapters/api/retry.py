"""
Relance des requetes TMDB et IMDb sur rate limiting (HTTP 429).

Le delai annonce par Retry-After est respecte quand il est present (borne par
max_wait), sinon on attend un backoff exponentiel avec jitter. Seul le 429 est
relance : 404, 5xx et timeouts remontent tels quels.
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """Reponse 429 ; retry_after vaut None si le header est absent ou illisible."""

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit le header Retry-After (secondes uniquement, la forme date est ignoree)."""
    if value and value.strip().isdigit():
        return int(value)
    return None


class _WaitRetryAfter:
    """Attente tenacity : Retry-After s'il est connu, backoff sinon."""

    def __init__(self, max_wait: int) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            return float(min(exc.retry_after, self._max_wait))
        return self._fallback(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"Rate limit atteint, tentative {retry_state.attempt_number} "
        f"(nouvel essai dans {delay:.0f}s)"
    )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur tenacity pour les coroutines qui levent RateLimitError.

    Apres max_attempts, la derniere RateLimitError est relevee.
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=_WaitRetryAfter(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP en relancant sur 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL absolue ou relative a base_url du client
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives, en secondes
        **kwargs: Passes a client.request() (params, headers...)

    Raises:
        RateLimitError: Si le 429 persiste apres max_attempts
        httpx.HTTPStatusError: Pour toute autre reponse en erreur
        httpx.TimeoutException: Si le delai du client est depasse
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _send() -> httpx.Response:
        logger.debug(f"{method} {url}")
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _send()
