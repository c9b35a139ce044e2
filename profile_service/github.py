import logging
from typing import Any

import httpx

from .config import Settings

logger = logging.getLogger(__name__)

USER_AGENT = "profile-service"


class GithubProfileNotFound(Exception):
    """Upstream said no (non-200) or could not be reached."""


async def fetch_repos(username: str, settings: Settings) -> Any:
    """
    Fetch the five oldest-first repositories of a GitHub user.
    Returns the decoded upstream JSON unchanged.
    """
    url = f"{settings.github_api_url}/users/{username}/repos"
    params = {"per_page": 5, "sort": "created", "direction": "asc"}
    headers = {"User-Agent": USER_AGENT, "Accept": "application/vnd.github+json"}
    auth = None
    if settings.github_client_id and settings.github_secret:
        auth = (settings.github_client_id, settings.github_secret)

    try:
        async with httpx.AsyncClient(timeout=settings.github_timeout) as client:
            r = await client.get(url, params=params, headers=headers, auth=auth)
    except httpx.RequestError as e:
        logger.error("Error calling GitHub for %s: %s", username, e)
        raise GithubProfileNotFound(username) from e

    if r.status_code != 200:
        logger.warning("GitHub returned %s for %s", r.status_code, username)
        raise GithubProfileNotFound(username)

    return r.json()
