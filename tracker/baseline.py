"""
Baseline stats from the Old School RuneScape hiscores.

Fetched once at startup so the status view has every skill before the client
has reported any stat changes.
"""
import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .models import PlayerState, StatChange, StatUpdate

logger = logging.getLogger(__name__)

OVERALL_SKILL = "Overall"


class BaselineUnavailableError(Exception):
    """Raised when hiscores data cannot be fetched or understood."""


class HiscoresClient:
    """HTTP client for the hiscores index_lite.json endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch_player(self, username: str) -> Dict[str, Any]:
        """
        Fetch the raw hiscores entry for a player.

        Args:
            username: Player display name

        Returns:
            Parsed JSON body ({"name": ..., "skills": [...], ...})

        Raises:
            BaselineUnavailableError: On connection errors, non-200 responses
                or a body that is not JSON
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params={"player": username})
        except httpx.RequestError as e:
            raise BaselineUnavailableError(f"Hiscores request failed: {e}") from e

        if response.status_code != 200:
            raise BaselineUnavailableError(
                f"Hiscores returned {response.status_code} for {username}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise BaselineUnavailableError(f"Hiscores returned invalid JSON: {e}") from e


def calculate_combat_level(stat_changes: List[StatChange]) -> int:
    """
    Compute combat level from skill levels.

    Skills that are missing count as level 1.
    """
    levels = {}
    for change in stat_changes:
        levels.setdefault(change.skill, change.level)

    def get_level(skill: str) -> int:
        return levels.get(skill, 1)

    attack = get_level("ATTACK")
    defence = get_level("DEFENCE")
    strength = get_level("STRENGTH")
    hitpoints = get_level("HITPOINTS")
    prayer = get_level("PRAYER")
    ranged = get_level("RANGED")
    magic = get_level("MAGIC")

    base = 0.25 * (defence + hitpoints + math.floor(prayer / 2))
    melee = 0.325 * (attack + strength)
    range_ = 0.325 * math.floor(ranged * 3 / 2)
    mage = 0.325 * math.floor(magic * 3 / 2)

    return max(0, math.floor(base + max(melee, range_, mage)))


def build_baseline_state(username: str, payload: Dict[str, Any]) -> PlayerState:
    """
    Turn a hiscores entry into an initial snapshot.

    Skill names are upper-cased to match the client's naming and the
    "Overall" row is dropped.

    Raises:
        BaselineUnavailableError: If the payload has no usable skills list
    """
    skills = payload.get("skills") if isinstance(payload, dict) else None
    if not isinstance(skills, list):
        raise BaselineUnavailableError("Hiscores payload has no skills")

    name = payload.get("name") or username

    stat_changes = []
    try:
        for skill in skills:
            if skill["name"] == OVERALL_SKILL:
                continue
            level = int(skill["level"])
            stat_changes.append(StatChange(
                skill=skill["name"].upper(),
                level=level,
                boosted_level=level,
                # Unranked skills report -1 xp
                xp=max(0, int(skill["xp"])),
            ))
    except (KeyError, TypeError, ValueError) as e:
        raise BaselineUnavailableError(f"Malformed hiscores skill entry: {e}") from e

    return PlayerState(
        username=name,
        stats=StatUpdate(
            username=name,
            combat_level=calculate_combat_level(stat_changes),
            stat_changes=stat_changes,
        ),
    )


async def fetch_baseline_stats(username: str, client: HiscoresClient) -> PlayerState:
    """Fetch hiscores for a player and build the initial snapshot."""
    logger.info(f"Fetching baseline stats for {username}")
    payload = await client.fetch_player(username)
    return build_baseline_state(username, payload)


async def load_initial_state(
    settings: Settings,
    client: Optional[HiscoresClient] = None
) -> PlayerState:
    """
    Produce the snapshot the store starts from.

    Falls back to an empty snapshot when no username is configured, the fetch
    is disabled, or the hiscores lookup fails.
    """
    username = settings.osrs_username
    if not username:
        logger.warning("OSRS_USERNAME is not set. Starting with empty state.")
        return PlayerState()

    if not settings.fetch_baseline:
        logger.info("Baseline fetch disabled. Starting with empty state.")
        return PlayerState()

    client = client or HiscoresClient(settings.hiscores_url, settings.hiscores_timeout)

    try:
        state = await fetch_baseline_stats(username, client)
    except BaselineUnavailableError as e:
        logger.warning(f"Failed to fetch baseline stats: {e}. Starting with empty state.")
        return PlayerState()

    logger.info(f"Successfully fetched baseline stats for {username}")
    return state
