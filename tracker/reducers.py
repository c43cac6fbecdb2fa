"""
Merge rules for player state updates.

Each reducer folds one event into the snapshot in place and returns it.
Callers are expected to hold exclusive access to the snapshot.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from .models import (
    BankUpdate,
    DeathUpdate,
    EquipmentUpdate,
    InventoryUpdate,
    LoginUpdate,
    LootUpdate,
    OverheadUpdate,
    PlayerState,
    PositionUpdate,
    QuestUpdate,
    SkullUpdate,
    StatUpdate,
)

logger = logging.getLogger(__name__)

QUEST_FINISHED = "FINISHED"

Reducer = Callable[[PlayerState, BaseModel], PlayerState]


def reduce_equipment(state: PlayerState, event: EquipmentUpdate) -> PlayerState:
    state.username = event.username
    state.equipment = {slot: item.model_copy() for slot, item in event.items.items()}
    return state


def reduce_inventory(state: PlayerState, event: InventoryUpdate) -> PlayerState:
    state.username = event.username
    state.inventory = [item.model_copy() for item in event.items]
    return state


def reduce_bank(state: PlayerState, event: BankUpdate) -> PlayerState:
    state.username = event.username
    state.bank = [item.model_copy() for item in event.items]
    return state


def reduce_stats(state: PlayerState, event: StatUpdate) -> PlayerState:
    """
    Merge a stat update into the existing stats.

    Skills present in the update replace the stored entry for that skill (or
    are appended); skills not mentioned keep their previous values. The first
    stat update is installed as-is.
    """
    state.username = event.username

    if state.stats is None:
        state.stats = event.model_copy(deep=True)
        return state

    existing = state.stats
    existing.combat_level = event.combat_level

    # First entry wins if a skill is already listed twice
    positions = {}
    for i, change in enumerate(existing.stat_changes):
        positions.setdefault(change.skill, i)
    for change in event.stat_changes:
        index = positions.get(change.skill)
        if index is None:
            positions[change.skill] = len(existing.stat_changes)
            existing.stat_changes.append(change.model_copy())
        else:
            existing.stat_changes[index] = change.model_copy()

    return state


def reduce_quests(state: PlayerState, event: QuestUpdate) -> PlayerState:
    """
    Replace quest data and recount totals from this update alone.

    Totals are not carried over from earlier updates, so a shorter quest
    list lowers them.
    """
    state.username = event.username
    state.quests = event.model_copy(deep=True)
    state.quest_points = event.quest_points
    state.total_quests = len(event.quest_changes)
    state.quests_completed = sum(
        1 for quest in event.quest_changes if quest.state == QUEST_FINISHED
    )
    return state


def reduce_position(state: PlayerState, event: PositionUpdate) -> PlayerState:
    state.username = event.username
    state.position = event.position.model_copy()
    return state


def reduce_login(state: PlayerState, event: LoginUpdate) -> PlayerState:
    state.username = event.username
    state.login_state = event.state
    return state


def reduce_loot(state: PlayerState, event: LootUpdate) -> PlayerState:
    state.username = event.username
    state.last_loot = event.model_copy(deep=True)
    return state


def reduce_death(
    state: PlayerState,
    event: DeathUpdate,
    now: Optional[datetime] = None
) -> PlayerState:
    """Record the server time at which the death was processed."""
    state.username = event.username
    now = now or datetime.now(timezone.utc)
    state.last_death_time = now.isoformat()
    return state


def reduce_overhead(state: PlayerState, event: OverheadUpdate) -> PlayerState:
    state.username = event.username
    state.overhead = event.overhead
    return state


def reduce_skull(state: PlayerState, event: SkullUpdate) -> PlayerState:
    state.username = event.username
    state.skull = event.skull
    return state


REDUCERS: Dict[str, Reducer] = {
    "equipment_update": reduce_equipment,
    "inventory_update": reduce_inventory,
    "bank_update": reduce_bank,
    "stat_update": reduce_stats,
    "quest_update": reduce_quests,
    "position_update": reduce_position,
    "login_update": reduce_login,
    "loot_update": reduce_loot,
    "death_update": reduce_death,
    "overhead_update": reduce_overhead,
    "skull_update": reduce_skull,
}


def reduce_event(state: PlayerState, kind: str, event: BaseModel) -> bool:
    """
    Dispatch an event to the reducer registered for its kind.

    Args:
        state: Snapshot to update in place
        kind: Event kind (e.g. "stat_update")
        event: Validated payload for that kind

    Returns:
        True if the event was applied, False for an unknown kind
    """
    reducer = REDUCERS.get(kind)
    if reducer is None:
        logger.info(f"Ignoring unknown update type: {kind}")
        return False

    reducer(state, event)
    return True
