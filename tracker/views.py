"""
Status view construction.

Joins a snapshot against the item database so every item carries its name.
"""
from typing import Optional

from .item_db import ItemDatabase
from .models import (
    Item,
    ItemWithName,
    LootUpdate,
    LootWithNames,
    PlayerState,
    PlayerStateView,
)


def resolve_item(item: Item, item_db: ItemDatabase) -> ItemWithName:
    """Attach the display name for an item, or None if the id is unknown."""
    return ItemWithName(id=item.id, quantity=item.quantity, name=item_db.get(item.id))


def _resolve_loot(loot: Optional[LootUpdate], item_db: ItemDatabase) -> Optional[LootWithNames]:
    if loot is None:
        return None
    return LootWithNames(
        username=loot.username,
        loot_type=loot.loot_type,
        entity_id=loot.entity_id,
        entity_name=loot.entity_name,
        items=[resolve_item(item, item_db) for item in loot.items],
    )


def build_player_view(state: PlayerState, item_db: ItemDatabase) -> PlayerStateView:
    """
    Build the status view for a snapshot.

    Equipment, inventory, bank and loot items are resolved the same way.
    Neither input is modified and the view shares no mutable data with the
    snapshot.

    Args:
        state: Snapshot to render
        item_db: Item id to name table

    Returns:
        PlayerStateView ready for serialisation
    """
    equipment = None
    if state.equipment is not None:
        equipment = {
            slot: resolve_item(item, item_db)
            for slot, item in state.equipment.items()
        }

    inventory = None
    if state.inventory is not None:
        inventory = [resolve_item(item, item_db) for item in state.inventory]

    bank = None
    if state.bank is not None:
        bank = [resolve_item(item, item_db) for item in state.bank]

    return PlayerStateView(
        username=state.username,
        position=state.position.model_copy() if state.position else None,
        login_state=state.login_state,
        equipment=equipment,
        inventory=inventory,
        bank=bank,
        stats=state.stats.model_copy(deep=True) if state.stats else None,
        quests=state.quests.model_copy(deep=True) if state.quests else None,
        quests_completed=state.quests_completed,
        total_quests=state.total_quests,
        quest_points=state.quest_points,
        last_loot=_resolve_loot(state.last_loot, item_db),
        last_death_time=state.last_death_time,
        overhead=state.overhead,
        skull=state.skull,
    )
