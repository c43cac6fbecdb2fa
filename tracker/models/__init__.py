"""
Schemas for player state updates, the merged snapshot and the status view.

Python attributes are snake_case; the wire format uses camelCase names.
"""
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Item(CamelModel):
    """Item stack as reported by the client."""
    id: int = Field(..., description="Item identifier")
    quantity: int = Field(..., description="Stack size")


class ItemWithName(CamelModel):
    """Item stack with its display name resolved."""
    id: int
    quantity: int
    name: Optional[str] = Field(None, description="Display name, absent when the id is unknown")


class WorldPoint(CamelModel):
    x: int
    y: int
    plane: int


class StatChange(CamelModel):
    """Current level and xp for a single skill."""
    skill: str = Field(..., description="Skill name, upper case (e.g. 'ATTACK')")
    level: int
    boosted_level: int
    xp: int


class Quest(CamelModel):
    id: int
    name: str
    state: str = Field(..., description="NOT_STARTED, IN_PROGRESS or FINISHED")


# Update events

class EquipmentUpdate(CamelModel):
    username: str
    items: Dict[str, Item] = Field(..., description="Equipped item keyed by slot name")


class InventoryUpdate(CamelModel):
    username: str
    items: List[Item]


class BankUpdate(CamelModel):
    username: str
    items: List[Item]


class StatUpdate(CamelModel):
    """Stat payload; may carry every skill or only the ones that changed."""
    username: str
    combat_level: int
    stat_changes: List[StatChange] = Field(default_factory=list)


class QuestUpdate(CamelModel):
    username: str
    quest_points: int
    quest_changes: List[Quest] = Field(default_factory=list)


class PositionUpdate(CamelModel):
    username: str
    position: WorldPoint


class LoginUpdate(CamelModel):
    username: str
    state: str = Field(..., description="Client login state (e.g. 'LOGGED_IN')")


class LootUpdate(CamelModel):
    username: str
    loot_type: Optional[str] = None
    entity_id: Optional[int] = None
    entity_name: Optional[str] = None
    items: List[Item] = Field(default_factory=list)


class DeathUpdate(CamelModel):
    username: str


class OverheadUpdate(CamelModel):
    username: str
    overhead: Optional[str] = None


class SkullUpdate(CamelModel):
    username: str
    skull: int


# Event kind -> payload model. Kind names double as route names.
EVENT_TYPES: Dict[str, Type[CamelModel]] = {
    "equipment_update": EquipmentUpdate,
    "inventory_update": InventoryUpdate,
    "bank_update": BankUpdate,
    "stat_update": StatUpdate,
    "quest_update": QuestUpdate,
    "position_update": PositionUpdate,
    "login_update": LoginUpdate,
    "loot_update": LootUpdate,
    "death_update": DeathUpdate,
    "overhead_update": OverheadUpdate,
    "skull_update": SkullUpdate,
}


class PlayerState(CamelModel):
    """Merged snapshot of everything currently known about the player."""

    username: Optional[str] = None
    position: Optional[WorldPoint] = None
    login_state: Optional[str] = None
    equipment: Optional[Dict[str, Item]] = None
    inventory: Optional[List[Item]] = None
    bank: Optional[List[Item]] = None
    stats: Optional[StatUpdate] = None
    quests: Optional[QuestUpdate] = None
    quests_completed: Optional[int] = None
    total_quests: Optional[int] = None
    quest_points: Optional[int] = None
    last_loot: Optional[LootUpdate] = None
    last_death_time: Optional[str] = None
    overhead: Optional[str] = None
    skull: Optional[int] = None


class LootWithNames(CamelModel):
    username: str
    loot_type: Optional[str] = None
    entity_id: Optional[int] = None
    entity_name: Optional[str] = None
    items: List[ItemWithName] = Field(default_factory=list)


class PlayerStateView(CamelModel):
    """Status view: the snapshot with item names attached."""

    username: Optional[str] = None
    position: Optional[WorldPoint] = None
    login_state: Optional[str] = None
    equipment: Optional[Dict[str, ItemWithName]] = None
    inventory: Optional[List[ItemWithName]] = None
    bank: Optional[List[ItemWithName]] = None
    stats: Optional[StatUpdate] = None
    quests: Optional[QuestUpdate] = None
    quests_completed: Optional[int] = None
    total_quests: Optional[int] = None
    quest_points: Optional[int] = None
    last_loot: Optional[LootWithNames] = None
    last_death_time: Optional[str] = None
    overhead: Optional[str] = None
    skull: Optional[int] = None
