from dataclasses import dataclass
from datetime import datetime

TEAMMATE_KIND = "StaticTeammate"

# record attribute -> stored property name
SLOT_PROPERTIES: dict[str, str] = {
    # accessories
    "ears_value": "EarsValue",
    "neck_value": "NeckValue",
    "wrists_value": "WristsValue",
    "ring_value": "RingValue",
    # gear
    "weapon_value": "WeaponValue",
    "head_value": "HeadValue",
    "body_value": "BodyValue",
    "hands_value": "HandsValue",
    "legs_value": "LegsValue",
    "feet_value": "FeetValue",
    # upgrade counters
    "weapon_token_value": "WeaponTokenValue",
    "weapon_upgrade_value": "WeaponUpgradeValue",
    "acc_upgrade_value": "AccUpgradeValue",
    "gear_upgrade_value": "GearUpgradeValue",
}


@dataclass
class StaticTeammate:
    name: str = ""
    static_guid: str = ""

    ears_value: int = 0
    neck_value: int = 0
    wrists_value: int = 0
    ring_value: int = 0
    weapon_value: int = 0
    head_value: int = 0
    body_value: int = 0
    hands_value: int = 0
    legs_value: int = 0
    feet_value: int = 0
    weapon_token_value: int = 0
    weapon_upgrade_value: int = 0
    acc_upgrade_value: int = 0
    gear_upgrade_value: int = 0

    creation_date: datetime | None = None
    last_updated_date: datetime | None = None
    key: int | None = None
