from typing import Any

from staticapi.core.time_utils import from_iso, to_iso
from staticapi.core.values import to_int32
from staticapi.models.entity import Entity
from staticapi.models.static import STATIC_KIND, Static
from staticapi.models.teammate import SLOT_PROPERTIES, TEAMMATE_KIND, StaticTeammate

NAME = "Name"
STATIC_GUID = "StaticGUID"
CREATION_DATE = "CreationDate"
LAST_UPDATED_DATE = "LastUpdatedDate"


def _text(props: dict[str, Any], name: str) -> str:
    value = props.get(name)
    return "" if value is None else str(value)


def _int(props: dict[str, Any], name: str) -> int:
    value = props.get(name)
    return 0 if value is None else to_int32(value)


def teammate_to_entity(teammate: StaticTeammate, entity: Entity | None = None) -> Entity:
    """
    Write the sixteen application fields of ``teammate`` into a property bag.

    When ``entity`` is given its bag is updated in place, so the key and any
    timestamps already stored on it survive. Timestamps are only written if
    set on the record.
    """
    if entity is None:
        entity = Entity(kind=TEAMMATE_KIND, key=teammate.key)

    entity[NAME] = teammate.name
    entity[STATIC_GUID] = teammate.static_guid
    for attr, prop in SLOT_PROPERTIES.items():
        entity[prop] = getattr(teammate, attr)

    if teammate.creation_date is not None:
        entity[CREATION_DATE] = to_iso(teammate.creation_date)
    if teammate.last_updated_date is not None:
        entity[LAST_UPDATED_DATE] = to_iso(teammate.last_updated_date)
    return entity


def entity_to_teammate(entity: Entity) -> StaticTeammate:
    props = entity.properties
    slots = {attr: _int(props, prop) for attr, prop in SLOT_PROPERTIES.items()}
    return StaticTeammate(
        name=_text(props, NAME),
        static_guid=_text(props, STATIC_GUID),
        creation_date=from_iso(props.get(CREATION_DATE)),
        last_updated_date=from_iso(props.get(LAST_UPDATED_DATE)),
        key=entity.key,
        **slots,
    )


def static_to_entity(static: Static) -> Entity:
    entity = Entity(kind=STATIC_KIND, key=static.key)
    entity[NAME] = static.name
    entity[STATIC_GUID] = static.guid
    if static.creation_date is not None:
        entity[CREATION_DATE] = to_iso(static.creation_date)
    if static.last_updated_date is not None:
        entity[LAST_UPDATED_DATE] = to_iso(static.last_updated_date)
    return entity


def entity_to_static(entity: Entity) -> Static:
    props = entity.properties
    return Static(
        name=_text(props, NAME),
        guid=_text(props, STATIC_GUID),
        creation_date=from_iso(props.get(CREATION_DATE)),
        last_updated_date=from_iso(props.get(LAST_UPDATED_DATE)),
        key=entity.key,
    )
