from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from staticapi.core.values import INT32_MAX, INT32_MIN

# wire integers are signed 32-bit; "5" or 5.0 are rejected
SlotValue = Annotated[int, Field(strict=True, ge=INT32_MIN, le=INT32_MAX)]


class TeammateIn(BaseModel):
    """
    Teammate payload of ``POST /staticmember``.

    Keys are camelCase on the wire (``staticGuid``, ``earsValue``), every slot
    defaults to 0. Incoming keys are matched ignoring case, see
    :func:`staticapi.schemas.payload.fold_keys`.
    """

    name: str = Field(default="", strict=True)
    static_guid: str = Field(default="", strict=True)

    ears_value: SlotValue = 0
    neck_value: SlotValue = 0
    wrists_value: SlotValue = 0
    ring_value: SlotValue = 0
    weapon_value: SlotValue = 0
    head_value: SlotValue = 0
    body_value: SlotValue = 0
    hands_value: SlotValue = 0
    legs_value: SlotValue = 0
    feet_value: SlotValue = 0
    weapon_token_value: SlotValue = 0
    weapon_upgrade_value: SlotValue = 0
    acc_upgrade_value: SlotValue = 0
    gear_upgrade_value: SlotValue = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TeammateOut(TeammateIn):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
