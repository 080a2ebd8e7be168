import json
from typing import Any

from pydantic import BaseModel


class InvalidJSON(ValueError):
    pass


def load_json(raw: bytes) -> Any:
    """Decode a request body; an empty body counts as invalid JSON."""
    # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise InvalidJSON(str(e)) from e


def fold_keys(data: dict[str, Any], model: type[BaseModel]) -> dict[str, Any]:
    """
    Map ``data`` keys onto ``model`` field names ignoring case.

    Both the field name and its alias are matched, so ``StaticGUID``,
    ``staticGuid`` and ``static_guid`` all land on ``static_guid``. Unknown
    keys are dropped; on duplicates the last one wins.
    """
    lookup: dict[str, str] = {}
    for name, info in model.model_fields.items():
        lookup[name.lower()] = name
        if info.alias:
            lookup[info.alias.lower()] = name

    folded: dict[str, Any] = {}
    for key, value in data.items():
        target = lookup.get(str(key).lower())
        if target is not None:
            folded[target] = value
    return folded
