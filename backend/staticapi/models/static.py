from dataclasses import dataclass
from datetime import datetime

STATIC_KIND = "Static"


@dataclass
class Static:
    name: str
    guid: str
    creation_date: datetime | None = None
    last_updated_date: datetime | None = None
    key: int | None = None
