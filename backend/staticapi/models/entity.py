from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from staticapi.db.base import Base


class EntityRow(Base):
    __tablename__ = "entities"

    # store-assigned primary key, separate from any application identifier
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(String(64), index=True)
    properties: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)


@dataclass
class Entity:
    """Detached property bag of one stored entity."""

    kind: str
    properties: dict[str, Any] = field(default_factory=dict)
    key: int | None = None

    def __getitem__(self, name: str) -> Any:
        return self.properties[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.properties
