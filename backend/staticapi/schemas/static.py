from pydantic import BaseModel, Field


class StaticCreate(BaseModel):
    name: str | None = Field(default=None, strict=True)


class StaticCreateOut(BaseModel):
    guid: str
