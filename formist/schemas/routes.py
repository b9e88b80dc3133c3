from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RouteKind = Literal["form", "page"]


class RouteRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, from_attributes=True)

    id: str | None = None
    name: str
    path: str
    title: str
    description: str | None = None
    icon: str | None = None
    kind: RouteKind
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RouteUpsert(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str
    path: str
    title: str
    description: str | None = None
    icon: str | None = None
    kind: RouteKind
