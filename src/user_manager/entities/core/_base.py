from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class; the identifier is assigned by the data store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int = PydanticField(description="Unique identifier for the entity")


class EntityTable(SQLModel, table=False):
    """Base table class with an auto-incrementing integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier for the entity",
    )
