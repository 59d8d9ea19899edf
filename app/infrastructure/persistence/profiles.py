"""Profile store (read-only)."""

from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pymongo.database import Database

from infrastructure.persistence.mongodb import PROFILES_COLLECTION, as_object_id


def _stringify(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


class ProfileInformation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    creator: Optional[str] = None

    @field_validator("creator", mode="before")
    @classmethod
    def coerce_creator(cls, v: Any) -> Any:
        return _stringify(v)


class Profile(BaseModel):
    """Display and ownership fields of a profile."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: Optional[str] = None
    profile_image: Optional[str] = Field(default=None, alias="profileImage")
    owner: Optional[str] = None
    profile_information: ProfileInformation = Field(
        default_factory=ProfileInformation, alias="profileInformation"
    )

    @field_validator("id", "owner", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _stringify(v)

    @field_validator("profile_information", mode="before")
    @classmethod
    def default_information(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def creator(self) -> Optional[str]:
        return self.profile_information.creator


class ProfileRepository:
    def __init__(self, database: Database):
        self._collection = database[PROFILES_COLLECTION]

    def find_by_id(
        self, profile_id: str, fields: Sequence[str] = ()
    ) -> Optional[Profile]:
        projection = {field: 1 for field in fields} if fields else None
        document = self._collection.find_one(
            {"_id": as_object_id(profile_id)}, projection
        )
        return Profile.model_validate(document) if document else None
