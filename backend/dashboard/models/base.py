"""
Base document model for MongoDB collections.

This module provides:
- MongoModel: pydantic model that round-trips to a MongoDB document
- utc_now: timezone-aware timestamp factory used for created/modified dates

Stored field names are camelCase (``firstName``, ``createdDate``) and the
primary key is the ``_id`` ObjectId, exposed to Python and JSON as the
string ``id``. Fields named in ``reference_fields`` hold ids of other
documents and are stored as ObjectIds as well.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string to an ObjectId, returning None when it is not one."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


class CamelModel(BaseModel):
    """Base model with camelCase aliases, populated by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        validate_assignment=True,
    )


class MongoModel(CamelModel):
    """Base class for all stored documents."""

    reference_fields: ClassVar[Tuple[str, ...]] = ()

    id: Optional[str] = None
    created_date: datetime = Field(default_factory=utc_now)
    modified_date: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_mongo(cls, document: Optional[Dict[str, Any]]):
        """Build a model from a raw MongoDB document."""
        if document is None:
            return None
        data = dict(document)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        for name in cls.reference_fields:
            if isinstance(data.get(name), ObjectId):
                data[name] = str(data[name])
        return cls.model_validate(data)

    def to_mongo(self) -> Dict[str, Any]:
        """Dump the model to a MongoDB document (without ``_id``)."""
        data = self.model_dump(by_alias=True, exclude={"id"})
        for name in self.reference_fields:
            oid = parse_object_id(data.get(name))
            if oid is not None:
                data[name] = oid
        return data
