"""User document model."""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """User account as stored in the Users collection.

    Field aliases are the stored element names; ``JobIDs`` is the reference
    list of JobData ids owned by this user.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    username: Optional[str] = Field(default=None, alias="Username")
    email: Optional[str] = Field(default=None, alias="Email")
    job_document_ids: List[str] = Field(default_factory=list, alias="JobIDs")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v) if isinstance(v, ObjectId) else v

    @field_validator("job_document_ids", mode="before")
    @classmethod
    def normalize_job_ids(cls, v):
        if v is None:
            return []
        return [str(item) for item in v]

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> Optional["User"]:
        if document is None:
            return None
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Stored representation without ``_id`` (the store owns it)."""
        return self.model_dump(by_alias=True, exclude={"id"})

    def __repr__(self):
        return f"<User {self.username} ({self.id})>"
