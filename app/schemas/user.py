"""
Pydantic schemas for User APIs
Request bodies accept camelCase or snake_case, responses use camelCase
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from app.models.user import User


def _checked_email(value: Optional[str]) -> Optional[str]:
    """Reject malformed addresses but keep the submitted spelling, so stored
    values match exact-equality lookups by email."""
    if value is None:
        return value
    value = value.strip()
    validate_email(value)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(CamelModel):
    """New account. Any client-supplied id or reference list is ignored."""
    username: str = Field(..., min_length=1, max_length=100, description="Unique login name")
    email: str = Field(..., description="Unique email address")

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _checked_email(value)

    def to_model(self) -> User:
        return User(username=self.username.strip(), email=self.email)


class UserReplace(UserCreate):
    """Full replacement; omit jobDocumentIds to keep the stored list."""
    job_document_ids: Optional[List[str]] = Field(
        None,
        description="JobData ids owned by the user",
    )

    def to_replacement(self, existing: User) -> User:
        job_ids = self.job_document_ids
        if job_ids is None:
            job_ids = existing.job_document_ids
        return User(
            username=self.username.strip(),
            email=self.email,
            job_document_ids=job_ids,
        )


class UserUpdate(CamelModel):
    """Partial update: only supplied fields are changed."""
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _checked_email(value)


class UserResponse(CamelModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    job_document_ids: List[str] = Field(default_factory=list)

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            job_document_ids=user.job_document_ids,
        )
