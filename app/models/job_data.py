"""Job application document model."""

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobData(BaseModel):
    """One job application, owned by exactly one user via ``UserId``."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    user_id: Optional[str] = Field(default=None, alias="UserId")
    job_title: Optional[str] = Field(default=None, alias="JobTitle")
    company: Optional[str] = Field(default=None, alias="CompanyName")
    job_posting_id: Optional[str] = Field(default=None, alias="JobID")

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, v):
        return str(v) if isinstance(v, ObjectId) else v

    @field_validator("job_posting_id", mode="before")
    @classmethod
    def stringify_posting_id(cls, v):
        # Older documents stored the posting id as an integer
        return str(v) if isinstance(v, int) else v

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> Optional["JobData"]:
        if document is None:
            return None
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"id"})

    def __repr__(self):
        return f"<JobData {self.job_title} @ {self.company} ({self.id})>"
