"""Pydantic schemas for job application APIs."""

from typing import Optional

from pydantic import Field

from app.models.job_data import JobData
from app.schemas.user import CamelModel
from app.services.lookup import OBJECT_ID_PATTERN


class JobDataCreate(CamelModel):
    user_id: str = Field(..., pattern=OBJECT_ID_PATTERN, description="Owning user id")
    job_title: Optional[str] = Field(None, max_length=200)
    company: Optional[str] = Field(None, max_length=200)
    job_posting_id: Optional[str] = Field(None, max_length=100, description="Employer's posting reference")

    def to_model(self) -> JobData:
        return JobData(
            job_title=self.job_title,
            company=self.company,
            job_posting_id=self.job_posting_id,
        )


class JobDataResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    job_posting_id: Optional[str] = None

    @classmethod
    def from_model(cls, job_data: JobData) -> "JobDataResponse":
        return cls(
            id=job_data.id,
            user_id=job_data.user_id,
            job_title=job_data.job_title,
            company=job_data.company,
            job_posting_id=job_data.job_posting_id,
        )
