"""Document models."""

from app.models.job_data import JobData
from app.models.user import User

__all__ = [
    "User",
    "JobData",
]
