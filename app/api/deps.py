"""
API Dependencies
Repositories are built per request on top of the shared database handle
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.db.mongo import get_database
from app.services.job_data_repository import JobDataRepository
from app.services.user_repository import UserRepository


def get_user_repository(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserRepository:
    return UserRepository(db)


def get_job_data_repository(
    db: AsyncIOMotorDatabase = Depends(get_database),
    users: UserRepository = Depends(get_user_repository),
) -> JobDataRepository:
    return JobDataRepository(db, users)
