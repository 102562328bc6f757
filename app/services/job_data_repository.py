"""JobData repository: job applications and their link to an owning user."""

from typing import List, Optional, Sequence

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.config import Settings, settings
from app.core.exceptions import OwnerNotFoundError, UserNotFoundError
from app.models.job_data import JobData
from app.services.lookup import to_object_id
from app.services.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class JobDataRepository:
    """
    CRUD for the JobData collection.

    Ownership is kept in two places: each document stores its owner's id
    (``UserId``), and the owner keeps the document id in ``JobIDs``. Reads
    for a user go through the ``JobIDs`` reference list.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        users: UserRepository,
        config: Settings = settings,
    ):
        self.collection = db[config.MONGODB_JOBDATA_COLLECTION]
        self.users = users

    async def create(self, owner_user_id: str, job_data: JobData) -> JobData:
        """
        Insert a job application for an existing user.

        Raises:
            OwnerNotFoundError: no user has ``owner_user_id``; nothing is inserted
        """
        owner = await self.users.get_by_id(owner_user_id)
        if owner is None:
            raise OwnerNotFoundError(
                f"No matching user account in database with user id: {owner_user_id}"
            )

        document = job_data.to_document()
        document["UserId"] = owner.id

        result = await self.collection.insert_one(document)
        created = job_data.model_copy(update={"id": str(result.inserted_id), "user_id": owner.id})

        await self.users.add_job_reference(owner.id, created.id)

        logger.info("job_data_created", job_id=created.id, user_id=owner.id)
        return created

    async def get_all(self) -> List[JobData]:
        documents = await self.collection.find({}).to_list(length=None)
        return [JobData.from_document(doc) for doc in documents]

    async def get_by_id(self, job_id: str) -> Optional[JobData]:
        object_id = to_object_id(job_id)
        if object_id is None:
            return None
        return JobData.from_document(await self.collection.find_one({"_id": object_id}))

    async def get_by_ids(self, job_ids: Sequence[str]) -> List[JobData]:
        """Fetch the documents named in a reference list; unknown ids are skipped."""
        object_ids = [oid for oid in (to_object_id(job_id) for job_id in job_ids) if oid is not None]
        if not object_ids:
            return []

        documents = await self.collection.find({"_id": {"$in": object_ids}}).to_list(length=None)
        return [JobData.from_document(doc) for doc in documents]

    async def get_by_owner_username(self, username: str) -> List[JobData]:
        user = await self.users.get_by_username(username)
        if user is None:
            raise UserNotFoundError(f"Username: {username} was not found in the system records.")
        return await self.get_by_ids(user.job_document_ids)

    async def delete_by_id(self, job_id: str) -> bool:
        """Delete one job application and unlink it from its owner."""
        job_data = await self.get_by_id(job_id)
        if job_data is None:
            return False

        await self.collection.delete_one({"_id": to_object_id(job_data.id)})
        if job_data.user_id:
            await self.users.remove_job_reference(job_data.user_id, job_data.id)

        logger.info("job_data_deleted", job_id=job_data.id, user_id=job_data.user_id)
        return True
