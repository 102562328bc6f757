"""User repository: lookups and mutations on the Users collection."""

from typing import Any, Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.config import Settings, settings
from app.core.exceptions import (
    DuplicateUserError,
    InvalidRequestError,
    JobAlreadyAssociatedError,
    ReferenceOwnerNotFoundError,
    UserValidationError,
)
from app.models.user import User
from app.services.lookup import LookupKey, LookupKind, to_object_id

logger = structlog.get_logger(__name__)

# Fields a partial update is allowed to touch
UPDATABLE_FIELDS = {"username": "Username", "email": "Email"}


def _validate_identity(username: Optional[str], email: Optional[str]) -> None:
    if not username or not username.strip():
        raise UserValidationError("Username is required")
    if not email or not email.strip():
        raise UserValidationError("Email is required")


class UserRepository:
    """
    Translates user operations into queries on the Users collection.

    Lookups return ``None`` when nothing matches; deletes return the number
    of removed documents, so deleting a missing user is a no-op.
    """

    def __init__(self, db: AsyncIOMotorDatabase, config: Settings = settings):
        self.collection = db[config.MONGODB_USER_COLLECTION]

    # ==================== Read ====================

    async def get_all(self) -> List[User]:
        documents = await self.collection.find({}).to_list(length=None)
        return [User.from_document(doc) for doc in documents]

    async def find(self, key: LookupKey) -> Optional[User]:
        query = key.to_filter()
        if query is None:
            return None
        return User.from_document(await self.collection.find_one(query))

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self.find(LookupKey.by_id(user_id))

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.find(LookupKey.by_username(username))

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find(LookupKey.by_email(email))

    async def get_by_username_and_email(self, username: str, email: str) -> Optional[User]:
        return await self.find(
            LookupKey(LookupKind.BY_USERNAME_AND_EMAIL, username=username, email=email)
        )

    async def get_by_id_and_username(self, user_id: str, username: str) -> Optional[User]:
        return await self.find(
            LookupKey(LookupKind.BY_ID_AND_USERNAME, id=user_id, username=username)
        )

    async def exists(self, username: Optional[str], email: Optional[str]) -> bool:
        """True if any account already uses the username OR the email."""
        clauses = []
        if username:
            clauses.append({"Username": username})
        if email:
            clauses.append({"Email": email})
        if not clauses:
            return False
        return await self.collection.find_one({"$or": clauses}, {"_id": 1}) is not None

    # ==================== Create ====================

    async def create(self, user: User) -> User:
        """Insert a new account; the store assigns the id."""
        _validate_identity(user.username, user.email)

        document = user.to_document()
        document["JobIDs"] = list(dict.fromkeys(user.job_document_ids))

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            raise DuplicateUserError(
                f"Username '{user.username}' or email '{user.email}' is already registered"
            )

        created = user.model_copy(
            update={"id": str(result.inserted_id), "job_document_ids": document["JobIDs"]}
        )
        logger.info("user_created", user_id=created.id, username=created.username)
        return created

    # ==================== Update ====================

    async def _replace(self, existing: Optional[User], replacement: User) -> bool:
        if existing is None:
            return False

        _validate_identity(replacement.username, replacement.email)

        # _id is never part of the replacement, so the stored id survives
        document = replacement.to_document()
        document["JobIDs"] = list(dict.fromkeys(replacement.job_document_ids))

        try:
            result = await self.collection.replace_one(
                {"_id": to_object_id(existing.id)}, document
            )
        except DuplicateKeyError:
            raise DuplicateUserError(
                f"Username '{replacement.username}' or email '{replacement.email}' is already registered"
            )

        logger.info("user_replaced", user_id=existing.id)
        return result.matched_count > 0

    async def replace_by_id(self, user_id: str, replacement: User) -> bool:
        return await self._replace(await self.get_by_id(user_id), replacement)

    async def replace_by_username(self, username: str, replacement: User) -> bool:
        return await self._replace(await self.get_by_username(username), replacement)

    async def update_fields(self, key: LookupKey, fields: Dict[str, Any]) -> bool:
        """Merge the given (non-null) fields into one record selected by id or username."""
        if key.kind not in (LookupKind.BY_ID, LookupKind.BY_USERNAME):
            raise InvalidRequestError("Partial updates are keyed by id or username")

        changes = {
            UPDATABLE_FIELDS[name]: value.strip() if isinstance(value, str) else value
            for name, value in fields.items()
            if name in UPDATABLE_FIELDS and value is not None
        }
        for stored_name, value in changes.items():
            if not str(value):
                raise UserValidationError(f"{stored_name} cannot be blank")

        query = key.to_filter()
        if query is None:
            return False

        if not changes:
            return await self.collection.find_one(query, {"_id": 1}) is not None

        try:
            result = await self.collection.update_one(query, {"$set": changes})
        except DuplicateKeyError:
            raise DuplicateUserError("Username or email is already registered")

        if result.matched_count:
            logger.info("user_updated", key=key.kind.value, fields=sorted(changes))
        return result.matched_count > 0

    # ==================== Delete ====================

    async def delete(self, key: LookupKey) -> int:
        query = key.to_filter()
        if query is None:
            return 0

        if key.kind == LookupKind.BY_ID:
            result = await self.collection.delete_one(query)
        else:
            result = await self.collection.delete_many(query)

        if result.deleted_count:
            logger.info("user_deleted", key=key.kind.value, count=result.deleted_count)
        return result.deleted_count

    async def delete_by_id(self, user_id: str) -> int:
        return await self.delete(LookupKey.by_id(user_id))

    async def delete_by_username(self, username: str) -> int:
        return await self.delete(LookupKey.by_username(username))

    async def delete_by_id_and_username(self, user_id: str, username: str) -> int:
        return await self.delete(
            LookupKey(LookupKind.BY_ID_AND_USERNAME, id=user_id, username=username)
        )

    # ==================== Job references ====================

    async def add_job_reference(self, user_id: str, job_document_id: str) -> None:
        """
        Append a JobData id to the user's reference list if it is not there yet.

        The conditional update alone cannot tell a missing user from an
        existing reference, so the user is looked up first.
        """
        object_id = to_object_id(user_id)
        if object_id is None or await self.collection.find_one({"_id": object_id}, {"_id": 1}) is None:
            raise ReferenceOwnerNotFoundError(f"No user account with id: {user_id}")

        result = await self.collection.update_one(
            {"_id": object_id, "JobIDs": {"$ne": job_document_id}},
            {"$addToSet": {"JobIDs": job_document_id}},
        )
        if result.matched_count == 0:
            raise JobAlreadyAssociatedError(
                f"Job application {job_document_id} is already associated with user {user_id}"
            )

        logger.info("job_reference_added", user_id=user_id, job_id=job_document_id)

    async def remove_job_reference(self, user_id: str, job_document_id: str) -> bool:
        object_id = to_object_id(user_id)
        if object_id is None:
            return False

        result = await self.collection.update_one(
            {"_id": object_id}, {"$pull": {"JobIDs": job_document_id}}
        )
        if result.modified_count:
            logger.info("job_reference_removed", user_id=user_id, job_id=job_document_id)
        return result.modified_count > 0
