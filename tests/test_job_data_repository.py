"""
Test suite for the job application repository.

Tests cover:
- Owner checks on creation
- Reference list updates on create/delete
- Lookups through a user's reference list
"""

import pytest
from bson import ObjectId

from app.config import settings
from app.core.exceptions import (
    NotFoundOrAlreadyAssociatedError,
    OwnerNotFoundError,
    UserNotFoundError,
)
from app.models.job_data import JobData
from app.models.user import User


@pytest.fixture
async def alice(user_repository):
    return await user_repository.create(User(username="alice", email="alice@continental.org"))


class TestCreate:
    """Tests for job application creation"""

    async def test_create_requires_existing_owner(self, job_data_repository, mongo_db):
        with pytest.raises(OwnerNotFoundError):
            await job_data_repository.create(str(ObjectId()), JobData(job_title="Engineer"))

        collection = mongo_db[settings.MONGODB_JOBDATA_COLLECTION]
        assert await collection.count_documents({}) == 0

    async def test_create_sets_owner_and_reference(self, job_data_repository, user_repository, alice):
        created = await job_data_repository.create(
            alice.id, JobData(job_title="Engineer", company="Acme", user_id=str(ObjectId()))
        )

        assert ObjectId.is_valid(created.id)
        assert created.user_id == alice.id
        assert (await job_data_repository.get_by_id(created.id)).user_id == alice.id

        owner = await user_repository.get_by_id(alice.id)
        assert owner.job_document_ids == [created.id]


class TestLookups:
    """Tests for job application lookups"""

    async def test_get_by_owner_username_returns_referenced_jobs(self, job_data_repository, alice):
        a1 = await job_data_repository.create(alice.id, JobData(job_title="Engineer"))
        a2 = await job_data_repository.create(alice.id, JobData(job_title="Analyst"))

        jobs = await job_data_repository.get_by_owner_username("alice")

        assert len(jobs) == 2
        assert {job.id for job in jobs} == {a1.id, a2.id}

    async def test_get_by_owner_username_only_returns_own_jobs(
        self, job_data_repository, user_repository, alice
    ):
        bob = await user_repository.create(User(username="bob", email="bob@continental.org"))
        await job_data_repository.create(alice.id, JobData(job_title="Engineer"))
        bobs_job = await job_data_repository.create(bob.id, JobData(job_title="Designer"))

        jobs = await job_data_repository.get_by_owner_username("bob")

        assert [job.id for job in jobs] == [bobs_job.id]

    async def test_get_by_owner_username_unknown_user(self, job_data_repository):
        with pytest.raises(UserNotFoundError) as exc_info:
            await job_data_repository.get_by_owner_username("nobody")

        # a plain lookup miss is not a reference-update failure
        assert not isinstance(exc_info.value, NotFoundOrAlreadyAssociatedError)

    async def test_get_by_owner_username_without_jobs(self, job_data_repository, alice):
        assert await job_data_repository.get_by_owner_username("alice") == []

    async def test_get_by_ids_empty_and_invalid(self, job_data_repository, alice):
        created = await job_data_repository.create(alice.id, JobData(job_title="Engineer"))

        assert await job_data_repository.get_by_ids([]) == []
        assert await job_data_repository.get_by_ids(["bogus"]) == []
        assert [j.id for j in await job_data_repository.get_by_ids(["bogus", created.id])] == [created.id]

    async def test_get_all(self, job_data_repository, alice):
        await job_data_repository.create(alice.id, JobData(job_title="Engineer"))
        await job_data_repository.create(alice.id, JobData(job_title="Analyst"))

        titles = sorted(job.job_title for job in await job_data_repository.get_all())
        assert titles == ["Analyst", "Engineer"]


class TestDelete:
    """Tests for job application deletes"""

    async def test_delete_unlinks_from_owner(self, job_data_repository, user_repository, alice):
        created = await job_data_repository.create(alice.id, JobData(job_title="Engineer"))

        assert await job_data_repository.delete_by_id(created.id) is True

        assert await job_data_repository.get_by_id(created.id) is None
        assert (await user_repository.get_by_id(alice.id)).job_document_ids == []

    async def test_delete_missing(self, job_data_repository):
        assert await job_data_repository.delete_by_id(str(ObjectId())) is False
