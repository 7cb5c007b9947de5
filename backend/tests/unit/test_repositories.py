"""Tests for the repository layer against mocked and in-memory Motor collections."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from dashboard.models import Comment, Project, User

from tests.fakes import FakeDatabase


def make_user(email="jane@example.com", role="User") -> User:
    return User(
        email=email,
        first_name="Jane",
        last_name="Doe",
        password_hash="hash",
        role=role,
    )


@pytest.fixture
def collection():
    mock = MagicMock()
    mock.find_one = AsyncMock(return_value=None)
    mock.insert_one = AsyncMock()
    mock.replace_one = AsyncMock()
    mock.delete_one = AsyncMock()
    mock.count_documents = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def users(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    repository = UserRepository(db)
    db.__getitem__.assert_called_with("users")
    return repository


class TestBaseRepositoryWithMockedCollection:
    async def test_create_stamps_dates_and_sets_id(self, users, collection):
        oid = ObjectId()
        collection.insert_one.return_value = MagicMock(inserted_id=oid)
        user = make_user()

        created = await users.create(user)

        assert created.id == str(oid)
        assert created.created_date == created.modified_date
        document = collection.insert_one.await_args.args[0]
        assert document["email"] == "jane@example.com"
        assert document["passwordHash"] == "hash"
        assert "_id" not in document

    async def test_find_by_id_queries_object_id(self, users, collection):
        oid = ObjectId()
        collection.find_one.return_value = {"_id": oid, **make_user().to_mongo()}

        found = await users.find_by_id(str(oid))

        collection.find_one.assert_awaited_once_with({"_id": oid})
        assert found.id == str(oid)
        assert found.first_name == "Jane"

    async def test_invalid_id_skips_the_query(self, users, collection):
        assert await users.find_by_id("not-an-object-id") is None
        assert await users.replace("not-an-object-id", make_user()) is False
        assert await users.delete("not-an-object-id") is False

        collection.find_one.assert_not_awaited()
        collection.replace_one.assert_not_awaited()
        collection.delete_one.assert_not_awaited()

    async def test_replace_reports_match(self, users, collection):
        oid = ObjectId()
        collection.replace_one.return_value = MagicMock(matched_count=1)
        user = make_user()

        assert await users.replace(str(oid), user) is True

        filter, document = collection.replace_one.await_args.args
        assert filter == {"_id": oid}
        assert user.id == str(oid)
        assert "_id" not in document

    async def test_delete_reports_missing_document(self, users, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=0)

        assert await users.delete(str(ObjectId())) is False

    async def test_find_many_converts_documents(self, users, collection):
        docs = [{"_id": ObjectId(), **make_user(f"u{i}@example.com").to_mongo()} for i in range(3)]
        collection.find.return_value.to_list = AsyncMock(return_value=docs)

        found = await users.find_many({"role": "User"})

        collection.find.assert_called_once_with({"role": "User"})
        assert [u.email for u in found] == ["u0@example.com", "u1@example.com", "u2@example.com"]

    async def test_count_defaults_to_everything(self, users, collection):
        collection.count_documents.return_value = 7

        assert await users.count() == 7
        collection.count_documents.assert_awaited_once_with({})


class TestSpecializedQueries:
    @pytest.fixture
    def db(self):
        return FakeDatabase()

    async def test_users_by_email_and_role(self, db):
        users = UserRepository(db)
        await users.create(make_user("admin@example.com", role="Admin"))
        await users.create(make_user("jane@example.com"))

        assert (await users.find_by_email("jane@example.com")).email == "jane@example.com"
        assert await users.find_by_email("ghost@example.com") is None
        assert [u.email for u in await users.find_by_role("Admin")] == ["admin@example.com"]

    async def test_projects_by_owner_use_object_id(self, db):
        projects = ProjectRepository(db)
        owner = str(ObjectId())
        await projects.create(
            Project(title="Mine", description="d", user_id=owner, user_name="Jane Doe")
        )
        await projects.create(
            Project(title="Other", description="d", user_id=str(ObjectId()), user_name="Bob")
        )

        owned = await projects.find_by_user_id(owner)

        assert [p.title for p in owned] == ["Mine"]
        assert owned[0].user_id == owner
        assert isinstance(db["projects"].documents[0]["userId"], ObjectId)
        assert await projects.find_by_user_id("bogus") == []

    async def test_comments_by_project_and_cascade(self, db):
        comments = CommentRepository(db)
        project_id, other_id = str(ObjectId()), str(ObjectId())
        for pid in (project_id, project_id, other_id):
            await comments.create(
                Comment(project_id=pid, user_id=str(ObjectId()), user_name="Jane", content="hi")
            )

        assert len(await comments.find_by_project_id(project_id)) == 2

        assert await comments.delete_by_project_id(project_id) == 2
        assert await comments.find_by_project_id(project_id) == []
        assert len(await comments.find_all()) == 1
        assert await comments.delete_by_project_id("bogus") == 0
