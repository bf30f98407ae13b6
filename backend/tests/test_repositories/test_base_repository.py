"""Tests for the generic repository helpers."""

import asyncio

from pymongo import ReturnDocument

from dragons.repositories import TeamRepository, UserRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


def _user_doc(**overrides):
    doc = {"_id": "u1", "username": "alice", "email": "alice@test.com", "role": "student"}
    doc.update(overrides)
    return doc


class TestBaseRepository:
    def test_get_by_id_returns_model(self):
        users = create_mock_collection(find_one=_user_doc())
        repo = UserRepository(create_mock_db({"users": users}))

        user = asyncio.run(repo.get_by_id("u1"))

        assert user.id == "u1"
        users.find_one.assert_called_once_with({"_id": "u1"})

    def test_get_by_id_missing(self):
        repo = UserRepository(create_mock_db({"users": create_mock_collection(find_one=None)}))
        assert asyncio.run(repo.get_by_id("nope")) is None

    def test_create_inserts_with_mongo_id(self, student_user):
        users = create_mock_collection()
        repo = UserRepository(create_mock_db({"users": users}))

        asyncio.run(repo.create(student_user))

        inserted = users.insert_one.call_args[0][0]
        assert inserted["_id"] == student_user.id
        assert "id" not in inserted

    def test_update_uses_set_and_returns_after(self):
        users = create_mock_collection(find_one_and_update=_user_doc(health=50))
        repo = UserRepository(create_mock_db({"users": users}))

        user = asyncio.run(repo.update("u1", {"health": 50}))

        assert user.health == 50
        args, kwargs = users.find_one_and_update.call_args
        assert args == ({"_id": "u1"}, {"$set": {"health": 50}})
        assert kwargs["return_document"] == ReturnDocument.AFTER

    def test_update_without_data_reads(self):
        users = create_mock_collection(find_one=_user_doc())
        repo = UserRepository(create_mock_db({"users": users}))

        asyncio.run(repo.update("u1", {}))

        users.find_one_and_update.assert_not_called()
        users.find_one.assert_called_once()

    def test_update_where_none_when_nothing_matched(self):
        teams = create_mock_collection(find_one_and_update=None)
        repo = TeamRepository(create_mock_db({"teams": teams}))

        assert asyncio.run(repo.update_where({"_id": "t1", "x": 1}, {"$set": {"y": 2}})) is None

    def test_exists_projects_only_id(self):
        users = create_mock_collection(find_one={"_id": "u1"})
        repo = UserRepository(create_mock_db({"users": users}))

        assert asyncio.run(repo.exists_by_id("u1")) is True
        users.find_one.assert_called_once_with({"_id": "u1"}, {"_id": 1})

    def test_find_raw_by_ids_empty_skips_query(self):
        users = create_mock_collection()
        repo = UserRepository(create_mock_db({"users": users}))

        assert asyncio.run(repo.find_raw_by_ids([])) == []
        users.find.assert_not_called()

    def test_find_raw_by_ids_uses_in(self):
        users = create_mock_collection(find=[{"_id": "u1"}])
        repo = UserRepository(create_mock_db({"users": users}))

        result = asyncio.run(repo.find_raw_by_ids(["u1", "u2"], {"_id": 1}))

        assert result == [{"_id": "u1"}]
        users.find.assert_called_once_with({"_id": {"$in": ["u1", "u2"]}}, {"_id": 1})

    def test_delete(self):
        repo = UserRepository(create_mock_db({"users": create_mock_collection()}))
        assert asyncio.run(repo.delete("u1")) is True
