"""Unit tests for the user-scoped repositories."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import AutoReconnect

from meal_tracker_api.core.exceptions import DatabaseError
from meal_tracker_api.db.mongo import COLLECTION_INDEXES, MongoDB
from meal_tracker_api.db.repositories import (
    MealRepository,
    RecipeRepository,
    UserSettingsRepository,
    WeeklyTargetRepository,
)

USER_ID = "user-123"
MEAL_ID = ObjectId()


def meal_doc(**fields) -> dict:
    return {
        "_id": MEAL_ID,
        "userId": USER_ID,
        "name": "Lunch",
        "date": "2025-01-08T12:00:00.000Z",
        "description": "dal rice",
        "foodItems": ["dal", "rice"],
        "calories": 450,
        **fields,
    }


@pytest.fixture
def collection() -> MagicMock:
    mock = MagicMock()
    mock.name = "test"
    mock.find_one = AsyncMock()
    mock.insert_one = AsyncMock()
    mock.find_one_and_update = AsyncMock()
    mock.delete_one = AsyncMock()
    return mock


class TestBaseRepository:
    """Tests for the shared CRUD behaviour."""

    @pytest.mark.asyncio
    async def test_find_by_id_is_user_scoped(self, collection):
        collection.find_one.return_value = meal_doc()
        repo = MealRepository(collection)

        meal = await repo.find_by_id(USER_ID, str(MEAL_ID))

        assert meal.id == str(MEAL_ID)
        assert meal.food_items == ["dal", "rice"]
        assert meal.protein is None
        collection.find_one.assert_called_once_with({"_id": MEAL_ID, "userId": USER_ID})

    @pytest.mark.asyncio
    async def test_malformed_id_finds_nothing(self, collection):
        repo = MealRepository(collection)

        assert await repo.find_by_id(USER_ID, "not-an-object-id") is None
        assert await repo.delete_one(USER_ID, "not-an-object-id") is False
        collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_adds_owner(self, collection):
        collection.insert_one.return_value = MagicMock(inserted_id=MEAL_ID)
        repo = MealRepository(collection)

        meal = await repo.create(USER_ID, {k: v for k, v in meal_doc().items() if k not in ("_id", "userId")})

        stored = collection.insert_one.call_args.args[0]
        assert stored["userId"] == USER_ID
        assert "createdAt" not in stored
        assert meal.user_id == USER_ID

    @pytest.mark.asyncio
    async def test_insert_failure_raises_database_error(self, collection):
        collection.insert_one.side_effect = AutoReconnect("primary stepped down")
        repo = MealRepository(collection)

        with pytest.raises(DatabaseError):
            await repo.create(USER_ID, {"date": "2025-01-08T12:00:00.000Z", "calories": 1})

    @pytest.mark.asyncio
    async def test_read_and_delete_failures_raise_database_error(self, collection):
        collection.find_one.side_effect = AutoReconnect("primary stepped down")
        collection.delete_one.side_effect = AutoReconnect("primary stepped down")
        repo = MealRepository(collection)

        with pytest.raises(DatabaseError):
            await repo.find_by_id(USER_ID, str(MEAL_ID))
        with pytest.raises(DatabaseError):
            await repo.delete_one(USER_ID, str(MEAL_ID))

    @pytest.mark.asyncio
    async def test_delete(self, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        repo = MealRepository(collection)

        assert await repo.delete_one(USER_ID, str(MEAL_ID)) is True
        collection.delete_one.assert_called_once_with({"_id": MEAL_ID, "userId": USER_ID})


class TestMealRepository:
    """Tests for meal range queries."""

    @pytest.mark.asyncio
    async def test_range_query_newest_first(self, collection):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[meal_doc()])
        collection.find.return_value = cursor
        repo = MealRepository(collection)

        meals = await repo.get_in_range(USER_ID, "2025-01-05T00:00:00.000Z", "2025-01-11T23:59:59.999Z")

        assert len(meals) == 1
        collection.find.assert_called_once_with(
            {
                "date": {"$gte": "2025-01-05T00:00:00.000Z", "$lte": "2025-01-11T23:59:59.999Z"},
                "userId": USER_ID,
            }
        )
        cursor.sort.assert_called_once_with([("date", DESCENDING)])

    @pytest.mark.asyncio
    async def test_range_query_returns_every_match(self, collection):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[meal_doc() for _ in range(600)])
        collection.find.return_value = cursor
        repo = MealRepository(collection)

        meals = await repo.get_in_range(USER_ID, "2024-01-01T00:00:00.000Z")

        assert len(meals) == 600
        cursor.limit.assert_not_called()
        cursor.to_list.assert_awaited_once_with(length=None)

    @pytest.mark.asyncio
    async def test_query_failure_raises_database_error(self, collection):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.to_list = AsyncMock(side_effect=AutoReconnect("primary stepped down"))
        collection.find.return_value = cursor
        repo = MealRepository(collection)

        with pytest.raises(DatabaseError):
            await repo.get_in_range(USER_ID, "2025-01-05T00:00:00.000Z")


class TestTimestampedRepositories:
    """Tests for repositories maintaining createdAt/updatedAt."""

    @pytest.mark.asyncio
    async def test_recipe_insert_sets_timestamps(self, collection):
        collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        repo = RecipeRepository(collection)

        recipe = await repo.insert_one(
            USER_ID, {"name": "Poha", "ingredients": [], "servings": 1, "calories": 250}
        )

        stored = collection.insert_one.call_args.args[0]
        assert stored["createdAt"] == stored["updatedAt"]
        assert recipe.created_at.endswith("Z")

    @pytest.mark.asyncio
    async def test_recipe_update_refreshes_updated_at(self, collection):
        collection.find_one_and_update.return_value = None
        repo = RecipeRepository(collection)

        await repo.update_one(USER_ID, str(ObjectId()), {"calories": 300})

        update = collection.find_one_and_update.call_args.args[1]["$set"]
        assert update["calories"] == 300
        assert "updatedAt" in update


class TestWeeklyTargetAndSettings:
    """Tests for weekly targets and user settings."""

    @pytest.mark.asyncio
    async def test_target_looked_up_by_start_date(self, collection):
        collection.find_one.return_value = {
            "_id": ObjectId(),
            "userId": USER_ID,
            "startDate": "2025-01-05T00:00:00.000Z",
            "targetCalories": 14000,
        }
        repo = WeeklyTargetRepository(collection)

        target = await repo.get_for_week(USER_ID, "2025-01-05T00:00:00.000Z")

        assert target.target_calories == 14000
        collection.find_one.assert_called_once_with(
            {"startDate": "2025-01-05T00:00:00.000Z", "userId": USER_ID}
        )

    @pytest.mark.asyncio
    async def test_default_target_never_overwrites(self, collection):
        collection.find_one_and_update.return_value = {
            "_id": ObjectId(),
            "userId": USER_ID,
            "startDate": "2025-01-05T00:00:00.000Z",
            "targetCalories": 10500,
        }
        repo = WeeklyTargetRepository(collection)

        target = await repo.get_or_create(USER_ID, "2025-01-05T00:00:00.000Z", 14000)

        assert target.target_calories == 10500
        query, update = collection.find_one_and_update.call_args.args
        assert query == {"userId": USER_ID, "startDate": "2025-01-05T00:00:00.000Z"}
        assert update == {"$setOnInsert": {"targetCalories": 14000}}
        assert collection.find_one_and_update.call_args.kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_settings_upsert(self, collection):
        collection.find_one_and_update.return_value = {
            "_id": ObjectId(),
            "userId": USER_ID,
            "proteinGoal": 120,
            "dietaryPreference": "non-vegetarian",
        }
        repo = UserSettingsRepository(collection)

        result = await repo.upsert(USER_ID, {"proteinGoal": 120})

        assert result.protein_goal == 120
        kwargs = collection.find_one_and_update.call_args.kwargs
        assert kwargs["upsert"] is True


class TestIndexes:
    """Tests for startup index creation."""

    @pytest.mark.asyncio
    async def test_ensure_indexes_covers_every_collection(self):
        collections = {name: MagicMock() for name in COLLECTION_INDEXES}
        for mock in collections.values():
            mock.create_indexes = AsyncMock(return_value=["idx"])
        db = MagicMock()
        db.__getitem__.side_effect = collections.__getitem__

        with patch.object(MongoDB, "get_database", return_value=db):
            await MongoDB.ensure_indexes()

        for name, mock in collections.items():
            mock.create_indexes.assert_awaited_once_with(COLLECTION_INDEXES[name])

    def test_one_target_per_user_and_week(self):
        (index,) = COLLECTION_INDEXES["weekly_targets"]

        assert index.document["unique"] is True
        assert list(index.document["key"].items()) == [("userId", 1), ("startDate", 1)]
