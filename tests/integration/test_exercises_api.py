"""
HTTP tests for the shared exercise library at /api/v1/exercises.
"""
from dataclasses import replace

import pytest

from api.deps import get_current_principal
from application.authorization import READ_EXERCISES
from domain.models import ExerciseType

EXERCISES = "/api/v1/exercises"

SQUAT = {
    "name": "Back Squat",
    "description": "Barbell on the upper back",
    "type": "STRENGTH",
    "target_muscle_group": "QUADRICEPS",
    "difficulty_level": "INTERMEDIATE",
    "image_url": "https://example.com/squat.png",
}


@pytest.mark.integration
class TestExerciseCrud:
    def test_create_and_get(self, client, seeded):
        created = client.post(EXERCISES, json=SQUAT)

        assert created.status_code == 201
        body = created.json()
        assert body["name"] == "Back Squat"
        assert body["version"] == 1
        assert client.get(f"{EXERCISES}/{body['id']}").json()["type"] == "STRENGTH"

    def test_duplicate_name_conflicts_ignoring_case(self, client, seeded):
        response = client.post(EXERCISES, json={**SQUAT, "name": "bench press"})

        assert response.status_code == 409

    def test_invalid_name_characters(self, client, seeded):
        response = client.post(EXERCISES, json={**SQUAT, "name": "Squat; DROP TABLE"})

        assert response.status_code == 400
        assert response.json()["errors"]["name"] == (
            "Exercise name can only contain letters, numbers, spaces, hyphens, and parentheses"
        )

    def test_invalid_image_url(self, client, seeded):
        response = client.post(EXERCISES, json={**SQUAT, "image_url": "not a url"})

        assert response.status_code == 400
        assert response.json()["errors"]["image_url"] == "Image URL must be a valid URL"

    def test_unknown_enum_value(self, client, seeded):
        response = client.post(EXERCISES, json={**SQUAT, "type": "BALANCE"})

        assert response.status_code == 400
        assert "type" in response.json()["errors"]

    def test_update_with_stale_version(self, client, seeded):
        exercise_id = seeded["exercises"][ExerciseType.CARDIO]
        url = f"{EXERCISES}/{exercise_id}"

        updated = client.put(url, json={"difficulty_level": "ADVANCED", "version": 1})
        assert updated.status_code == 200
        assert updated.json()["version"] == 2

        stale = client.put(url, json={"description": "Outdoors", "version": 1})
        assert stale.status_code == 409
        assert stale.json()["details"]["entity_type"] == "Exercise"

    @pytest.mark.parametrize("field", ["name", "type", "target_muscle_group", "difficulty_level"])
    def test_null_for_required_field_rejected_on_update(self, client, seeded, field):
        exercise_id = client.post(EXERCISES, json=SQUAT).json()["id"]

        response = client.put(f"{EXERCISES}/{exercise_id}", json={field: None})

        assert response.status_code == 400
        assert field in response.json()["errors"]
        assert client.get(f"{EXERCISES}/{exercise_id}").json()[field] == SQUAT[field]

    def test_delete_unused_exercise(self, client, seeded):
        exercise_id = client.post(EXERCISES, json=SQUAT).json()["id"]

        assert client.delete(f"{EXERCISES}/{exercise_id}").status_code == 204
        assert client.get(f"{EXERCISES}/{exercise_id}").status_code == 404

    def test_missing_exercise(self, client, seeded):
        response = client.get(f"{EXERCISES}/9999")

        assert response.status_code == 404
        assert response.json() == {"message": "Exercise not found with id: 9999", "status": 404}


@pytest.mark.integration
class TestReferencedExercise:
    @pytest.fixture
    def bench_in_workout(self, client, seeded):
        exercise_id = seeded["exercises"][ExerciseType.STRENGTH]
        response = client.post(
            "/api/v1/workouts", json={"name": "Chest", "exercises": [{"exercise_id": exercise_id}]}
        )
        assert response.status_code == 201
        return exercise_id

    def test_delete_conflicts(self, client, bench_in_workout):
        response = client.delete(f"{EXERCISES}/{bench_in_workout}")

        assert response.status_code == 409

    def test_type_change_conflicts(self, client, bench_in_workout):
        response = client.put(f"{EXERCISES}/{bench_in_workout}", json={"type": "CARDIO"})

        assert response.status_code == 409

    def test_rename_allowed(self, client, bench_in_workout):
        response = client.put(f"{EXERCISES}/{bench_in_workout}", json={"name": "Flat Bench Press"})

        assert response.status_code == 200


@pytest.mark.integration
class TestExerciseQueries:
    def test_list_is_paged_by_name(self, client, seeded):
        body = client.get(EXERCISES, params={"page": 0, "size": 2}).json()

        assert [item["name"] for item in body["items"]] == ["Bench Press", "Hamstring Stretch"]
        assert body["total"] == 3
        assert body["has_next"] is True

    def test_page_size_capped(self, client, seeded):
        response = client.get(EXERCISES, params={"size": 101})

        assert response.status_code == 400
        assert "size" in response.json()["errors"]

    def test_search_by_name(self, client, seeded):
        response = client.get(f"{EXERCISES}/search", params={"name": "press"})

        assert [item["name"] for item in response.json()] == ["Bench Press"]

    def test_search_treats_wildcards_literally(self, client, seeded):
        response = client.get(f"{EXERCISES}/search", params={"name": "%"})

        assert response.json() == []

    def test_filter_combines_criteria(self, client, seeded):
        client.post(EXERCISES, json=SQUAT)

        strength = client.get(f"{EXERCISES}/filter", params={"type": "STRENGTH"}).json()
        beginner_strength = client.get(
            f"{EXERCISES}/filter", params={"type": "STRENGTH", "difficulty_level": "BEGINNER"}
        ).json()

        assert [item["name"] for item in strength] == ["Back Squat", "Bench Press"]
        assert [item["name"] for item in beginner_strength] == ["Bench Press"]

    def test_filter_without_criteria_returns_all(self, client, seeded):
        assert len(client.get(f"{EXERCISES}/filter").json()) == 3


@pytest.mark.integration
class TestExerciseScopes:
    def test_missing_write_scope_forbidden(self, app, client, principals):
        reader = replace(principals["owner"], permissions=frozenset({READ_EXERCISES}))
        app.dependency_overrides[get_current_principal] = lambda: reader

        assert client.get(EXERCISES).status_code == 200
        assert client.post(EXERCISES, json=SQUAT).status_code == 403
