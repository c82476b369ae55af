"""
HTTP tests for strength, cardio and flexibility sets under
/api/v1/workout-exercises.
"""
import pytest

from domain.models import ExerciseType

SETS = "/api/v1/workout-exercises"


@pytest.fixture
def workout(client, seeded):
    """Owner's workout with one exercise of each type, keyed by type."""
    exercises = seeded["exercises"]
    response = client.post(
        "/api/v1/workouts",
        json={
            "name": "Mixed session",
            "exercises": [
                {"exercise_id": exercises[ExerciseType.STRENGTH]},
                {"exercise_id": exercises[ExerciseType.CARDIO]},
                {"exercise_id": exercises[ExerciseType.FLEXIBILITY]},
            ],
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return {
        "id": body["id"],
        **{ExerciseType(item["exercise_type"]): item["id"] for item in body["exercises"]},
    }


@pytest.mark.integration
class TestStrengthSets:
    def test_create_list_and_read(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"

        created = client.post(url, json={"set_number": 1, "reps": 8, "weight": "62.5"})

        assert created.status_code == 201
        body = created.json()
        assert body["kind"] == "strength"
        assert body["reps"] == 8
        assert body["weight"] == 62.5
        assert body["completed"] is False
        assert [item["id"] for item in client.get(url).json()] == [body["id"]]
        assert client.get(f"{url}/{body['id']}").json()["reps"] == 8

    def test_sets_appear_in_workout_detail(self, client, workout):
        client.post(
            f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets",
            json={"set_number": 1, "reps": 5},
        )

        detail = client.get(f"/api/v1/workouts/{workout['id']}").json()

        strength = next(item for item in detail["exercises"] if item["exercise_type"] == "STRENGTH")
        assert [s["reps"] for s in strength["sets"]] == [5]
        assert [s["kind"] for s in strength["sets"]] == ["strength"]

    @pytest.mark.parametrize("reps", [0, 1001])
    def test_reps_out_of_range(self, client, workout, reps):
        response = client.post(
            f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets",
            json={"set_number": 1, "reps": reps},
        )

        assert response.status_code == 400
        assert "reps" in response.json()["errors"]

    def test_update_with_version(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8}).json()["id"]

        updated = client.put(f"{url}/{set_id}", json={"reps": 10, "completed": True, "version": 1})

        assert updated.status_code == 200
        assert updated.json()["reps"] == 10
        assert updated.json()["completed"] is True
        assert updated.json()["version"] == 2

        stale = client.put(f"{url}/{set_id}", json={"reps": 12, "version": 1})
        assert stale.status_code == 409

    def test_delete_hides_set(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8}).json()["id"]

        assert client.delete(f"{url}/{set_id}").status_code == 204
        assert client.get(url).json() == []

    def test_set_under_wrong_workout_exercise_not_found(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8}).json()["id"]

        response = client.get(
            f"{SETS}/{workout[ExerciseType.CARDIO]}/strength-sets/{set_id}"
        )

        assert response.status_code == 404


@pytest.mark.integration
class TestOtherSetKinds:
    def test_cardio_set(self, client, workout):
        response = client.post(
            f"{SETS}/{workout[ExerciseType.CARDIO]}/cardio-sets",
            json={
                "set_number": 1,
                "duration_in_seconds": 1200,
                "distance": "5.25",
                "distance_unit": "km",
            },
        )

        assert response.status_code == 201
        assert response.json()["distance"] == 5.25
        assert response.json()["kind"] == "cardio"

    def test_flexibility_set(self, client, workout):
        response = client.post(
            f"{SETS}/{workout[ExerciseType.FLEXIBILITY]}/flexibility-sets",
            json={
                "set_number": 1,
                "duration_in_seconds": 45,
                "stretch_type": "static",
                "intensity": 6,
            },
        )

        assert response.status_code == 201
        assert response.json()["intensity"] == 6

    def test_flexibility_intensity_bounds(self, client, workout):
        response = client.post(
            f"{SETS}/{workout[ExerciseType.FLEXIBILITY]}/flexibility-sets",
            json={
                "set_number": 1,
                "duration_in_seconds": 45,
                "stretch_type": "static",
                "intensity": 11,
            },
        )

        assert response.status_code == 400
        assert "intensity" in response.json()["errors"]

    @pytest.mark.parametrize(
        "kind, exercise_type, body, field",
        [
            ("strength", ExerciseType.STRENGTH, {"set_number": 1, "reps": 8}, "reps"),
            ("strength", ExerciseType.STRENGTH, {"set_number": 1, "reps": 8}, "set_number"),
            ("strength", ExerciseType.STRENGTH, {"set_number": 1, "reps": 8}, "completed"),
            (
                "cardio",
                ExerciseType.CARDIO,
                {"set_number": 1, "duration_in_seconds": 600},
                "duration_in_seconds",
            ),
            (
                "flexibility",
                ExerciseType.FLEXIBILITY,
                {"set_number": 1, "duration_in_seconds": 45, "stretch_type": "static", "intensity": 6},
                "duration_in_seconds",
            ),
            (
                "flexibility",
                ExerciseType.FLEXIBILITY,
                {"set_number": 1, "duration_in_seconds": 45, "stretch_type": "static", "intensity": 6},
                "stretch_type",
            ),
            (
                "flexibility",
                ExerciseType.FLEXIBILITY,
                {"set_number": 1, "duration_in_seconds": 45, "stretch_type": "static", "intensity": 6},
                "intensity",
            ),
        ],
    )
    def test_null_for_required_field_rejected_on_update(
        self, client, workout, kind, exercise_type, body, field
    ):
        url = f"{SETS}/{workout[exercise_type]}/{kind}-sets"
        set_id = client.post(url, json=body).json()["id"]

        response = client.put(f"{url}/{set_id}", json={field: None, "version": 1})

        assert response.status_code == 400
        assert field in response.json()["errors"]
        assert client.get(f"{url}/{set_id}").json()["version"] == 1

    def test_nullable_field_can_be_cleared(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8, "weight": "40"}).json()["id"]

        response = client.put(f"{url}/{set_id}", json={"weight": None})

        assert response.status_code == 200
        assert response.json()["weight"] is None


@pytest.mark.integration
class TestSetTypeMatching:
    def test_cardio_set_on_strength_exercise_rejected(self, client, workout):
        response = client.post(
            f"{SETS}/{workout[ExerciseType.STRENGTH]}/cardio-sets",
            json={"set_number": 1, "duration_in_seconds": 600},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "kind": "Cannot add cardio sets to a STRENGTH exercise"
        }

    def test_swap_exercise_with_incompatible_sets_rejected(self, client, workout, seeded):
        workout_exercise_id = workout[ExerciseType.STRENGTH]
        client.post(
            f"{SETS}/{workout_exercise_id}/strength-sets", json={"set_number": 1, "reps": 8}
        )

        response = client.put(
            f"/api/v1/workouts/exercises/{workout_exercise_id}",
            json={"exercise_id": seeded["exercises"][ExerciseType.CARDIO]},
        )

        assert response.status_code == 400


@pytest.mark.integration
class TestSetOwnership:
    def test_other_user_cannot_log_or_read_sets(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8}).json()["id"]
        client.act_as("other")

        assert client.post(url, json={"set_number": 2, "reps": 8}).status_code == 403
        assert client.get(url).status_code == 403
        assert client.get(f"{url}/{set_id}").status_code == 403
        assert client.put(f"{url}/{set_id}", json={"reps": 1}).status_code == 403
        assert client.delete(f"{url}/{set_id}").status_code == 403

    def test_admin_can_read_sets(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        client.post(url, json={"set_number": 1, "reps": 8})
        client.act_as("admin")

        assert len(client.get(url).json()) == 1

    def test_deleted_workout_hides_sets_from_admin(self, client, workout):
        url = f"{SETS}/{workout[ExerciseType.STRENGTH]}/strength-sets"
        set_id = client.post(url, json={"set_number": 1, "reps": 8}).json()["id"]
        assert client.delete(f"/api/v1/workouts/{workout['id']}").status_code == 204
        client.act_as("admin")

        assert client.get(url).status_code == 404
        assert client.post(url, json={"set_number": 2, "reps": 8}).status_code == 404
        assert client.get(f"{url}/{set_id}").status_code == 404
        assert client.put(f"{url}/{set_id}", json={"reps": 9}).status_code == 404
        assert client.delete(f"{url}/{set_id}").status_code == 404
