"""
HTTP tests for /api/v1/workouts: creation, lifecycle, ownership and
soft delete.
"""
import pytest

from domain.models import ExerciseType

WORKOUTS = "/api/v1/workouts"


def create_workout(client, **fields):
    response = client.post(WORKOUTS, json={"name": "Push day", **fields})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestCreateWorkout:
    def test_defaults_to_planned(self, client, seeded):
        body = create_workout(client)

        assert body["status"] == "PLANNED"
        assert body["user_id"] == seeded["users"]["owner"]
        assert body["version"] == 1
        assert body["exercises"] == []

    def test_creates_listed_exercises_in_order(self, client, seeded):
        exercises = seeded["exercises"]

        body = create_workout(
            client,
            exercises=[
                {"exercise_id": exercises[ExerciseType.STRENGTH]},
                {"exercise_id": exercises[ExerciseType.CARDIO], "notes": "cool down"},
            ],
        )

        assert [item["exercise_name"] for item in body["exercises"]] == ["Bench Press", "Running"]
        assert [item["order_in_workout"] for item in body["exercises"]] == [1, 2]
        assert body["exercises"][1]["notes"] == "cool down"

    def test_unknown_exercise_rolls_back_whole_request(self, client, seeded):
        response = client.post(
            WORKOUTS,
            json={
                "name": "Broken",
                "exercises": [
                    {"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]},
                    {"exercise_id": 9999},
                ],
            },
        )

        assert response.status_code == 404
        assert client.get(f"{WORKOUTS}/my").json() == []

    def test_in_progress_stamps_start(self, client):
        body = create_workout(client, status="IN_PROGRESS")

        assert body["started_at"] == "2026-03-01T12:00:00"

    def test_future_start_rejected(self, client):
        response = client.post(
            WORKOUTS, json={"name": "Tomorrow", "started_at": "2026-03-02T08:00:00"}
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "started_at": "Workout session cannot start in the future"
        }

    def test_completion_time_needs_completed_status(self, client):
        response = client.post(
            WORKOUTS, json={"name": "Odd", "completed_at": "2026-03-01T11:00:00"}
        )

        assert response.status_code == 400
        assert "completed_at" in response.json()["errors"]

    def test_name_pattern_enforced(self, client):
        response = client.post(WORKOUTS, json={"name": "<script>"})

        assert response.status_code == 400
        assert "name" in response.json()["errors"]

    def test_nested_field_errors_are_named(self, client):
        response = client.post(WORKOUTS, json={"name": "Legs", "exercises": [{"exercise_id": 0}]})

        assert response.status_code == 400
        assert "exercises[0].exercise_id" in response.json()["errors"]


@pytest.mark.integration
class TestWorkoutLifecycle:
    def test_start_then_complete_records_duration(self, client, clock):
        workout = create_workout(client)

        started = client.patch(f"{WORKOUTS}/{workout['id']}/status", json={"action": "start"})
        assert started.status_code == 200
        assert started.json()["status"] == "IN_PROGRESS"

        clock.advance(minutes=45)
        completed = client.patch(f"{WORKOUTS}/{workout['id']}/status", json={"action": "complete"})

        body = completed.json()
        assert body["status"] == "COMPLETED"
        assert body["completed_at"] == "2026-03-01T12:45:00"
        assert body["actual_duration_in_minutes"] == 45

    def test_pause_and_resume(self, client):
        workout = create_workout(client, status="IN_PROGRESS")
        url = f"{WORKOUTS}/{workout['id']}/status"

        assert client.patch(url, json={"action": "pause"}).json()["status"] == "PAUSED"
        assert client.patch(url, json={"action": "resume"}).json()["status"] == "IN_PROGRESS"

    def test_terminal_status_rejects_actions(self, client):
        workout = create_workout(client)
        url = f"{WORKOUTS}/{workout['id']}/status"
        client.patch(url, json={"action": "cancel"})

        response = client.patch(url, json={"action": "start"})

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "action": "Cannot start a workout session that is CANCELLED"
        }

    def test_unknown_action_is_a_validation_error(self, client):
        workout = create_workout(client)

        response = client.patch(f"{WORKOUTS}/{workout['id']}/status", json={"action": "skip"})

        assert response.status_code == 400
        assert "action" in response.json()["errors"]

    def test_stale_version_conflicts(self, client):
        workout = create_workout(client)
        url = f"{WORKOUTS}/{workout['id']}"
        assert client.put(url, json={"name": "Push day v2", "version": 1}).status_code == 200

        response = client.put(url, json={"name": "Push day v3", "version": 1})

        assert response.status_code == 409
        assert response.json()["details"]["current_version"] == 2

    def test_null_name_rejected_on_update(self, client):
        workout = create_workout(client)
        url = f"{WORKOUTS}/{workout['id']}"

        response = client.put(url, json={"name": None, "version": 1})

        assert response.status_code == 400
        assert "name" in response.json()["errors"]
        assert client.get(url).json()["name"] == "Push day"


@pytest.mark.integration
class TestWorkoutOwnership:
    def test_other_user_is_denied(self, client):
        workout = create_workout(client)
        client.act_as("other")

        assert client.get(f"{WORKOUTS}/{workout['id']}").status_code == 403
        assert client.put(f"{WORKOUTS}/{workout['id']}", json={"name": "Mine now"}).status_code == 403
        assert client.delete(f"{WORKOUTS}/{workout['id']}").status_code == 403

    def test_admin_can_read_any_workout(self, client):
        workout = create_workout(client)
        client.act_as("admin")

        assert client.get(f"{WORKOUTS}/{workout['id']}").status_code == 200

    def test_missing_workout(self, client):
        assert client.get(f"{WORKOUTS}/9999").status_code == 403
        client.act_as("admin")
        assert client.get(f"{WORKOUTS}/9999").status_code == 404

    def test_listing_another_users_workouts(self, client, seeded):
        create_workout(client)
        owner_id = seeded["users"]["owner"]

        client.act_as("other")
        assert client.get(f"{WORKOUTS}/user/{owner_id}").status_code == 403
        client.act_as("admin")
        assert len(client.get(f"{WORKOUTS}/user/{owner_id}").json()) == 1

    def test_my_workouts_only_shows_callers(self, client):
        create_workout(client)
        client.act_as("other")
        create_workout(client, name="Other day")

        names = [workout["name"] for workout in client.get(f"{WORKOUTS}/my").json()]

        assert names == ["Other day"]

    def test_paged_listing_requires_admin(self, client):
        for index in range(3):
            create_workout(client, name=f"Day {index}")

        assert client.get(WORKOUTS).status_code == 403
        client.act_as("admin")
        body = client.get(WORKOUTS, params={"size": 2}).json()
        assert body["total"] == 3
        assert len(body["items"]) == 2
        assert body["has_next"] is True


@pytest.mark.integration
class TestWorkoutSoftDelete:
    def test_delete_hides_and_admin_restores(self, client):
        workout = create_workout(client)
        url = f"{WORKOUTS}/{workout['id']}"

        assert client.delete(url).status_code == 204
        assert client.get(f"{WORKOUTS}/my").json() == []

        client.act_as("admin")
        assert client.get(url).status_code == 404
        restored = client.post(f"{url}/restore")
        assert restored.status_code == 200
        assert restored.json()["id"] == workout["id"]

        client.act_as("owner")
        assert client.get(url).status_code == 200

    def test_owner_cannot_restore(self, client):
        workout = create_workout(client)
        client.delete(f"{WORKOUTS}/{workout['id']}")

        assert client.post(f"{WORKOUTS}/{workout['id']}/restore").status_code == 403

    def test_deleted_workout_hides_its_exercises(self, client, seeded):
        workout = create_workout(
            client, exercises=[{"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]}]
        )
        workout_exercise_id = workout["exercises"][0]["id"]
        client.delete(f"{WORKOUTS}/{workout['id']}")

        assert client.get(f"{WORKOUTS}/exercises/{workout_exercise_id}").status_code == 403
        client.act_as("admin")
        assert client.get(f"{WORKOUTS}/{workout['id']}/exercises").status_code == 404
        assert client.get(f"{WORKOUTS}/exercises/{workout_exercise_id}").status_code == 404
        assert client.put(
            f"{WORKOUTS}/exercises/{workout_exercise_id}", json={"notes": "after delete"}
        ).status_code == 404
        assert client.delete(f"{WORKOUTS}/exercises/{workout_exercise_id}").status_code == 404


@pytest.mark.integration
class TestWorkoutExercises:
    def test_add_appends_in_next_position(self, client, seeded):
        exercises = seeded["exercises"]
        workout = create_workout(
            client, exercises=[{"exercise_id": exercises[ExerciseType.STRENGTH]}]
        )

        response = client.post(
            f"{WORKOUTS}/{workout['id']}/exercises",
            json={"exercise_id": exercises[ExerciseType.CARDIO]},
        )

        assert response.status_code == 201
        assert response.json()["order_in_workout"] == 2
        listed = client.get(f"{WORKOUTS}/{workout['id']}/exercises").json()
        assert [item["exercise_id"] for item in listed] == [
            exercises[ExerciseType.STRENGTH],
            exercises[ExerciseType.CARDIO],
        ]

    def test_update_and_delete(self, client, seeded):
        workout = create_workout(
            client, exercises=[{"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]}]
        )
        url = f"{WORKOUTS}/exercises/{workout['exercises'][0]['id']}"

        updated = client.put(url, json={"notes": "slow negatives", "version": 1})
        assert updated.status_code == 200
        assert updated.json()["notes"] == "slow negatives"

        assert client.delete(url).status_code == 204
        assert client.get(f"{WORKOUTS}/{workout['id']}").json()["exercises"] == []

    def test_other_user_cannot_touch_workout_exercise(self, client, seeded):
        workout = create_workout(
            client, exercises=[{"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]}]
        )
        url = f"{WORKOUTS}/exercises/{workout['exercises'][0]['id']}"
        client.act_as("other")

        assert client.get(url).status_code == 403
        assert client.put(url, json={"notes": "mine", "version": 1}).status_code == 403
        assert client.delete(url).status_code == 403

        client.act_as("owner")
        assert client.get(url).json()["notes"] is None

    @pytest.mark.parametrize("field", ["exercise_id", "order_in_workout"])
    def test_null_for_required_field_rejected_on_update(self, client, seeded, field):
        workout = create_workout(
            client, exercises=[{"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]}]
        )
        url = f"{WORKOUTS}/exercises/{workout['exercises'][0]['id']}"

        response = client.put(url, json={field: None})

        assert response.status_code == 400
        assert field in response.json()["errors"]
        assert client.get(url).json()["version"] == 1

    def test_add_to_someone_elses_workout(self, client, seeded):
        workout = create_workout(client)
        client.act_as("other")

        response = client.post(
            f"{WORKOUTS}/{workout['id']}/exercises",
            json={"exercise_id": seeded["exercises"][ExerciseType.STRENGTH]},
        )

        assert response.status_code == 403
