"""
Integration tests for router completeness.

Every public endpoint must be routed (an unknown path is the only 404 we
reject) and every protected endpoint must refuse anonymous callers.
"""

import pytest

# (method, path) pairs that need a bearer token
PROTECTED_ENDPOINTS = [
    ("GET", "/api/v1/users/me"),
    ("GET", "/api/v1/users"),
    ("POST", "/api/v1/users"),
    ("GET", "/api/v1/users/search?first_name=a"),
    ("GET", "/api/v1/users/1"),
    ("PUT", "/api/v1/users/1"),
    ("DELETE", "/api/v1/users/1"),
    ("POST", "/api/v1/users/1/restore"),
    ("GET", "/api/v1/exercises"),
    ("POST", "/api/v1/exercises"),
    ("GET", "/api/v1/exercises/search?name=a"),
    ("GET", "/api/v1/exercises/filter"),
    ("GET", "/api/v1/exercises/1"),
    ("PUT", "/api/v1/exercises/1"),
    ("DELETE", "/api/v1/exercises/1"),
    ("POST", "/api/v1/workouts"),
    ("GET", "/api/v1/workouts"),
    ("GET", "/api/v1/workouts/my"),
    ("GET", "/api/v1/workouts/user/1"),
    ("GET", "/api/v1/workouts/1"),
    ("PUT", "/api/v1/workouts/1"),
    ("PATCH", "/api/v1/workouts/1/status"),
    ("DELETE", "/api/v1/workouts/1"),
    ("POST", "/api/v1/workouts/1/restore"),
    ("GET", "/api/v1/workouts/1/exercises"),
    ("POST", "/api/v1/workouts/1/exercises"),
    ("GET", "/api/v1/workouts/exercises/1"),
    ("PUT", "/api/v1/workouts/exercises/1"),
    ("DELETE", "/api/v1/workouts/exercises/1"),
    *(
        (method, f"/api/v1/workout-exercises/1/{kind}-sets{suffix}")
        for kind in ("strength", "cardio", "flexibility")
        for method, suffix in (
            ("GET", ""),
            ("POST", ""),
            ("GET", "/1"),
            ("PUT", "/1"),
            ("DELETE", "/1"),
        )
    ),
]


@pytest.mark.integration
class TestRouterCompleteness:
    @pytest.mark.parametrize("method,path", PROTECTED_ENDPOINTS)
    def test_protected_endpoint_requires_authentication(self, anonymous_client, method, path):
        response = anonymous_client.request(method, path, json={})

        assert response.status_code == 401, f"{method} {path}: {response.status_code}"
        assert response.json()["message"].startswith("Missing authentication")

    def test_health(self, anonymous_client):
        response = anonymous_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_readiness_queries_database(self, anonymous_client):
        response = anonymous_client.get("/health/ready")

        assert response.json() == {"status": "ok", "database": "ok"}

    def test_unknown_route_is_404(self, anonymous_client):
        response = anonymous_client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json()["status"] == 404
