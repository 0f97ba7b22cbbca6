"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from courseboard.api import CourseBoardRestAPI
from courseboard.services import CourseBoardService


@pytest.fixture
def client(service):
    return TestClient(CourseBoardRestAPI(service).app)


@pytest.fixture
def strict_client(strict_service):
    return TestClient(CourseBoardRestAPI(strict_service).app)


class TestRestAPI:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_course_lifecycle(self, client):
        response = client.post("/courses", json={"title": "Math", "description": "intro"})
        assert response.status_code == 201
        course = response.json()
        assert course["title"] == "Math"

        assert client.get("/courses").json() == [course]
        assert client.get(f"/courses/{course['id']}").json() == course
        assert client.get("/courses/999999").status_code == 404

    def test_vote_scenario(self, client):
        course = client.post("/courses", json={"title": "Math", "description": "intro"}).json()
        vote = client.post("/vote-requests", json={"course_id": course["id"]}).json()
        for _ in range(3):
            assert client.post(f"/vote-requests/{vote['id']}/upvote").status_code == 200
        client.post(f"/vote-requests/{vote['id']}/downvote")

        assert client.get("/vote-requests").json() == [
            {"id": vote["id"], "course_id": course["id"], "upvotes": 3, "downvotes": 1}
        ]

    def test_decline_twice_succeeds(self, client):
        vote = client.post("/vote-requests", json={"course_id": 1}).json()
        assert client.delete(f"/vote-requests/{vote['id']}").status_code == 200
        assert client.delete(f"/vote-requests/{vote['id']}").status_code == 200
        assert client.get("/vote-requests").json() == []

    def test_vote_on_unknown_id_is_accepted(self, client):
        assert client.post("/vote-requests/4242/upvote").status_code == 200

    def test_negative_course_id_rejected(self, client):
        assert client.post("/vote-requests", json={"course_id": -1}).status_code == 422

    def test_enrollment_endpoints(self, client):
        for _ in range(2):
            response = client.post("/enrollments", json={"student_id": "S1", "course_id": 3})
            assert response.status_code == 201
        client.post("/enrollments", json={"student_id": "s1", "course_id": 3})

        assert len(client.get("/students/S1/enrollments").json()) == 2

        response = client.post("/enrollments/dropout", json={"student_id": "S1", "course_id": 3})
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/enrollments").json() == [{"student_id": "s1", "course_id": 3}]

    def test_statistics(self, client):
        client.post("/courses", json={"title": "Math", "description": "intro"})
        stats = client.get("/statistics").json()["statistics"]
        assert stats["total_courses"] == 1


class TestStrictRestAPI:

    def test_unknown_course_is_404(self, strict_client):
        response = strict_client.post("/vote-requests", json={"course_id": 5})
        assert response.status_code == 404
        response = strict_client.post("/enrollments", json={"student_id": "S", "course_id": 5})
        assert response.status_code == 404

    def test_missing_vote_request_is_404(self, strict_client):
        assert strict_client.post("/vote-requests/5/upvote").status_code == 404
        assert strict_client.delete("/vote-requests/5").status_code == 404

    def test_missing_enrollment_is_404(self, strict_client):
        response = strict_client.post("/enrollments/dropout", json={"student_id": "S", "course_id": 5})
        assert response.status_code == 404


class TestPathBounds:

    @pytest.mark.parametrize("path", [
        "/vote-requests/-1/upvote",
        "/vote-requests/-1/downvote",
        f"/vote-requests/{2 ** 64}/upvote",
    ])
    def test_out_of_range_vote_id_rejected(self, client, path):
        assert client.post(path).status_code == 422

    def test_out_of_range_ids_on_delete_and_get(self, client):
        assert client.delete("/vote-requests/-1").status_code == 422
        assert client.get(f"/courses/{2 ** 64}").status_code == 422

    def test_largest_id_accepted(self, client):
        assert client.post(f"/vote-requests/{2 ** 64 - 1}/upvote").status_code == 200
