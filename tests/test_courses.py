# =============================================================================
# tests/test_courses.py - Course Endpoint Tests
# =============================================================================
# Integration tests for /api/v1/courses and /api/v1/bootcamps/{id}/courses,
# including the bootcamp averageCost recomputation.
#
# Run with: pytest tests/test_courses.py -v
# =============================================================================

import pytest
from bson import ObjectId

from lib.mongo_client import BOOTCAMPS


def course_payload(**overrides):
    payload = {
        "title": "Front End Web Development",
        "description": "HTML, CSS and JavaScript",
        "weeks": 8,
        "tuition": 8000,
        "minimumSkill": "beginner",
        "scholarshipAvailable": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def add_course(client, publisher, auth_headers, bootcamp):
    """Factory adding a course to the publisher's bootcamp through the API."""

    def _add(**overrides):
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json=course_payload(**overrides),
            headers=auth_headers(publisher),
        )
        assert response.status_code == 201
        return response.json()["data"]

    return _add


def average_cost(db, bootcamp):
    return db[BOOTCAMPS].find_one({"_id": ObjectId(bootcamp["id"])}).get("averageCost")


# =============================================================================
# Create
# =============================================================================

class TestCreateCourse:
    """Tests for POST /bootcamps/{id}/courses."""

    def test_create_course(self, add_course, bootcamp, publisher):
        """Test adding a course to an owned bootcamp."""
        course = add_course()

        assert course["title"] == "Front End Web Development"
        assert course["minimumSkill"] == "beginner"
        assert course["bootcamp"] == bootcamp["id"]
        assert course["user"] == str(publisher["_id"])

    def test_average_cost_rounds_up_to_ten(self, add_course, bootcamp, db):
        """Test that averageCost is the mean tuition rounded up to a multiple of 10."""
        add_course(tuition=8000)
        assert average_cost(db, bootcamp) == 8000

        add_course(title="Full Stack Web Development", tuition=10001)
        assert average_cost(db, bootcamp) == 9010

    def test_other_publisher_forbidden(self, client, other_publisher, auth_headers, bootcamp):
        """Test that only the bootcamp owner may add courses."""
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json=course_payload(),
            headers=auth_headers(other_publisher),
        )

        assert response.status_code == 403
        assert response.json()["error"] == (
            f"User {other_publisher['_id']} is not authorized to add a course to bootcamp {bootcamp['id']}"
        )

    def test_admin_may_add(self, client, admin, auth_headers, bootcamp):
        """Test that admins may add courses to any bootcamp."""
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json=course_payload(),
            headers=auth_headers(admin),
        )

        assert response.status_code == 201

    def test_missing_bootcamp(self, client, publisher, auth_headers):
        """Test adding a course to a bootcamp that does not exist."""
        missing = str(ObjectId())
        response = client.post(
            f"/api/v1/bootcamps/{missing}/courses",
            json=course_payload(),
            headers=auth_headers(publisher),
        )

        assert response.status_code == 404
        assert response.json()["error"] == f"Bootcamp not found with id of {missing}"

    def test_invalid_minimum_skill(self, client, publisher, auth_headers, bootcamp):
        """Test that minimumSkill is restricted to the three levels."""
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json=course_payload(minimumSkill="expert"),
            headers=auth_headers(publisher),
        )

        assert response.status_code == 400

    def test_missing_weeks(self, client, publisher, auth_headers, bootcamp):
        """Test that required fields are reported by name."""
        payload = course_payload()
        del payload["weeks"]
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json=payload,
            headers=auth_headers(publisher),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "weeks: Field required"


# =============================================================================
# Read
# =============================================================================

class TestReadCourses:
    """Tests for the course listing and lookup endpoints."""

    def test_list_courses_populates_bootcamp(self, client, add_course, bootcamp):
        """Test that each course carries its bootcamp's name and description."""
        add_course()

        body = client.get("/api/v1/courses").json()

        assert body["count"] == 1
        assert body["data"][0]["bootcamp"] == {
            "id": bootcamp["id"],
            "name": bootcamp["name"],
            "description": bootcamp["description"],
        }

    def test_filter_courses(self, client, add_course):
        """Test numeric filters on courses."""
        add_course(title="Short", weeks=4)
        add_course(title="Long", weeks=12)

        body = client.get("/api/v1/courses", params={"weeks[gte]": "10"}).json()

        assert [course["title"] for course in body["data"]] == ["Long"]

    def test_list_bootcamp_courses(self, client, add_course, bootcamp):
        """Test listing one bootcamp's courses without pagination."""
        add_course(title="First")
        add_course(title="Second")

        body = client.get(f"/api/v1/bootcamps/{bootcamp['id']}/courses").json()

        assert body["success"] is True
        assert body["count"] == 2
        assert {course["title"] for course in body["data"]} == {"First", "Second"}
        assert "pagination" not in body

    def test_get_course(self, client, add_course, bootcamp):
        """Test fetching one course with its bootcamp."""
        course = add_course()

        body = client.get(f"/api/v1/courses/{course['id']}").json()

        assert body["data"]["title"] == course["title"]
        assert body["data"]["bootcamp"]["name"] == bootcamp["name"]

    def test_get_missing_course(self, client):
        """Test fetching a course that does not exist."""
        response = client.get("/api/v1/courses/not-an-id")

        assert response.status_code == 404
        assert response.json()["error"] == "Course not found with id of not-an-id"


# =============================================================================
# Update / Delete
# =============================================================================

class TestUpdateCourse:
    """Tests for PUT /courses/{id}."""

    def test_update_tuition_recomputes_average(self, client, publisher, auth_headers, add_course, bootcamp, db):
        """Test that a tuition change refreshes averageCost."""
        course = add_course(tuition=8000)

        response = client.put(
            f"/api/v1/courses/{course['id']}",
            json={"tuition": 12000},
            headers=auth_headers(publisher),
        )

        assert response.status_code == 200
        assert response.json()["data"]["tuition"] == 12000
        assert average_cost(db, bootcamp) == 12000

    def test_update_forbidden(self, client, other_publisher, auth_headers, add_course):
        """Test that another publisher cannot edit the course."""
        course = add_course()

        response = client.put(
            f"/api/v1/courses/{course['id']}",
            json={"title": "Hijacked"},
            headers=auth_headers(other_publisher),
        )

        assert response.status_code == 403

    def test_update_revalidates(self, client, publisher, auth_headers, add_course):
        """Test that an update cannot set an invalid skill level."""
        course = add_course()

        response = client.put(
            f"/api/v1/courses/{course['id']}",
            json={"minimumSkill": "expert"},
            headers=auth_headers(publisher),
        )

        assert response.status_code == 400


class TestDeleteCourse:
    """Tests for DELETE /courses/{id}."""

    def test_delete_clears_average(self, client, publisher, auth_headers, add_course, bootcamp, db):
        """Test that removing the last course removes averageCost."""
        course = add_course()

        response = client.delete(f"/api/v1/courses/{course['id']}", headers=auth_headers(publisher))

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {}}
        assert average_cost(db, bootcamp) is None

    def test_delete_requires_publisher_role(self, client, reviewer, auth_headers, add_course):
        """Test that the user role cannot delete courses."""
        course = add_course()

        response = client.delete(f"/api/v1/courses/{course['id']}", headers=auth_headers(reviewer))

        assert response.status_code == 403
