"""Integration tests for API endpoints and error envelopes."""

import pytest
from fastapi import status

from thesis_registry.schemas.common import current_year

# Larger than any INTEGER id column can hold
OVERSIZED_ID = 99999999999999999999


@pytest.fixture
def thesis_payload(registry) -> dict:
    """JSON body for a valid thesis create request."""
    return {
        "title": "Advanced Machine Learning Techniques",
        "abstract": "A study of modern optimisation methods.",
        "author_id": registry.author_id,
        "year": 2022,
        "type": "Master",
        "university_id": registry.university_id,
        "institute_id": registry.institute_id,
        "num_pages": 120,
        "language": "English",
        "submission_date": "2022-06-15",
        "supervisor_ids": [registry.supervisor_id],
        "co_supervisor_id": registry.co_supervisor_id,
        "subject_topic_ids": registry.topic_ids[:2],
        "keywords": ["machine learning", "optimisation"],
    }


class TestHealth:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_returns_ok(self, api_client):
        """Test: GET /api/health should report the service as running."""
        response = await api_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "ok",
            "message": "Thesis Registry API is running",
        }

    @pytest.mark.asyncio
    async def test_db_health_reports_connected(self, api_client, monkeypatch):
        """Test: GET /api/health/db should report a reachable database."""

        async def reachable():
            return None

        monkeypatch.setattr("thesis_registry.api.router.verify_db_connection", reachable)

        response = await api_client.get("/api/health/db")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok", "database": "connected"}

    @pytest.mark.asyncio
    async def test_db_health_reports_unreachable_database(
        self, api_client, monkeypatch
    ):
        """Test: GET /api/health/db should return 503 when the database is down."""

        async def unreachable():
            raise ConnectionError("connection refused")

        monkeypatch.setattr(
            "thesis_registry.api.router.verify_db_connection", unreachable
        )

        response = await api_client.get("/api/health/db")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["database"] == "disconnected"


class TestUniversities:
    """Tests for /api/universities."""

    @pytest.mark.asyncio
    async def test_create_returns_201_envelope(self, api_client):
        """Test: POST should create the row and wrap it in an envelope."""
        # Act
        response = await api_client.post(
            "/api/universities",
            json={"name": "Ankara University", "country": "Turkey", "city": "Ankara"},
        )

        # Assert
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Ankara University"
        assert isinstance(body["data"]["university_id"], int)
        assert "created_at" in body["data"]

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_name(self, api_client):
        for name in ("Istanbul University", "Ankara University"):
            await api_client.post(
                "/api/universities",
                json={"name": name, "country": "Turkey", "city": "X"},
            )

        response = await api_client.get("/api/universities")

        names = [item["name"] for item in response.json()["data"]]
        assert names == ["Ankara University", "Istanbul University"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, api_client):
        """Test: GET of an unknown id should return a not-found envelope."""
        response = await api_client.get("/api/universities/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "error": "University not found"}

    @pytest.mark.asyncio
    async def test_create_with_blank_name_fails_validation(self, api_client):
        """Test: invalid bodies should return 400 with field paths."""
        response = await api_client.post(
            "/api/universities", json={"name": "", "country": "Turkey", "city": "A"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert [detail["path"] for detail in body["details"]] == ["name"]

    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, api_client, registry):
        response = await api_client.put(
            f"/api/universities/{registry.university_id}", json={"city": "Istanbul"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["city"] == "Istanbul"
        assert data["name"] == "Ankara University"

    @pytest.mark.asyncio
    async def test_update_rejects_null_for_required_field(self, api_client, registry):
        response = await api_client.put(
            f"/api/universities/{registry.university_id}", json={"name": None}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "name"

    @pytest.mark.asyncio
    async def test_update_missing_returns_404(self, api_client):
        response = await api_client.put("/api/universities/999", json={"city": "X"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, kwargs",
        [("get", {}), ("put", {"json": {"city": "X"}}), ("delete", {})],
    )
    async def test_oversized_id_returns_404(self, api_client, method, kwargs):
        """Test: an id beyond the INTEGER range is simply not found."""
        # Act
        response = await api_client.request(
            method.upper(), f"/api/universities/{OVERSIZED_ID}", **kwargs
        )

        # Assert
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "error": "University not found"}

    @pytest.mark.asyncio
    async def test_delete_returns_message(self, api_client):
        """Test: DELETE of an unreferenced row should return a success message."""
        created = await api_client.post(
            "/api/universities",
            json={"name": "Temp University", "country": "Turkey", "city": "Izmir"},
        )
        university_id = created.json()["data"]["university_id"]

        response = await api_client.delete(f"/api/universities/{university_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "message": "University deleted successfully",
        }
        missing = await api_client.get(f"/api/universities/{university_id}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_referenced_university_is_rejected(
        self, api_client, registry
    ):
        """Test: a university with institutes cannot be deleted."""
        response = await api_client.delete(
            f"/api/universities/{registry.university_id}"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert "associated institutes" in body["error"]

        still_there = await api_client.get(
            f"/api/universities/{registry.university_id}"
        )
        assert still_there.status_code == status.HTTP_200_OK


class TestInstitutes:
    """Tests for /api/institutes."""

    @pytest.mark.asyncio
    async def test_list_by_university(self, api_client, registry):
        response = await api_client.get(
            f"/api/institutes/university/{registry.university_id}"
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [item["institute_id"] for item in data] == [registry.institute_id]

    @pytest.mark.asyncio
    async def test_list_by_university_without_institutes_is_empty(self, api_client):
        response = await api_client.get("/api/institutes/university/999")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "data": []}

    @pytest.mark.asyncio
    async def test_create_with_missing_university_is_rejected(self, api_client):
        """Test: a dangling university_id should map to an invalid-reference error."""
        response = await api_client.post(
            "/api/institutes", json={"name": "Orphan Institute", "university_id": 999}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "referenced item does not exist" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_create_with_oversized_university_id_fails_validation(
        self, api_client
    ):
        """Test: a foreign key beyond the INTEGER range is rejected before the database."""
        # Act
        response = await api_client.post(
            "/api/institutes",
            json={"name": "Orphan Institute", "university_id": OVERSIZED_ID},
        )

        # Assert
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "Validation failed"
        assert [detail["path"] for detail in body["details"]] == ["university_id"]

    @pytest.mark.asyncio
    async def test_list_by_oversized_university_id_is_empty(self, api_client):
        response = await api_client.get(f"/api/institutes/university/{OVERSIZED_ID}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "data": []}


class TestPeople:
    """Tests for /api/people."""

    @pytest.mark.asyncio
    async def test_create_with_invalid_email_fails_validation(self, api_client):
        response = await api_client.post(
            "/api/people",
            json={"first_name": "Can", "last_name": "Oz", "email": "not-an-email"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "email"

    @pytest.mark.asyncio
    async def test_duplicate_email_returns_409(self, api_client, registry):
        """Test: emails are unique across people."""
        response = await api_client.post(
            "/api/people",
            json={"first_name": "Other", "last_name": "Ayse", "email": "ayse@example.com"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_affiliation_can_be_cleared(self, api_client):
        created = await api_client.post(
            "/api/people",
            json={
                "first_name": "Zeynep",
                "last_name": "Arslan",
                "email": "zeynep@example.com",
                "affiliation": "METU",
            },
        )
        person_id = created.json()["data"]["person_id"]

        response = await api_client.put(
            f"/api/people/{person_id}", json={"affiliation": None}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["affiliation"] is None


class TestSubjectTopics:
    """Tests for /api/subject-topics."""

    @pytest.mark.asyncio
    async def test_get_missing_topic_uses_readable_label(self, api_client):
        response = await api_client.get("/api/subject-topics/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Subject topic not found"


class TestTheses:
    """Tests for /api/theses."""

    @pytest.mark.asyncio
    async def test_create_then_get_detail(self, api_client, registry, thesis_payload):
        """Test: a created thesis is readable with its associations."""
        # Act
        created = await api_client.post("/api/theses", json=thesis_payload)

        # Assert
        assert created.status_code == status.HTTP_201_CREATED
        thesis = created.json()["data"]
        assert thesis["type"] == "Master"
        assert thesis["submission_date"] == "2022-06-15"
        assert "supervisors" not in thesis

        detail = await api_client.get(f"/api/theses/{thesis['thesis_id']}")
        assert detail.status_code == status.HTTP_200_OK
        data = detail.json()["data"]
        assert data["title"] == thesis_payload["title"]
        assert sorted((s["person_id"], s["role"]) for s in data["supervisors"]) == sorted(
            [
                (registry.supervisor_id, "Supervisor"),
                (registry.co_supervisor_id, "Co-Supervisor"),
            ]
        )
        assert [t["topic_name"] for t in data["subject_topics"]] == [
            "Computer Engineering",
            "Mathematics",
        ]
        assert data["keywords"] == ["machine learning", "optimisation"]

    @pytest.mark.asyncio
    async def test_create_without_supervisors_fails_validation(
        self, api_client, thesis_payload
    ):
        thesis_payload["supervisor_ids"] = []

        response = await api_client.post("/api/theses", json=thesis_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        paths = [detail["path"] for detail in response.json()["details"]]
        assert "supervisor_ids" in paths

    @pytest.mark.asyncio
    async def test_create_with_malformed_date_fails_validation(
        self, api_client, thesis_payload
    ):
        thesis_payload["submission_date"] = "15/06/2022"

        response = await api_client.post("/api/theses", json=thesis_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        detail = response.json()["details"][0]
        assert detail["path"] == "submission_date"
        assert "YYYY-MM-DD" in detail["message"]

    @pytest.mark.asyncio
    async def test_create_with_future_year_fails_validation(
        self, api_client, thesis_payload
    ):
        thesis_payload["year"] = current_year() + 1

        response = await api_client.post("/api/theses", json=thesis_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "year"

    @pytest.mark.asyncio
    async def test_create_with_missing_topic_writes_nothing(
        self, api_client, thesis_payload
    ):
        """Test: a failed aggregate write leaves no thesis behind."""
        thesis_payload["subject_topic_ids"] = [999]

        response = await api_client.post("/api/theses", json=thesis_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        listing = await api_client.get("/api/theses")
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_update_replaces_keywords(self, api_client, thesis_payload):
        created = await api_client.post("/api/theses", json=thesis_payload)
        thesis_id = created.json()["data"]["thesis_id"]

        response = await api_client.put(
            f"/api/theses/{thesis_id}", json={"keywords": ["graphs"], "num_pages": 99}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["num_pages"] == 99
        detail = await api_client.get(f"/api/theses/{thesis_id}")
        assert detail.json()["data"]["keywords"] == ["graphs"]

    @pytest.mark.asyncio
    async def test_update_clears_co_supervisor_with_null(
        self, api_client, thesis_payload
    ):
        created = await api_client.post("/api/theses", json=thesis_payload)
        thesis_id = created.json()["data"]["thesis_id"]

        await api_client.put(f"/api/theses/{thesis_id}", json={"co_supervisor_id": None})

        detail = await api_client.get(f"/api/theses/{thesis_id}")
        roles = [s["role"] for s in detail.json()["data"]["supervisors"]]
        assert roles == ["Supervisor"]

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_404(self, api_client, thesis_payload):
        created = await api_client.post("/api/theses", json=thesis_payload)
        thesis_id = created.json()["data"]["thesis_id"]

        response = await api_client.delete(f"/api/theses/{thesis_id}")

        assert response.json() == {
            "success": True,
            "message": "Thesis deleted successfully",
        }
        missing = await api_client.get(f"/api/theses/{thesis_id}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.json()["error"] == "Thesis not found"

    @pytest.mark.asyncio
    async def test_oversized_thesis_id_returns_404(self, api_client):
        response = await api_client.get(f"/api/theses/{OVERSIZED_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Thesis not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value, path",
        [
            ("supervisor_ids", [OVERSIZED_ID], "supervisor_ids.0"),
            ("co_supervisor_id", OVERSIZED_ID, "co_supervisor_id"),
            ("subject_topic_ids", [OVERSIZED_ID], "subject_topic_ids.0"),
            ("num_pages", OVERSIZED_ID, "num_pages"),
        ],
    )
    async def test_create_with_oversized_integer_fails_validation(
        self, api_client, thesis_payload, field, value, path
    ):
        """Test: integers beyond the INTEGER range never reach the database."""
        # Arrange
        thesis_payload[field] = value

        # Act
        response = await api_client.post("/api/theses", json=thesis_payload)

        # Assert
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert [detail["path"] for detail in response.json()["details"]] == [path]

    @pytest.mark.asyncio
    async def test_person_with_thesis_cannot_be_deleted(
        self, api_client, registry, thesis_payload
    ):
        await api_client.post("/api/theses", json=thesis_payload)

        response = await api_client.delete(f"/api/people/{registry.author_id}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "associated with theses" in response.json()["error"]


class TestThesisSearch:
    """Tests for GET /api/theses/search."""

    @pytest.fixture
    async def three_theses(self, api_client, thesis_payload) -> list[int]:
        ids = []
        for year, title, thesis_type in (
            (2019, "Early Work", "Master"),
            (2021, "Middle Work", "Doctorate"),
            (2023, "Recent Work", "Master"),
        ):
            response = await api_client.post(
                "/api/theses",
                json={
                    **thesis_payload,
                    "year": year,
                    "title": title,
                    "type": thesis_type,
                    "submission_date": f"{year}-01-10",
                },
            )
            ids.append(response.json()["data"]["thesis_id"])
        return ids

    @pytest.mark.asyncio
    async def test_year_range_filter(self, api_client, three_theses):
        """Test: year_from/year_to should narrow results inclusively."""
        response = await api_client.get(
            "/api/theses/search", params={"year_from": 2020, "year_to": 2023}
        )

        assert response.status_code == status.HTTP_200_OK
        titles = [item["title"] for item in response.json()["data"]]
        assert titles == ["Recent Work", "Middle Work"]

    @pytest.mark.asyncio
    async def test_type_and_text_filters_combine(self, api_client, three_theses):
        response = await api_client.get(
            "/api/theses/search", params={"type": "Master", "query": "work"}
        )

        titles = [item["title"] for item in response.json()["data"]]
        assert titles == ["Recent Work", "Early Work"]

    @pytest.mark.asyncio
    async def test_empty_parameters_are_ignored(self, api_client, three_theses):
        """Test: blank query-string values behave as if omitted."""
        response = await api_client.get(
            "/api/theses/search", params={"query": "", "language": "", "type": ""}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["data"]) == 3

    @pytest.mark.asyncio
    async def test_future_year_to_fails_validation(self, api_client):
        response = await api_client.get(
            "/api/theses/search", params={"year_to": current_year() + 1}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "year_to"

    @pytest.mark.asyncio
    async def test_unknown_type_fails_validation(self, api_client):
        response = await api_client.get(
            "/api/theses/search", params={"type": "Bachelor"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_oversized_author_id_fails_validation(self, api_client):
        response = await api_client.get(
            "/api/theses/search", params={"author_id": OVERSIZED_ID}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "author_id"


class TestDashboard:
    """Tests for /api/dashboard/stats."""

    @pytest.mark.asyncio
    async def test_stats_count_every_entity(self, api_client, thesis_payload):
        await api_client.post("/api/theses", json=thesis_payload)

        response = await api_client.get("/api/dashboard/stats")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {
            "total_theses": 1,
            "total_universities": 1,
            "total_people": 3,
            "total_institutes": 1,
        }


class TestErrorEnvelope:
    """Tests for errors raised outside the resource handlers."""

    @pytest.mark.asyncio
    async def test_unknown_route_returns_404_envelope(self, api_client):
        response = await api_client.get("/api/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {
            "success": False,
            "error": "Route GET /api/does-not-exist not found",
        }

    @pytest.mark.asyncio
    async def test_non_integer_id_fails_validation(self, api_client):
        response = await api_client.get("/api/universities/abc")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["path"] == "university_id"
