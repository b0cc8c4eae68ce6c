"""Integration tests for the list endpoints."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.exc import OperationalError

from research_portal.database import get_db
from research_portal.kernel.identity.jwt import JWTManager

API = "/api/v1"


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient, portal):
        r = await client.get(f"{API}/projects")

        assert r.status_code == 401
        body = r.json()
        assert body["error"] == "Not authenticated"
        assert body["request_id"] == r.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient, portal):
        r = await client.get(f"{API}/projects", headers={"Authorization": "Bearer garbage"})
        assert r.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_role_is_forbidden(self, client: AsyncClient, portal, jwt_manager: JWTManager):
        token, _, _ = jwt_manager.create_access_token(portal.alice.id, "GUEST")

        r = await client.get(f"{API}/projects", headers={"Authorization": f"Bearer {token}"})

        assert r.status_code == 403
        assert "GUEST" in r.json()["error"]

    @pytest.mark.asyncio
    async def test_non_uuid_subject(self, client: AsyncClient, portal, jwt_manager: JWTManager):
        token, _, _ = jwt_manager.create_access_token("alice", "STUDENT")

        r = await client.get(f"{API}/projects", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401


class TestListEnvelope:
    @pytest.mark.asyncio
    async def test_projects_envelope(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/projects", headers=auth_headers(portal.alice))

        assert r.status_code == 200, r.text
        body = r.json()
        assert set(body) == {"data", "pagination"}
        assert body["pagination"] == {"total": 2, "page": 1, "limit": 10, "totalPages": 1}
        assert [p["id"] for p in body["data"]] == [str(portal.campus.id), str(portal.traffic.id)]

    @pytest.mark.asyncio
    async def test_embedded_people(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/projects",
            params={"query": "solar"},
            headers=auth_headers(portal.ada),
        )

        project = r.json()["data"][0]
        assert project["reviewer"]["name"] == "Fiona Das"
        assert [m["name"] for m in project["members"]] == ["Bob Chen"]
        assert project["reviewer_status"] == "ACCEPTED"

    @pytest.mark.asyncio
    async def test_paging_params(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/users",
            params={"page": "2", "limit": "2"},
            headers=auth_headers(portal.ada),
        )

        body = r.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"total": 5, "page": 2, "limit": 2, "totalPages": 3}

    @pytest.mark.asyncio
    async def test_search_outside_scope_is_empty(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/papers",
            params={"query": "inverter"},
            headers=auth_headers(portal.alice),
        )

        assert r.status_code == 200
        assert r.json() == {
            "data": [],
            "pagination": {"total": 0, "page": 1, "limit": 10, "totalPages": 0},
        }

    @pytest.mark.asyncio
    async def test_student_achievements_empty(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/achievements", headers=auth_headers(portal.bob))

        assert r.status_code == 200
        assert r.json()["data"] == []

    @pytest.mark.asyncio
    async def test_user_filters(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/users",
            params={"userType": "FACULTY", "department": "EEE", "isVerified": "true"},
            headers=auth_headers(portal.ada),
        )

        assert [u["id"] for u in r.json()["data"]] == [str(portal.george.id)]


class TestBadInput:
    @pytest.mark.asyncio
    async def test_bad_status(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/projects",
            params={"status": "DONE"},
            headers=auth_headers(portal.ada),
        )

        assert r.status_code == 400
        assert "DONE" in r.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": "0"}, {"limit": "-5"}, {"page": "two"}])
    async def test_bad_paging(self, client: AsyncClient, portal, auth_headers, params):
        r = await client.get(f"{API}/papers", params=params, headers=auth_headers(portal.ada))
        assert r.status_code == 400

    @pytest.mark.asyncio
    async def test_unsupported_filter(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(
            f"{API}/achievements",
            params={"status": "PUBLISH"},
            headers=auth_headers(portal.ada),
        )
        assert r.status_code == 400


class TestDetail:
    @pytest.mark.asyncio
    async def test_visible(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/papers/{portal.attention.id}", headers=auth_headers(portal.fiona))

        assert r.status_code == 200
        assert r.json()["keywords"] == ["deep learning", "traffic"]

    @pytest.mark.asyncio
    async def test_out_of_scope(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/projects/{portal.solar.id}", headers=auth_headers(portal.alice))

        assert r.status_code == 404
        assert r.json()["error"] == "Project not found"

    @pytest.mark.asyncio
    async def test_missing(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/users/{uuid.uuid4()}", headers=auth_headers(portal.ada))
        assert r.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/projects/abc", headers=auth_headers(portal.ada))

        assert r.status_code == 400
        assert r.json()["error"] == "Invalid identifier format"


class TestPublic:
    @pytest.mark.asyncio
    async def test_published_papers(self, client: AsyncClient, portal):
        r = await client.get(f"{API}/papers/published")

        assert r.status_code == 200
        assert [p["id"] for p in r.json()["data"]] == [str(portal.attention.id)]

    @pytest.mark.asyncio
    async def test_showcase(self, client: AsyncClient, portal):
        r = await client.get(f"{API}/achievements/showcase")

        assert r.status_code == 200
        assert [a["title"] for a in r.json()["data"]] == ["Best Paper Award"]


class TestDashboard:
    @pytest.mark.asyncio
    async def test_student_chart(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/dashboard/chart-data", headers=auth_headers(portal.bob))

        assert r.status_code == 200
        assert r.json() == {
            "data": [
                {"category": "projects", "count": 2},
                {"category": "papers", "count": 2},
            ],
            "userType": "STUDENT",
            "total": 4,
        }

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient, portal):
        r = await client.get(f"{API}/dashboard/chart-data")
        assert r.status_code == 401


class TestTokenClaims:
    @pytest.mark.asyncio
    async def test_token_without_iat(self, client: AsyncClient, portal, jwt_manager: JWTManager):
        token = jwt.encode(
            {
                "sub": str(portal.ada.id),
                "role": "ADMIN",
                "type": "access",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            jwt_manager.secret_key,
            algorithm="HS256",
        )

        r = await client.get(f"{API}/projects", headers={"Authorization": f"Bearer {token}"})

        assert r.status_code == 200, r.text
        assert r.json()["pagination"]["total"] == 3


class TestPageBounds:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [{"limit": str(10**20)}, {"page": str(10**20)}, {"limit": "101"}],
    )
    async def test_out_of_range(self, client: AsyncClient, portal, auth_headers, params):
        r = await client.get(f"{API}/projects", params=params, headers=auth_headers(portal.ada))

        assert r.status_code == 400
        assert set(r.json()) == {"error", "request_id"}

    @pytest.mark.asyncio
    async def test_maximum_limit(self, client: AsyncClient, portal, auth_headers):
        r = await client.get(f"{API}/users", params={"limit": "100"}, headers=auth_headers(portal.ada))

        assert r.status_code == 200
        assert r.json()["pagination"]["limit"] == 100


@pytest_asyncio.fixture
async def broken_db():
    """Point get_db at a session whose queries raise the given exception."""
    from research_portal.main import app

    session = AsyncMock()

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            yield ac, session
    finally:
        app.dependency_overrides.pop(get_db, None)


class TestServerErrors:
    @pytest.mark.asyncio
    async def test_storage_failure(self, broken_db, auth_headers, portal):
        client, session = broken_db
        session.execute.side_effect = OperationalError(
            "SELECT projects.secret_column FROM projects", {}, Exception("database is locked")
        )

        r = await client.get(f"{API}/projects", headers=auth_headers(portal.ada))

        assert r.status_code == 500
        body = r.json()
        assert body == {"error": "Failed to fetch records", "request_id": r.headers["X-Request-ID"]}
        assert "SELECT" not in r.text
        assert "locked" not in r.text

    @pytest.mark.asyncio
    async def test_unexpected_failure(self, broken_db, auth_headers, portal):
        client, session = broken_db
        session.execute.side_effect = RuntimeError("connection string postgres://secret")

        r = await client.get(f"{API}/dashboard/chart-data", headers=auth_headers(portal.ada))

        assert r.status_code == 500
        assert r.json()["error"] == "Internal server error"
        assert "secret" not in r.text


class TestOpenAPI:
    @pytest.mark.asyncio
    async def test_error_envelope_documented(self, client: AsyncClient):
        r = await client.get("/openapi.json")

        schema = r.json()
        assert "ErrorResponse" in schema["components"]["schemas"]
        responses = schema["paths"]["/api/v1/projects"]["get"]["responses"]
        assert responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")

    @pytest.mark.asyncio
    async def test_detail_routes_described(self, client: AsyncClient):
        paths = (await client.get("/openapi.json")).json()["paths"]

        for path in ("/api/v1/projects/{project_id}", "/api/v1/papers/{paper_id}", "/api/v1/users/{user_id}"):
            assert paths[path]["get"]["description"]
