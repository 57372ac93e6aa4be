"""Evidence Integrity - API Endpoint Tests"""

from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from core.database import Evidence


async def _collect(client: AsyncClient, headers: dict, evidence: dict) -> dict:
    response = await client.post("/api/v1/evidence/collect", json=evidence, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestAuthentication:
    """Every evidence route requires an actor."""

    async def test_collect_requires_token(self, client: AsyncClient, youtube_evidence):
        response = await client.post("/api/v1/evidence/collect", json=youtube_evidence)
        assert response.status_code == 401

    async def test_invalid_token_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": str(uuid4())},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401


@pytest.mark.asyncio
class TestEvidenceEndpoints:
    """Collection, verification and the audit trail over HTTP."""

    async def test_collect(self, client: AsyncClient, auth_headers, youtube_evidence):
        data = await _collect(client, auth_headers, youtube_evidence)
        assert data["success"] is True
        assert data["algorithm"] == "SHA-256"
        assert len(data["hash"]) == 64

    async def test_collect_attributes_actor(self, client: AsyncClient, auth_headers, youtube_evidence, actor):
        data = await _collect(client, auth_headers, youtube_evidence)
        response = await client.get(f"/api/v1/evidence/{data['evidence_id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["collected_by"] == actor
        assert response.json()["status"] == "collected"

    async def test_collect_rejects_unknown_fields(self, client: AsyncClient, auth_headers, youtube_evidence):
        response = await client.post(
            "/api/v1/evidence/collect",
            json={**youtube_evidence, "hash": "0" * 64},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "validation"

    async def test_collect_rejects_unknown_platform(self, client: AsyncClient, auth_headers, youtube_evidence):
        response = await client.post(
            "/api/v1/evidence/collect",
            json={**youtube_evidence, "platform": "myspace"},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "validation"

    async def test_verify_untouched_evidence(self, client: AsyncClient, auth_headers, youtube_evidence):
        collected = await _collect(client, auth_headers, youtube_evidence)

        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": collected["evidence_id"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["original_hash"] == collected["hash"]
        assert data["current_hash"] == collected["hash"]
        assert data["discrepancies"] is None
        assert data["status"] == "verified"

    async def test_verify_tampered_evidence(
        self, client: AsyncClient, db_session, auth_headers, youtube_evidence
    ):
        collected = await _collect(client, auth_headers, youtube_evidence)
        await db_session.execute(
            update(Evidence)
            .where(Evidence.id == UUID(collected["evidence_id"]))
            .values(url="https://youtu.be/zzzzzzzzzzz")
        )
        await db_session.commit()

        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": collected["evidence_id"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["original_hash"] == collected["hash"]
        assert data["current_hash"] != collected["hash"]
        assert data["discrepancies"]["hash"] == "Hash mismatch"
        assert data["status"] == "tampered"

    async def test_verify_unknown_evidence(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": str(uuid4())},
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "not_found"

    async def test_verify_without_baseline(self, client: AsyncClient, ledger, auth_headers, youtube_evidence, actor):
        from core.models import EvidenceDraft

        record = await ledger.insert_evidence(EvidenceDraft(collected_by=actor, **youtube_evidence))

        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": str(record.id)},
            headers=auth_headers,
        )
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["kind"] == "missing_baseline"
        assert error["message"] == "Original hash not found"

    async def test_verify_malformed_id(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/evidence/verify",
            json={"evidence_id": "not-a-uuid"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    async def test_verification_history(self, client: AsyncClient, auth_headers, youtube_evidence, actor):
        collected = await _collect(client, auth_headers, youtube_evidence)
        for _ in range(2):
            await client.post(
                "/api/v1/evidence/verify",
                json={"evidence_id": collected["evidence_id"]},
                headers=auth_headers,
            )

        response = await client.get(
            f"/api/v1/evidence/{collected['evidence_id']}/verifications",
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_entries"] == 2
        assert all(entry["is_valid"] for entry in data["entries"])
        assert all(entry["verified_by"] == actor for entry in data["entries"])

    async def test_fingerprints(self, client: AsyncClient, auth_headers, youtube_evidence):
        collected = await _collect(client, auth_headers, youtube_evidence)
        response = await client.get(
            f"/api/v1/evidence/{collected['evidence_id']}/fingerprints",
            headers=auth_headers,
        )
        assert response.status_code == 200
        fingerprints = response.json()
        assert len(fingerprints) == 1
        assert fingerprints[0]["hash_value"] == collected["hash"]
        assert fingerprints[0]["hash_type"] == "content"

    async def test_get_unknown_evidence(self, client: AsyncClient, auth_headers):
        response = await client.get(f"/api/v1/evidence/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404


@pytest.mark.asyncio
class TestComparisonEndpoints:
    """Multi-video comparison over HTTP."""

    async def test_compare_same_video(self, client: AsyncClient, auth_headers, actor):
        response = await client.post(
            "/api/v1/comparisons",
            json={
                "comparison_name": "reupload",
                "video_urls": [
                    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                    "https://youtu.be/dQw4w9WgXcQ",
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["result"]["same_video"] is True
        assert data["result"]["unique_video_ids"] == ["dQw4w9WgXcQ"]
        assert data["result"]["created_by"] == actor

        fetched = await client.get(f"/api/v1/comparisons/{data['comparison_id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["result"] == data["result"]

    async def test_compare_requires_two_valid_urls(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/comparisons",
            json={
                "comparison_name": "bad",
                "video_urls": ["https://youtu.be/dQw4w9WgXcQ", "https://vimeo.com/1"],
            },
            headers=auth_headers,
        )
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["kind"] == "insufficient_input"
        assert error["message"] == "Invalid YouTube URLs provided"

    async def test_compare_single_url(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/comparisons",
            json={"comparison_name": "one", "video_urls": ["https://youtu.be/dQw4w9WgXcQ"]},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "insufficient_input"

    async def test_get_unknown_comparison(self, client: AsyncClient, auth_headers):
        response = await client.get(f"/api/v1/comparisons/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404
