# capital_marketplace/tests/test_routes.py
"""HTTP-level tests through FastAPI TestClient"""
import uuid
from pathlib import Path

from fastapi.testclient import TestClient

from capital_marketplace.main import create_app
from capital_marketplace.middleware.rate_limit import RateLimitMiddleware

PDF = b"%PDF-1.4 sample"


class TestHealthEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["status"] == "up"

    def test_ready_and_live(self, client):
        assert client.get("/ready").json()["status"] == "ready"
        assert client.get("/live").json()["status"] == "alive"

    def test_api_status_counts(self, client, onboarded):
        body = client.get("/api/status").json()
        assert body["metrics"]["companies"] == 1
        assert body["metrics"]["notifications"] == 1

    def test_request_id_header(self, client):
        response = client.get("/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestCompanyEndpoints:

    def test_create_returns_envelope(self, onboarded):
        assert onboarded["name"] == "Acme Robotics"
        assert onboarded["kycVerified"] is False

    def test_duplicate_company_conflict(self, client, onboarded):
        response = client.post("/api/company", json={
            "name": "Another",
            "sector": "Finance",
            "targetRaise": 100,
            "revenue": 0,
            "email": "founder@acme.io",
        })
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "User already has a company registered"
        assert body["code"] == "CONFLICT"

    def test_validation_failure(self, client):
        response = client.post("/api/company", json={"name": "", "sector": "Crypto", "targetRaise": -5})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        fields = {d["field"] for d in body["details"]}
        assert {"name", "sector", "targetRaise"} <= fields

    def test_get_by_id_requires_owner_email(self, client, onboarded):
        url = f"/api/company/{onboarded['id']}"
        assert client.get(url, params={"email": "founder@acme.io"}).status_code == 200
        assert client.get(url, params={"email": "someone@else.io"}).status_code == 404

    def test_get_by_email(self, client, onboarded):
        response = client.get("/api/company/by-email/founder@acme.io")
        assert response.json()["data"]["id"] == onboarded["id"]

    def test_update_revenue_changes_score(self, client, onboarded):
        company_id = onboarded["id"]
        assert client.get(f"/api/score/{company_id}").json()["data"]["breakdown"]["revenueScore"] == 13

        response = client.put(f"/api/company/{company_id}", json={"revenue": 2_000_000})
        assert response.status_code == 200
        assert client.get(f"/api/score/{company_id}").json()["data"]["breakdown"]["revenueScore"] == 25

    def test_invalid_uuid(self, client):
        response = client.get("/api/score/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestOnboardingFlow:

    def test_full_flow_reaches_max_score(self, client, onboarded):
        company_id = onboarded["id"]

        response = client.post("/api/kyc/verify", json={"companyId": company_id, "mockVerify": True})
        assert response.json()["data"] == {"success": True, "verified": True}

        response = client.post("/api/financials/link", json={"companyId": company_id, "plaidToken": "public-token"})
        assert response.json()["data"] == {"success": True, "linked": True}

        for i in range(5):
            response = client.post(
                f"/api/files/{company_id}",
                files={"file": (f"doc {i}.pdf", PDF, "application/pdf")},
                data={"category": "pitch-deck"},
            )
            assert response.status_code == 201

        client.put(f"/api/company/{company_id}", json={"revenue": 1_000_000})

        score = client.get(f"/api/score/{company_id}").json()["data"]
        assert score == {
            "score": 100,
            "breakdown": {
                "kycVerified": 30,
                "financialsLinked": 20,
                "documentsUploaded": 25,
                "revenueScore": 25,
            },
        }
        assert client.get(f"/api/score/{company_id}/recommendations").json()["data"] == []

    def test_kyc_twice_is_already_done(self, client, onboarded):
        payload = {"companyId": onboarded["id"], "mockVerify": True}
        client.post("/api/kyc/verify", json=payload)

        response = client.post("/api/kyc/verify", json=payload)
        assert response.status_code == 400
        assert response.json()["code"] == "ALREADY_DONE"

        unread = client.get(f"/api/notifications/{onboarded['userId']}/unread-count").json()["data"]
        # Welcome + one KYC notification
        assert unread == {"count": 2}

    def test_kyc_unknown_company(self, client):
        response = client.post("/api/kyc/verify", json={"companyId": str(uuid.uuid4()), "mockVerify": True})
        assert response.status_code == 404
        assert response.json()["error"] == "Company not found"

    def test_unlink_financials(self, client, onboarded):
        company_id = onboarded["id"]
        assert client.delete(f"/api/financials/link/{company_id}").status_code == 400

        client.post("/api/financials/link", json={"companyId": company_id, "plaidToken": "tok"})
        assert client.get(f"/api/financials/status/{company_id}").json()["data"]["linked"] is True
        assert client.get(f"/api/financials/summary/{company_id}").status_code == 200

        assert client.delete(f"/api/financials/link/{company_id}").status_code == 200
        assert client.get(f"/api/score/{company_id}").json()["data"]["breakdown"]["financialsLinked"] == 0


class TestFileEndpoints:

    def upload(self, client, company_id, name="deck.pdf", content_type="application/pdf", content=PDF):
        return client.post(
            f"/api/files/{company_id}",
            files={"file": (name, content, content_type)},
        )

    def test_upload_list_download_delete(self, client, onboarded):
        company_id = onboarded["id"]
        document = self.upload(client, company_id).json()["data"]
        assert document["category"] == "other"

        listed = client.get(f"/api/files/{company_id}").json()["data"]
        assert [d["id"] for d in listed] == [document["id"]]

        meta = client.get(f"/api/files/{company_id}/{document['id']}").json()["data"]
        assert meta["name"] == "deck.pdf"

        download = client.get(f"/api/files/{company_id}/{document['id']}/download")
        assert download.status_code == 200
        assert download.content == PDF
        assert 'filename="deck.pdf"' in download.headers["content-disposition"]

        stats = client.get(f"/api/files/{company_id}/stats").json()["data"]
        assert stats["totalFiles"] == 1

        assert client.delete(f"/api/files/{company_id}/{document['id']}").status_code == 200
        assert client.get(f"/api/files/{company_id}/{document['id']}").status_code == 404

    def test_disallowed_type(self, client, onboarded):
        response = self.upload(
            client,
            onboarded["id"],
            name="run.exe",
            content_type="application/x-msdownload",
            content=b"MZ" + b"\x90" * 64,
        )
        assert response.status_code == 400
        assert "not allowed" in response.json()["error"]

    def test_cleanup_orphans(self, client, onboarded, settings):
        company_id = onboarded["id"]
        document = self.upload(client, company_id).json()["data"]
        for path in (Path(settings.upload_dir) / company_id).iterdir():
            path.unlink()

        response = client.post(f"/api/files/{company_id}/cleanup")

        assert response.json()["data"] == {"checked": 1, "deleted": 1}
        assert client.get(f"/api/files/{company_id}/{document['id']}").status_code == 404

    def test_missing_file(self, client, onboarded):
        response = client.post(f"/api/files/{onboarded['id']}", data={"category": "other"})
        assert response.status_code == 400


class TestScoreEndpoints:

    def test_breakdown_includes_history_and_company_info(self, client, onboarded):
        company_id = onboarded["id"]
        client.post("/api/kyc/verify", json={"companyId": company_id, "mockVerify": True})

        data = client.get(f"/api/score/{company_id}/breakdown").json()["data"]

        assert data["score"]["score"] == 43  # 30 + 13
        assert data["companyInfo"]["documentCount"] == 0
        assert data["companyInfo"]["kycVerified"] is True
        assert [h["event"] for h in data["history"]] == ["kyc_verified"]
        assert data["history"][0]["date"].endswith("Z")
        assert len(data["recommendations"]) == 3

    def test_recalculate_runs_handlers(self, app, client, onboarded):
        calls = []
        app.state.score_change_handlers.append(lambda company_id, score: calls.append(score.score))

        response = client.post(f"/api/score/{onboarded['id']}/recalculate")

        assert response.json()["data"]["score"] == 13
        assert calls == [13]

    def test_unknown_company(self, client):
        response = client.get(f"/api/score/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestNotificationEndpoints:

    def test_list_and_mark_read(self, client, onboarded):
        user_id = onboarded["userId"]
        body = client.get(f"/api/notifications/{user_id}").json()["data"]
        assert body["totalCount"] == 1
        assert body["unreadCount"] == 1
        notification_id = body["notifications"][0]["id"]

        assert client.put(f"/api/notifications/{user_id}/{notification_id}/read").status_code == 200
        assert client.get(f"/api/notifications/{user_id}/unread-count").json()["data"]["count"] == 0

    def test_create_and_read_all(self, client, onboarded):
        user_id = onboarded["userId"]
        response = client.post(f"/api/notifications/{user_id}", json={"type": "warning", "message": "Check this"})
        assert response.status_code == 201

        marked = client.put(f"/api/notifications/{user_id}/read-all").json()["data"]
        assert marked == {"success": True, "markedCount": 2}

    def test_invalid_type(self, client, onboarded):
        response = client.post(f"/api/notifications/{onboarded['userId']}", json={"type": "urgent", "message": "x"})
        assert response.status_code == 400

    def test_cleanup_and_delete(self, client, onboarded):
        user_id = onboarded["userId"]
        notification_id = client.get(f"/api/notifications/{user_id}").json()["data"]["notifications"][0]["id"]

        # Fresh notifications survive cleanup
        assert client.delete(f"/api/notifications/{user_id}/cleanup").json()["data"] == {"deletedCount": 0}

        assert client.delete(f"/api/notifications/{user_id}/{notification_id}").status_code == 200
        assert client.get(f"/api/notifications/{user_id}").json()["data"]["totalCount"] == 0

    def test_unknown_user(self, client):
        assert client.get(f"/api/notifications/{uuid.uuid4()}").status_code == 404


class TestRateLimit:

    def test_excess_requests_rejected(self, settings, database):
        settings = settings.model_copy(update={"rate_limit_enabled": True, "rate_limit_max": 3})
        app = create_app(settings=settings, database=database)

        with TestClient(app) as client:
            responses = [client.get("/live") for _ in range(4)]

        assert [r.status_code for r in responses] == [200, 200, 200, 429]
        body = responses[-1].json()
        assert body["code"] == "RATE_LIMIT_EXCEEDED"
        assert body["retryAfter"] >= 1
        assert "details" not in body
        assert responses[-1].headers["Retry-After"] == str(body["retryAfter"])

    def test_idle_clients_forgotten(self):
        limiter = RateLimitMiddleware(app=None, max_requests=5, window_seconds=60)
        limiter.request_log = {"10.0.0.1": [100.0], "10.0.0.2": [200.0], "10.0.0.3": []}

        limiter._prune(cutoff=150.0)

        assert limiter.request_log == {"10.0.0.2": [200.0]}
