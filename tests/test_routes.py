"""Tests for the HTTP API."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from lockbox_api.config import Settings
from lockbox_api.main import create_app

SECRET = "JBSWY3DPEHPK3PXP"


class TestHealthEndpoint:

    def test_health_check_returns_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["tracker"]["tracked_lockboxes"] == 0


class TestGenerateTotp:

    def test_get_with_timestamp(self, client):
        response = client.get(
            "/api/generate-totp",
            params={"secretKey": SECRET, "boxId": "box001", "timestamp": 1700000000}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["boxId"] == "box001"
        assert data["totpCode"] == "8648"
        assert data["timeRemaining"] == 40
        assert data["validUntil"].startswith("2023-11-14T22:14:00")
        assert data["timestamp"] == 1700000000
        assert data["message"] == "TOTP code 8648 is valid for 40 more seconds"

    def test_post_body(self, client):
        response = client.post(
            "/api/generate-totp",
            json={"secretKey": SECRET, "timestamp": 1700000040}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totpCode"] == "6952"
        assert data["boxId"] == "unknown"
        assert data["timeRemaining"] == 60

    def test_defaults_to_current_time(self, client):
        with patch("lockbox_api.totp.generator.time.time", return_value=1700000000.0):
            response = client.get("/api/generate-totp", params={"secretKey": SECRET})

        assert response.json()["totpCode"] == "8648"

    def test_missing_secret(self, client):
        response = client.get("/api/generate-totp", params={"boxId": "box001"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["message"] == "Missing secretKey parameter"
        assert "secretKey=" in data["details"]["example"]

    def test_invalid_timestamp(self, client):
        response = client.get(
            "/api/generate-totp",
            params={"secretKey": SECRET, "timestamp": "soon"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_computation_error_is_server_error(self, client):
        response = client.get(
            "/api/generate-totp",
            params={"secretKey": SECRET, "timestamp": -600}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "COMPUTATION_ERROR"

    def test_configured_code_parameters(self):
        settings = Settings(_env_file=None, totp_step_seconds=30, totp_digits=8)
        with TestClient(create_app(settings)) as client:
            response = client.get(
                "/api/generate-totp",
                params={"secretKey": "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "timestamp": 59}
            )

        assert response.json()["totpCode"] == "94287082"

    def test_method_not_allowed(self, client):
        response = client.delete("/api/generate-totp")
        assert response.status_code == 405


class TestLockboxStatus:

    def test_heartbeat_then_status(self, client):
        response = client.post(
            "/api/lockbox-status",
            json={"lockboxId": "0001", "status": "locked", "lockOpen": True, "timestamp": 1700000000}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Heartbeat received successfully",
            "lockboxId": "0001",
            "timeSync": "synchronized",
        }

        response = client.get("/api/lockbox-status", params={"lockboxId": "0001"})

        assert response.status_code == 200
        data = response.json()
        assert data["isOnline"] is True
        assert data["status"] == "locked"
        assert data["lockOpen"] is True
        assert data["timestamp"] == 1700000000
        assert data["lastSeen"] == "2023-11-14T22:13:20.000Z"
        assert data["minutesAgo"] == 0
        assert data["message"] == "Lockbox is online (last seen 0 minutes ago)"
        assert "debug" not in data

    def test_heartbeat_without_timestamp_has_no_time_sync(self, client):
        response = client.post("/api/lockbox-status", json={"lockboxId": "0001"})

        assert response.status_code == 200
        assert "timeSync" not in response.json()

    def test_offline_after_clock_advance(self, client):
        client.post("/api/lockbox-status", json={"lockboxId": "0001"})
        client.clock.advance(16 * 60)

        data = client.get("/api/lockbox-status", params={"lockboxId": "0001"}).json()
        assert data["isOnline"] is False
        assert data["minutesAgo"] == 16
        assert data["message"] == "Lockbox is offline (last seen 16 minutes ago)"

    def test_never_connected(self, client):
        response = client.get("/api/lockbox-status", params={"lockboxId": "0404"})

        assert response.status_code == 200
        assert response.json() == {
            "lockboxId": "0404",
            "isOnline": False,
            "status": "never_connected",
            "lockOpen": False,
            "lastSeen": None,
            "message": "No heartbeat data available for this lockbox",
        }

    def test_heartbeat_missing_id(self, client):
        response = client.post("/api/lockbox-status", json={"status": "locked"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: lockboxId"

    def test_status_missing_id(self, client):
        response = client.get("/api/lockbox-status")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"]["example"] == "/api/lockbox-status?lockboxId=0001"

    def test_heartbeat_without_body(self, client):
        response = client.post("/api/lockbox-status")
        assert response.status_code == 400

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/lockbox-status",
            headers={
                "Origin": "https://dashboard.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            }
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_debug_payloads(self, debug_client):
        response = debug_client.post("/api/lockbox-status", json={"lockboxId": "0001"})
        assert response.json()["debug"]["storedData"]["lockbox_id"] == "0001"

        data = debug_client.get("/api/lockbox-status", params={"lockboxId": "0001"}).json()
        assert data["debug"]["threshold"] == 900000
        assert data["debug"]["storedData"]["status"] == "unknown"
