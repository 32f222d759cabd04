# tests/v1/test_system_api.py
from __future__ import annotations

from fastapi.testclient import TestClient


def test_store_metrics_reflect_traffic(client: TestClient, fake_store, alice) -> None:
    fresh = client.get("/api/v1/system/store/metrics").json()
    assert fresh["request_count"] == 0

    client.get("/api/v1/users/u1")
    client.get("/api/v1/users/ghost")

    metrics = client.get("/api/v1/system/store/metrics").json()
    assert metrics["request_count"] == 2
    assert metrics["failure_count"] == 1
    assert metrics["failures"] == {"http_404": 1}
    assert metrics["requests_by_collection"] == {"users": 2}
