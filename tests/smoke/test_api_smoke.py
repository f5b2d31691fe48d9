"""Smoke tests for Ballot Compass API endpoints.

Smoke tests verify that all API endpoints are accessible and return expected status codes.
They run through a logical workflow from taxonomy listing to cache clearing.
"""

from fastapi.testclient import TestClient


def test_api_smoke_workflow(client: TestClient, recommendation_service):
    """
    Complete smoke test workflow running all endpoints in logical order.

    Workflow:
    1. Health check
    2. List issue taxonomy
    3. Request recommendations for a San Francisco ZIP
    4. Repeat the request with reordered priorities → served from cache
    5. Request recommendations for an unknown ZIP → fallback measures
    6. Submit a malformed request → 400
    7. Clear the cache
    """

    print("\n[SMOKE] Step 1: Health check...")
    health = client.get("/health")
    assert health.status_code == 200, f"Health failed: {health.text}"

    print("[SMOKE] Step 2: Listing issues...")
    issues_response = client.get("/api/v1/recommendations/issues")
    assert issues_response.status_code == 200, f"List issues failed: {issues_response.text}"
    issues = issues_response.json()
    print(f"[SMOKE] ✓ Found {len(issues)} issue(s)")
    assert len(issues) > 0

    print("[SMOKE] Step 3: Requesting recommendations...")
    priorities = ["I want lower taxes", "Better public schools", "Fix the roads"]
    first = client.post(
        "/api/v1/recommendations",
        json={"priorities": priorities, "zip_code": "94110", "mode": "current"},
    )
    assert first.status_code == 200, f"Recommendations failed: {first.text}"
    first_data = first.json()
    assert first_data["error"] is None
    assert first_data["candidates"], "Expected at least one candidate"
    assert not any(m["is_fallback"] for m in first_data["ballot_measures"])
    print(f"[SMOKE] ✓ {len(first_data['candidates'])} candidates, {len(first_data['ballot_measures'])} measures")

    print("[SMOKE] Step 4: Repeating request with reordered priorities...")
    second = client.post(
        "/api/v1/recommendations",
        json={"priorities": list(reversed(priorities)), "zip_code": "94110"},
    )
    assert second.status_code == 200
    assert second.json()["candidates"] == first_data["candidates"]
    assert len(recommendation_service.cache) == 1
    print("[SMOKE] ✓ Served from cache")

    print("[SMOKE] Step 5: Requesting recommendations for unknown ZIP...")
    fallback = client.post(
        "/api/v1/recommendations",
        json={"priorities": priorities, "zip_code": "00000"},
    )
    assert fallback.status_code == 200
    assert all(m["is_fallback"] for m in fallback.json()["ballot_measures"])
    print("[SMOKE] ✓ Fallback measures returned")

    print("[SMOKE] Step 6: Submitting malformed request...")
    malformed = client.post("/api/v1/recommendations", json={"priorities": [], "zip_code": "94110"})
    assert malformed.status_code == 400

    print("[SMOKE] Step 7: Clearing cache...")
    cleared = client.delete("/api/v1/recommendations/cache")
    assert cleared.status_code == 200
    assert cleared.json() == {"cleared": 2}
    print("[SMOKE] ✓ Smoke workflow complete")
