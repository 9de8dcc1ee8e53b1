"""Endpoint tests for analytics, alerts and recommendations."""


def test_analytics_fallback(api_client):
    response = api_client.post("/api/analytics", json={"hub": "New Delhi"})

    assert response.status_code == 200
    body = response.json()
    assert body["performanceTrends"]["onTimePercentage"] == 65
    assert len(body["scheduleAnalysis"]) == 10


def test_analytics_is_cached_per_hub(api_client, fake_provider):
    api_client.post("/api/analytics", json={"hub": "Delhi"})
    second = api_client.post("/api/analytics", json={"hub": "Delhi"})
    api_client.post("/api/analytics", json={"hub": "Mumbai"})

    assert second.headers["X-Cache-Status"] == "hit"
    assert len(fake_provider.calls_for("analytics")) == 2


def test_analytics_requires_hub(api_client):
    response = api_client.post("/api/analytics", json={"hub": "  "})

    assert response.status_code == 400


def test_alerts_default_page_size(api_client):
    response = api_client.post("/api/alerts", json={"hub": "Pune"})

    assert response.status_code == 200
    body = response.json()
    assert len(body["alerts"]) == 4
    assert body["pagination"] == {
        "totalAlerts": 10,
        "currentPage": 1,
        "pageSize": 4,
        "totalPages": 3,
    }
    assert body["alerts"][0]["section"] == "Pune-Agra"


def test_alerts_from_provider(api_client, fake_provider):
    fake_provider.script(
        "alerts",
        "```json\n"
        '[{"id": "a1", "title": "Fog", "description": "Low visibility",'
        ' "severity": "warning", "time": "1 min ago", "section": "Delhi-Agra"}]'
        "\n```",
    )

    response = api_client.post("/api/alerts", json={"hub": "Delhi", "pageSize": 10})

    body = response.json()
    assert [alert["id"] for alert in body["alerts"]] == ["a1"]
    assert body["pagination"]["totalPages"] == 1


def test_alerts_reject_bad_pagination(api_client):
    response = api_client.post("/api/alerts", json={"hub": "Delhi", "page": "x"})

    assert response.status_code == 400


def test_recommendations(api_client, fake_provider):
    fake_provider.script(
        "recommendations",
        [
            {
                "type": "platform",
                "title": "Move 12951",
                "description": "Use platform 4",
                "confidence": 80,
                "estimatedImprovement": "5 min",
                "trainAffected": "12951",
                "timeWindow": "next 30 min",
            }
        ],
    )

    response = api_client.get("/api/recommendations")

    assert response.status_code == 200
    (recommendation,) = response.json()
    assert recommendation["id"]
    assert recommendation["trainAffected"] == "12951"


def test_recommendations_fallback_is_empty_list(api_client):
    response = api_client.get("/api/recommendations")

    assert response.status_code == 200
    assert response.json() == []
