from railops.main import REQUEST_ID_HEADER


def test_health_reports_fleet_and_provider(api_client):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["trainsCount"] == 10
    assert body["providerEnabled"] is True
    assert body["lastSync"] is not None


def test_health_reports_disabled_provider(api_client, fake_provider):
    fake_provider.enabled = False

    response = api_client.get("/api/health")

    assert response.json()["providerEnabled"] is False


def test_responses_carry_request_id(api_client):
    response = api_client.get("/api/health", headers={REQUEST_ID_HEADER: "abc"})

    assert response.headers[REQUEST_ID_HEADER] == "abc"
