"""Endpoint tests for train listing and route options."""

from railops.services.seed_data import SEED_TRAIN_IDS


def test_list_trains_paginates_seed_fleet(api_client):
    response = api_client.post(
        "/api/trains", json={"hub": "New Delhi", "page": 2, "pageSize": 3}
    )

    assert response.status_code == 200
    body = response.json()
    assert [train["id"] for train in body["trains"]] == list(SEED_TRAIN_IDS[3:6])
    assert body["pagination"] == {
        "totalTrains": 10,
        "currentPage": 2,
        "pageSize": 3,
        "totalPages": 4,
    }


def test_list_trains_defaults(api_client):
    response = api_client.post("/api/trains", json={"hub": "New Delhi"})

    body = response.json()
    assert body["pagination"]["currentPage"] == 1
    assert body["pagination"]["pageSize"] == 3
    assert len(body["trains"]) == 3


def test_second_identical_request_is_served_from_cache(api_client, fake_provider):
    request = {"hub": "NewDelhi", "page": 2, "pageSize": 3}

    first = api_client.post("/api/trains", json=request)
    second = api_client.post("/api/trains", json=request)

    assert first.headers["X-Cache-Status"] == "miss"
    assert second.headers["X-Cache-Status"] == "hit"
    assert second.content == first.content
    assert len(fake_provider.calls_for("sync")) == 1
    assert first.json()["pagination"] == {
        "totalTrains": 10,
        "currentPage": 2,
        "pageSize": 3,
        "totalPages": 4,
    }


def test_string_pagination_hits_same_entry(api_client, fake_provider):
    api_client.post("/api/trains", json={"hub": "Delhi", "page": 2, "pageSize": 3})
    response = api_client.post(
        "/api/trains", json={"hub": "Delhi", "page": "2", "pageSize": "3"}
    )

    assert response.headers["X-Cache-Status"] == "hit"
    assert len(fake_provider.calls_for("sync")) == 1


def test_cached_listing_is_not_altered_by_later_updates(api_client, fake_provider):
    request = {"hub": "Delhi", "page": 1, "pageSize": 1}
    first = api_client.post("/api/trains", json=request)

    api_client.post("/api/trains/toggle-speed", json={"trainId": "12055", "action": "hold"})
    second = api_client.post("/api/trains", json=request)

    assert second.json() == first.json()
    assert second.json()["trains"][0]["speed"] == 110


def test_list_trains_requires_hub(api_client):
    response = api_client.post("/api/trains", json={"page": 1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required parameter: hub is required."


def test_list_trains_without_body(api_client):
    response = api_client.post("/api/trains")

    assert response.status_code == 400


def test_list_trains_rejects_non_object_body(api_client):
    for body in ([{"hub": "Delhi"}], "Delhi", 42):
        response = api_client.post("/api/trains", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Request body must be a JSON object."


def test_list_trains_rejects_invalid_json(api_client):
    response = api_client.post(
        "/api/trains",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Request body must be valid JSON."
    assert "X-Request-Id" in response.headers


def test_list_trains_rejects_bad_pagination(api_client):
    for params in ({"page": 0}, {"pageSize": "abc"}, {"page": -2}):
        response = api_client.post("/api/trains", json={"hub": "Delhi", **params})

        assert response.status_code == 400
        assert "positive integers" in response.json()["detail"]


def test_route_options_fallback(api_client):
    response = api_client.post(
        "/api/trains/routes", json={"trainId": "12309", "hub": "New Delhi"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["currentRoute"]["stations"][-1] == "Patna"
    assert body["alternateRoutes"][0]["estimatedTime"] == "6h 30m"
    assert response.headers["X-Cache-Status"] == "miss"


def test_route_options_are_cached_per_train(api_client, fake_provider):
    api_client.post("/api/trains/routes", json={"trainId": "12309", "hub": "Delhi"})
    api_client.post("/api/trains/routes", json={"trainId": "12309", "hub": "Delhi"})
    api_client.post("/api/trains/routes", json={"trainId": "12055", "hub": "Delhi"})

    assert len(fake_provider.calls_for("routes")) == 2


def test_route_options_unknown_train(api_client):
    response = api_client.post(
        "/api/trains/routes", json={"trainId": "does-not-exist", "hub": "Delhi"}
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Train 'does-not-exist' not found"


def test_route_options_missing_params(api_client):
    assert api_client.post("/api/trains/routes", json={"hub": "Delhi"}).status_code == 400
    assert (
        api_client.post("/api/trains/routes", json={"trainId": "12055"}).status_code
        == 400
    )
