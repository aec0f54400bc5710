"""Root banner and health check."""


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body


async def test_service_banner_lists_endpoints(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["tasks"] == "/api/v1/tasks"


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/api/v1/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "message": "Not Found"}
