from decimal import Decimal


def test_featured_services_are_capped(client, make_service):
    for i in range(8):
        make_service(name=f"Service {i}")

    assert len(client.get("/services").json()) == 6
    assert len(client.get("/services-all").json()) == 8


def test_read_service(client, make_service):
    service = make_service(name="Wedding Stage", price="1500.00")

    res = client.get(f"/services/{service.id}")
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Wedding Stage"
    assert body["category"] == "wedding"
    assert Decimal(body["price"]) == Decimal("1500.00")


def test_empty_catalog(client):
    assert client.get("/services").json() == []
    assert client.get("/decorators").json() == []
    assert client.get("/top-decorators").json() == []
