from decimal import Decimal

import pytest

from styledecor.models import BookingStatus, Decorator, DecoratorStatus, UserRole


@pytest.fixture
def deco_headers(make_user, auth):
    make_user("deco@x.com", role=UserRole.DECORATOR)
    return auth("deco@x.com")


def test_public_directory(client, make_decorator):
    for i in range(6):
        make_decorator(email=f"d{i}@x.com", name=f"D{i}")
    make_decorator(email="busy@x.com", name="Busy", status=DecoratorStatus.BUSY)

    assert len(client.get("/top-decorators").json()) == 5
    available = client.get("/decorators").json()
    assert len(available) == 6
    assert all(d["status"] == "available" for d in available)
    assert len(client.get("/decorators-all").json()) == 7


def test_decorator_marks_ongoing_then_completed(client, deco_headers, make_booking, make_decorator, Session):
    decorator = make_decorator(status=DecoratorStatus.ASSIGNED)
    booking = make_booking(status=BookingStatus.ASSIGNED, decorator=decorator)

    res = client.patch(
        f"/decorator/projects/status/{booking.id}", json={"status": "ongoing"}, headers=deco_headers
    )
    assert res.status_code == 200
    assert res.json()["booking"]["status"] == "ongoing"
    assert res.json()["decorator"]["status"] == "busy"

    res = client.patch(
        f"/decorator/projects/status/{booking.id}", json={"status": "completed"}, headers=deco_headers
    )
    assert res.status_code == 200
    assert res.json()["booking"]["status"] == "completed"

    db = Session()
    assert db.get(Decorator, decorator.id).status == DecoratorStatus.AVAILABLE
    db.close()


def test_decorator_cannot_touch_others_projects(client, deco_headers, make_booking, make_decorator):
    other = make_decorator(email="other@x.com", name="Other")
    booking = make_booking(status=BookingStatus.ASSIGNED, decorator=other)

    res = client.patch(
        f"/decorator/projects/status/{booking.id}", json={"status": "ongoing"}, headers=deco_headers
    )
    assert res.status_code == 403


def test_invalid_project_status_values(client, deco_headers, make_booking, make_decorator):
    booking = make_booking(status=BookingStatus.ASSIGNED, decorator=make_decorator())

    res = client.patch(
        f"/decorator/projects/status/{booking.id}", json={"status": "cancelled"}, headers=deco_headers
    )
    assert res.status_code == 422

    res = client.patch(
        f"/decorator/projects/status/{booking.id}", json={"status": "done"}, headers=deco_headers
    )
    assert res.status_code == 422

    res = client.patch("/decorator/projects/status/999", json={"status": "ongoing"}, headers=deco_headers)
    assert res.status_code == 404


def test_projects_are_scoped_to_caller(client, deco_headers, make_booking, make_decorator):
    mine = make_booking(status=BookingStatus.ASSIGNED, decorator=make_decorator())
    make_booking(status=BookingStatus.ASSIGNED, decorator=make_decorator(email="other@x.com", name="Other"))
    make_booking()

    res = client.get("/decorator/projects", headers=deco_headers)
    assert [b["id"] for b in res.json()] == [mine.id]

    res = client.get("/decorator/projects", params={"email": "other@x.com"}, headers=deco_headers)
    assert res.status_code == 403


def test_earnings_and_stats(client, deco_headers, make_booking, make_decorator):
    decorator = make_decorator()
    make_booking(status=BookingStatus.COMPLETED, decorator=decorator, price="100.00")
    make_booking(status=BookingStatus.COMPLETED, decorator=decorator, price="200.00")
    make_booking(status=BookingStatus.ONGOING, decorator=decorator, price="500.00")
    make_booking(status=BookingStatus.ASSIGNED, decorator=decorator, price="80.00")

    earnings = client.get("/decorator/earnings", headers=deco_headers).json()
    assert Decimal(earnings["total_platform_revenue"]) == Decimal("90.00")
    assert Decimal(earnings["total_decorator_earn"]) == Decimal("210.00")
    assert earnings["total_completed"] == 2
    assert sorted(Decimal(e["decorator_earn"]) for e in earnings["earnings"]) == [Decimal("70.00"), Decimal("140.00")]

    stats = client.get("/decorator/stats", headers=deco_headers).json()
    assert stats["assigned"] == 1
    assert stats["ongoing"] == 1
    assert stats["completed_bookings"] == 2
    assert Decimal(stats["earnings"]) == Decimal("210.00")
