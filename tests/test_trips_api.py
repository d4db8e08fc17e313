"""
Trip API tests through the FastAPI app.

Run with: pytest tests/test_trips_api.py -v
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from fleet_ledger.Core.config import settings
from fleet_ledger.Repositories import expense as expense_repo
from fleet_ledger.Schemas.expense import Ad_create, Maintenance_create

from conftest import auth_headers


def create(client, headers, payload, **overrides):
    body = dict(payload)
    body.update(overrides)
    response = client.post("/trips", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def list_ids(client, headers, **params):
    response = client.get("/trips", headers=headers, params=params)
    assert response.status_code == 200, response.text
    return [row["id"] for row in response.json()["rows"]]


# ==================== AUTHENTICATION ====================

class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/trips")
        assert response.status_code == 401
        assert response.json() == {"message": "No token provided"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert "message" in response.json()

    def test_invalid_token(self, client):
        response = client.get("/trips", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token(self, client):
        token = jwt.encode(
            {"sub": "admin-1", "role": "admin", "exp": datetime.now(timezone.utc) - timedelta(minutes=5)},
            "test-secret",
            algorithm="HS256"
        )
        response = client.get("/trips", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_unknown_role(self, client):
        response = client.get("/trips", headers=auth_headers("x", "dispatcher"))
        assert response.status_code == 403
        assert response.json()["message"] == "Unknown role"

    def test_api_prefix_mount(self, client, admin_headers):
        response = client.get("/api/trips", headers=admin_headers)
        assert response.status_code == 200


# ==================== CREATE ====================

class TestCreateTrip:

    def test_admin_create_attaches_snapshots(self, client, admin_headers, trip_payload, driver_a, vehicle):
        trip = create(client, admin_headers, trip_payload, driverId=driver_a.id, vehicleId=vehicle.id)

        assert trip["createdBy"] == "admin-1"
        assert trip["createdByRole"] == "admin"
        assert trip["driverId"] == driver_a.id
        assert trip["driverName"] == "Ravi Kumar"
        assert trip["driverNumber"] == "9000000001"
        assert trip["vehicleType"] == "Innova"
        assert trip["vehicleNumber"] == "KA-01-AB-1234"
        assert trip["isDriverDeleted"] is False
        assert trip["fuelAmount"] == "1200"

    def test_driver_create_is_self_assigned(self, client, driver_a_headers, trip_payload, driver_a, driver_b, vehicle):
        trip = create(client, driver_a_headers, trip_payload, driverId=driver_b.id, vehicleId=vehicle.id)

        assert trip["driverId"] == driver_a.id
        assert trip["createdBy"] == driver_a.id
        assert trip["createdByRole"] == "driver"
        assert trip["vehicleNumber"] == "KA-01-AB-1234"
        assert trip["driverName"] is None

    def test_authorship_in_payload_ignored(self, client, driver_a_headers, trip_payload, driver_a):
        trip = create(client, driver_a_headers, trip_payload, createdBy="someone", createdByRole="admin")

        assert trip["createdBy"] == driver_a.id
        assert trip["createdByRole"] == "driver"

    def test_unknown_vehicle_persists_nothing(self, client, admin_headers, trip_payload, driver_a):
        response = client.post(
            "/trips",
            json={**trip_payload, "driverId": driver_a.id, "vehicleId": "missing"},
            headers=admin_headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Vehicle not found"
        assert client.get("/trips", headers=admin_headers).json()["total"] == 0

    def test_unknown_driver(self, client, admin_headers, trip_payload):
        response = client.post("/trips", json={**trip_payload, "driverId": "missing"}, headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Driver not found"

    def test_missing_locations_rejected(self, client, admin_headers, trip_payload):
        body = {key: value for key, value in trip_payload.items() if key != "fromLocation"}

        response = client.post("/trips", json=body, headers=admin_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation failed"
        assert {"fromLocation"} <= {error["field"] for error in data["errors"]}

    def test_negative_amount_rejected(self, client, admin_headers, trip_payload):
        response = client.post("/trips", json={**trip_payload, "tripAmount": -5}, headers=admin_headers)
        assert response.status_code == 400

    def test_numeric_fuel_stored_as_text(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload, fuelAmount=850)
        assert trip["fuelAmount"] == "850"


# ==================== LIST & GET ====================

class TestListTrips:

    def test_envelope(self, client, admin_headers, trip_payload):
        create(client, admin_headers, trip_payload)
        create(client, admin_headers, trip_payload)

        data = client.get("/trips", headers=admin_headers).json()

        assert data["total"] == 2
        assert data["page"] == 1
        assert data["limit"] == 2
        assert len(data["rows"]) == 2

    def test_driver_sees_only_own_trips(self, client, admin_headers, driver_a_headers, driver_b_headers, trip_payload, driver_a, driver_b):
        mine = create(client, driver_a_headers, trip_payload)
        create(client, driver_b_headers, trip_payload)
        assigned = create(client, admin_headers, trip_payload, driverId=driver_a.id)

        assert sorted(list_ids(client, driver_a_headers)) == sorted([mine["id"], assigned["id"]])

    def test_driver_cannot_widen_scope(self, client, driver_a_headers, driver_b_headers, trip_payload, driver_b):
        create(client, driver_b_headers, trip_payload)

        assert list_ids(client, driver_a_headers, driverId=driver_b.id) == []

    def test_sort_ascending_and_descending(self, client, admin_headers, trip_payload):
        low = create(client, admin_headers, trip_payload, tripAmount=100)
        high = create(client, admin_headers, trip_payload, tripAmount=900)

        assert list_ids(client, admin_headers, sort="tripAmount") == [low["id"], high["id"]]
        assert list_ids(client, admin_headers, sort="-tripAmount") == [high["id"], low["id"]]

    def test_invalid_sort_field(self, client, admin_headers):
        response = client.get("/trips", headers=admin_headers, params={"sort": "-password"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "sort"

    def test_filters(self, client, admin_headers, trip_payload, vehicle):
        cash = create(client, admin_headers, trip_payload, paymentMode="cash", vehicleId=vehicle.id)
        create(client, admin_headers, trip_payload, paymentMode="upi", startDate="2024-01-01T00:00:00")

        assert list_ids(client, admin_headers, paymentMode="cash") == [cash["id"]]
        assert list_ids(client, admin_headers, vehicleId=vehicle.id) == [cash["id"]]
        assert list_ids(client, admin_headers, startFrom="2025-01-01T00:00:00") == [cash["id"]]

    def test_foreign_trip_is_not_found(self, client, driver_a_headers, driver_b_headers, trip_payload):
        trip = create(client, driver_b_headers, trip_payload)

        response = client.get(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Trip not found"

    def test_unknown_trip(self, client, admin_headers):
        assert client.get("/trips/nope", headers=admin_headers).status_code == 404


# ==================== UPDATE ====================

class TestUpdateTrip:

    def test_partial_update(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.put(f"/trips/{trip['id']}", json={"tolls": 400}, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["tolls"] == 400
        assert data["fromLocation"] == "Bengaluru Airport"

    def test_driver_protected_fields_dropped(self, client, driver_a_headers, driver_b, trip_payload, driver_a):
        trip = create(client, driver_a_headers, trip_payload)

        response = client.put(
            f"/trips/{trip['id']}",
            json={
                "isDriverDeleted": True,
                "createdByRole": "admin",
                "createdBy": "someone",
                "driverId": driver_b.id,
                "customerName": "Priya",
            },
            headers=driver_a_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["customerName"] == "Priya"
        assert data["isDriverDeleted"] is False
        assert data["createdByRole"] == "driver"
        assert data["createdBy"] == driver_a.id
        assert data["driverId"] == driver_a.id

    def test_admin_reassign_refreshes_snapshot(self, client, admin_headers, trip_payload, driver_a, driver_b):
        trip = create(client, admin_headers, trip_payload, driverId=driver_a.id)

        data = client.put(f"/trips/{trip['id']}", json={"driverId": driver_b.id}, headers=admin_headers).json()

        assert data["driverId"] == driver_b.id
        assert data["driverName"] == "Sunita Rao"
        assert data["driverNumber"] == "9000000002"

    def test_update_with_unknown_vehicle_changes_nothing(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.put(
            f"/trips/{trip['id']}",
            json={"vehicleId": "missing", "tolls": 999},
            headers=admin_headers
        )

        assert response.status_code == 404
        assert client.get(f"/trips/{trip['id']}", headers=admin_headers).json()["tolls"] == 250

    def test_foreign_trip_update_is_not_found(self, client, driver_a_headers, driver_b_headers, trip_payload):
        trip = create(client, driver_b_headers, trip_payload)

        response = client.put(f"/trips/{trip['id']}", json={"tolls": 1}, headers=driver_a_headers)

        assert response.status_code == 404


# ==================== DELETE / RESTORE ====================

class TestDeleteAndRestore:

    def test_driver_soft_delete(self, client, driver_a_headers, trip_payload, driver_a):
        trip = create(client, driver_a_headers, trip_payload)

        response = client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Trip marked deleted by driver"
        assert data["trip"]["isDriverDeleted"] is True
        assert data["trip"]["driverDeletedBy"] == driver_a.id
        assert list_ids(client, driver_a_headers) == []

    def test_deleted_trip_hidden_unless_requested(self, client, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)
        client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert client.get(f"/trips/{trip['id']}", headers=driver_a_headers).status_code == 404
        response = client.get(f"/trips/{trip['id']}", headers=driver_a_headers, params={"includeDeleted": "true"})
        assert response.status_code == 200

    def test_driver_list_never_includes_deleted(self, client, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)
        client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert list_ids(client, driver_a_headers, includeDeleted="true") == []

    def test_admin_list_include_deleted(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)
        client.delete(f"/trips/{trip['id']}", headers=admin_headers)

        assert list_ids(client, admin_headers) == []
        assert list_ids(client, admin_headers, includeDeleted="true") == [trip["id"]]

    def test_second_delete_keeps_timestamp(self, client, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)
        first = client.delete(f"/trips/{trip['id']}", headers=driver_a_headers).json()["trip"]

        second = client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert second.status_code == 200
        assert second.json()["trip"]["driverDeletedAt"] == first["driverDeletedAt"]

    def test_driver_hard_flag_still_soft(self, client, admin_headers, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)

        client.delete(f"/trips/{trip['id']}", headers=driver_a_headers, params={"hard": "true"})

        assert list_ids(client, admin_headers, includeDeleted="true") == [trip["id"]]

    def test_admin_hard_delete(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.delete(f"/trips/{trip['id']}", headers=admin_headers, params={"hard": "true"})

        assert response.status_code == 200
        assert response.json() == {"message": "Trip permanently deleted by admin", "trip": None}
        assert client.get(f"/trips/{trip['id']}", headers=admin_headers).status_code == 404

    def test_admin_soft_delete_has_no_deleted_by(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        data = client.delete(f"/trips/{trip['id']}", headers=admin_headers).json()

        assert data["message"] == "Trip soft-deleted by admin"
        assert data["trip"]["driverDeletedBy"] is None
        assert data["trip"]["driverDeletedAt"] is not None

    def test_foreign_trip_delete_is_not_found(self, client, driver_a_headers, driver_b_headers, trip_payload):
        trip = create(client, driver_b_headers, trip_payload)

        response = client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        assert response.status_code == 404
        assert list_ids(client, driver_b_headers) == [trip["id"]]

    def test_admin_restore(self, client, admin_headers, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)
        client.delete(f"/trips/{trip['id']}", headers=driver_a_headers)

        response = client.post(f"/trips/{trip['id']}/restore", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Trip restored"
        assert data["trip"]["isDriverDeleted"] is False
        assert data["trip"]["driverDeletedAt"] is None
        assert data["trip"]["driverDeletedBy"] is None
        assert list_ids(client, driver_a_headers) == [trip["id"]]

    def test_driver_restore_forbidden(self, client, admin_headers, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)
        deleted = client.delete(f"/trips/{trip['id']}", headers=driver_a_headers).json()["trip"]

        response = client.post(f"/trips/{trip['id']}/restore", headers=driver_a_headers)

        assert response.status_code == 403
        after = client.get(f"/trips/{trip['id']}", headers=admin_headers).json()
        assert after["isDriverDeleted"] is True
        assert after["driverDeletedAt"] == deleted["driverDeletedAt"]
        assert after["driverDeletedBy"] == deleted["driverDeletedBy"]

    def test_restore_unknown_trip(self, client, admin_headers):
        assert client.post("/trips/nope/restore", headers=admin_headers).status_code == 404


# ==================== STATISTICS ====================

class TestStats:

    @pytest.fixture
    def two_trips(self, client, admin_headers, driver_a):
        base = {"fromLocation": "A", "endLocation": "B", "driverId": driver_a.id}
        create(client, admin_headers, base, tripAmount=1000, fuelAmount="300", tolls=0)
        create(client, admin_headers, base, tripAmount=2000, fuelAmount="1 x 50", tolls=20)

    def test_profit_summary(self, client, admin_headers, two_trips):
        response = client.get("/trips/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "totalTrips": 2,
            "totalTripAmount": 3000,
            "totalExpenses": 371,
            "totalMaintenance": 0,
            "totalAds": 0,
            "totalProfit": 2629,
        }

    def test_deleted_trips_excluded(self, client, admin_headers, driver_a_headers, two_trips, trip_payload):
        extra = create(client, driver_a_headers, trip_payload)
        client.delete(f"/trips/{extra['id']}", headers=driver_a_headers)

        for headers in (admin_headers, driver_a_headers):
            stats = client.get("/trips/stats", headers=headers).json()
            assert stats["totalTrips"] == 2
            assert stats["totalTripAmount"] == 3000

    def test_driver_scope(self, client, driver_b_headers, two_trips, trip_payload):
        create(client, driver_b_headers, trip_payload)

        stats = client.get("/trips/stats", headers=driver_b_headers).json()

        assert stats["totalTrips"] == 1
        assert stats["totalTripAmount"] == 4500
        assert stats["totalExpenses"] == 1200 + 250 + 50 + 300

    def test_maintenance_scoped_and_ads_shared(self, client, db, admin_headers, driver_a_headers, driver_b_headers, driver_a, driver_b):
        expense_repo.create_maintenance(db, Maintenance_create(driver_id=driver_a.id, cost=100))
        expense_repo.create_maintenance(db, Maintenance_create(driver_id=driver_b.id, cost=40))
        expense_repo.create_ad(db, Ad_create(amount=25, platform="Google"))

        admin_stats = client.get("/trips/stats", headers=admin_headers).json()
        driver_stats = client.get("/trips/stats", headers=driver_a_headers).json()

        assert admin_stats["totalMaintenance"] == 140
        assert admin_stats["totalAds"] == 25
        assert admin_stats["totalExpenses"] == 165
        assert driver_stats["totalMaintenance"] == 100
        assert driver_stats["totalAds"] == 25
        assert driver_stats["totalProfit"] == -125

    def test_expense_sources_can_be_switched_off(self, client, db, admin_headers, monkeypatch):
        expense_repo.create_maintenance(db, Maintenance_create(cost=100))
        expense_repo.create_ad(db, Ad_create(amount=25))
        monkeypatch.setattr(settings, "STATS_INCLUDE_MAINTENANCE", False)
        monkeypatch.setattr(settings, "STATS_INCLUDE_ADS", False)

        stats = client.get("/trips/stats", headers=admin_headers).json()

        assert stats["totalMaintenance"] == 0
        assert stats["totalAds"] == 0
        assert stats["totalExpenses"] == 0


# ==================== CHAT LINK ====================

class TestMessageLink:

    def test_admin_customer_link(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.get(f"/trips/{trip['id']}/whatsapp", headers=admin_headers, params={"sendTo": "customer"})

        assert response.status_code == 200
        data = response.json()
        assert data["sendTo"] == "customer"
        assert data["phone"] == "919876543210"
        assert data["link"].startswith("https://wa.me/919876543210?text=")

    def test_driver_forbidden(self, client, driver_a_headers, trip_payload):
        trip = create(client, driver_a_headers, trip_payload)

        response = client.get(f"/trips/{trip['id']}/whatsapp", headers=driver_a_headers, params={"sendTo": "customer"})

        assert response.status_code == 403

    def test_missing_recipient(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.get(f"/trips/{trip['id']}/whatsapp", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "sendTo"

    def test_driver_without_phone(self, client, admin_headers, trip_payload):
        trip = create(client, admin_headers, trip_payload)

        response = client.get(f"/trips/{trip['id']}/whatsapp", headers=admin_headers, params={"sendTo": "driver"})

        assert response.status_code == 400
