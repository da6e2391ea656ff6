from httpx import ASGITransport, AsyncClient

from app import app
from core.authentication.jwt.tokens import create_access_token
from tests.base import DatabaseTestCase

LOT_BODY = {
    "name": "Kaloor Stadium Parking",
    "address": {
        "street": "Stadium Link Road",
        "city": "Kochi",
        "state": "Kerala",
        "zipCode": "682017",
    },
    "location": {"latitude": 9.9971, "longitude": 76.3009},
    "totalSlots": 1,
    "pricePerHour": 10,
    "operatingHours": {"open": "06:00", "close": "22:00"},
}


class ApiTest(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self):
        await self.client.aclose()
        await super().asyncTearDown()

    @staticmethod
    def bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    async def register(self, email: str, role: str = "user") -> str:
        response = await self.client.post(
            "/api/auth/register",
            json={"name": email.split("@")[0], "email": email, "password": "secret123", "role": role},
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]["token"]

    async def admin_token(self) -> str:
        response = await self.client.post(
            "/api/auth/admin/login", json={"username": "admin", "password": "admin-secret"}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]["token"]

    async def test_ping(self):
        response = await self.client.get("/api/ping")
        self.assertEqual(response.json(), {"success": True, "message": "pong"})

    async def test_booking_journey(self):
        owner = await self.register("owner@example.com", "owner")
        driver = await self.register("driver@example.com")
        admin = await self.admin_token()

        response = await self.client.post("/api/parking", json=LOT_BODY, headers=self.bearer(owner))
        self.assertEqual(response.status_code, 201, response.text)
        lot = response.json()["data"]
        self.assertEqual(lot["approvalStatus"], "pending")
        self.assertFalse(lot["isVerified"])

        booking_body = {
            "parkingId": lot["id"],
            "startTime": "2030-01-01T10:00:00Z",
            "endTime": "2030-01-01T12:00:00Z",
        }
        response = await self.client.post("/api/bookings", json=booking_body, headers=self.bearer(driver))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorCode"], "PARKING_NOT_VERIFIED")

        response = await self.client.get("/api/admin/parking-requests", headers=self.bearer(admin))
        self.assertEqual(response.json()["count"], 1)
        response = await self.client.put(
            f"/api/admin/parking-requests/{lot['id']}/approve", headers=self.bearer(admin)
        )
        self.assertTrue(response.json()["data"]["isVerified"])

        response = await self.client.post("/api/bookings", json=booking_body, headers=self.bearer(driver))
        self.assertEqual(response.status_code, 201, response.text)
        booking = response.json()["data"]
        self.assertEqual(booking["slotNumber"], 1)
        self.assertEqual(booking["totalPrice"], 20.0)
        self.assertEqual(booking["status"], "confirmed")
        self.assertTrue(booking["qrCode"].startswith("data:image/png;base64,"))
        self.assertEqual(booking["parking"]["name"], LOT_BODY["name"])

        response = await self.client.get(
            f"/api/parking/{lot['id']}/availability",
            params={"startTime": "2030-01-01T11:00:00Z", "endTime": "2030-01-01T13:00:00Z"},
        )
        self.assertEqual(response.json()["data"], {"totalSlots": 1, "availableSlots": 0, "bookedSlots": 1})

        overlapping = dict(booking_body, startTime="2030-01-01T11:00:00Z", endTime="2030-01-01T13:00:00Z")
        other = await self.register("other@example.com")
        response = await self.client.post("/api/bookings", json=overlapping, headers=self.bearer(other))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorCode"], "CAPACITY_EXCEEDED")

        for action in ("checkin", "checkout"):
            response = await self.client.put(
                f"/api/bookings/{booking['id']}/{action}", headers=self.bearer(driver)
            )
            self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"]["paymentStatus"], "paid")

        response = await self.client.post(
            "/api/reviews",
            json={"bookingId": booking["id"], "rating": 4, "comment": "Smooth"},
            headers=self.bearer(driver),
        )
        self.assertEqual(response.status_code, 201, response.text)

        response = await self.client.get(f"/api/parking/{lot['id']}")
        self.assertEqual(response.json()["data"]["rating"], {"average": 4.0, "count": 1})

        response = await self.client.get("/api/admin/analytics", headers=self.bearer(admin))
        analytics = response.json()["data"]
        self.assertEqual(analytics["totalIncome"], 20.0)
        self.assertEqual(analytics["incomeByOwner"][0]["ownerEmail"], "owner@example.com")

    async def test_authentication_errors(self):
        response = await self.client.get("/api/bookings")
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])

        response = await self.client.get("/api/bookings", headers=self.bearer("garbage"))
        self.assertEqual(response.status_code, 401)

        driver = await self.register("driver@example.com")
        response = await self.client.get("/api/admin/analytics", headers=self.bearer(driver))
        self.assertEqual(response.status_code, 403)
        response = await self.client.post("/api/parking", json=LOT_BODY, headers=self.bearer(driver))
        self.assertEqual(response.status_code, 403)

    async def test_synthetic_admin_profile(self):
        admin = await self.admin_token()
        response = await self.client.get("/api/auth/me", headers=self.bearer(admin))
        self.assertEqual(response.json()["data"]["id"], "admin_special_id")
        self.assertEqual(response.json()["data"]["role"], "admin")

        response = await self.client.get("/api/users", headers=self.bearer(admin))
        self.assertEqual(response.status_code, 200)

    async def test_validation_errors(self):
        response = await self.client.post(
            "/api/auth/register", json={"name": "", "email": "not-an-email", "password": "123"}
        )
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["errorCode"], "VALIDATION_ERROR")
        self.assertTrue(body["errors"])

        token = await self.register("driver@example.com")
        response = await self.client.post("/api/auth/register", json={
            "name": "Again", "email": "driver@example.com", "password": "secret123",
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorCode"], "EMAIL_TAKEN")

        response = await self.client.get(
            "/api/parking/00000000-0000-0000-0000-000000000000/availability",
            params={"startTime": "2030-01-01T12:00:00Z", "endTime": "2030-01-01T10:00:00Z"},
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 400)

    async def test_profile_update(self):
        token = await self.register("driver@example.com")
        response = await self.client.put(
            "/api/users/profile", json={"phone": "+91 98470 00000"}, headers=self.bearer(token)
        )
        self.assertEqual(response.json()["data"]["phone"], "+91 98470 00000")

        response = await self.client.get("/api/users/profile", headers=self.bearer(token))
        self.assertEqual(response.json()["data"]["email"], "driver@example.com")
        self.assertNotIn("password", response.json()["data"])

    async def test_owner_listing_route_is_not_an_id(self):
        owner = await self.register("owner@example.com", "owner")
        response = await self.client.get("/api/parking/owner/my-parkings", headers=self.bearer(owner))
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"], [])

    async def test_stale_token(self):
        token = create_access_token("7f0c2d1e-3b7a-4f61-9d7e-2a9c1f0b5e11")
        response = await self.client.get("/api/auth/me", headers=self.bearer(token))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["errorCode"], "USER_NOT_FOUND")
