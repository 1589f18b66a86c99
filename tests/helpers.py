import unittest
import uuid

from fastapi.testclient import TestClient

from app.main import app

PASSWORD = "Str0ng!Pass"


class ApiTestCase(unittest.TestCase):
    """Runs the app lifespan once per test class against the temporary SQLite database."""

    @classmethod
    def setUpClass(cls):
        cls._client_cm = TestClient(app)
        cls.client = cls._client_cm.__enter__()

    @classmethod
    def tearDownClass(cls):
        cls._client_cm.__exit__(None, None, None)

    def register(self, name: str = "Test User", currency: str = "INR") -> dict:
        """Register a fresh user and return {"user", "token", "headers"}."""
        email = f"user-{uuid.uuid4().hex[:12]}@example.com"
        res = self.client.post("/api/v1/auth/register", json={
            "name": name,
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "currency": currency,
        })
        self.assertEqual(res.status_code, 201, res.text)
        # Tests authenticate through headers only
        self.client.cookies.clear()
        data = res.json()["data"]
        return {
            "user": data["user"],
            "email": email,
            "token": data["access_token"],
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    def create_transaction(self, headers: dict, **overrides) -> dict:
        payload = {
            "date": "2026-03-10",
            "description": "Grocery store",
            "amount": 250.0,
            "type": "debit",
            "category": "Food",
        }
        payload.update(overrides)
        res = self.client.post("/api/v1/transactions", json=payload, headers=headers)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]
