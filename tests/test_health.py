"""Health endpoint, root route and response headers."""

import unittest

from support import make_app


class TestHealth(unittest.TestCase):
    def setUp(self) -> None:
        self.app, self.client, self.users = make_app()

    def test_health_with_memory_store_skips_database(self) -> None:
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"status": "ok", "environment": "dev", "user_store": "memory", "database": None},
        )

    def test_security_headers_on_every_response(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.json(), {"message": "Profilehub API"})
        self.assertEqual(resp.headers["x-content-type-options"], "nosniff")
        self.assertEqual(resp.headers["x-frame-options"], "SAMEORIGIN")
        missing = self.client.get("/admin/dashboard")
        self.assertEqual(missing.headers["x-content-type-options"], "nosniff")

    def test_unhandled_error_is_500_with_headers_and_access_line(self) -> None:
        @self.app.get("/explode")
        async def explode() -> None:
            raise RuntimeError("boom")

        with self.assertLogs("profilehub.access", level="INFO") as access:
            resp = self.client.get("/explode")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})
        self.assertNotIn("boom", resp.text)
        self.assertEqual(resp.headers["x-content-type-options"], "nosniff")
        self.assertTrue(any('"GET /explode" 500' in line for line in access.output))
