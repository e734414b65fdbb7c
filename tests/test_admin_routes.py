"""API tests for /admin/dashboard and /admin/deleteUser/{id}."""

import unittest

from profilehub.core.roles import Role
from support import add_user, bearer, make_app


class TestAdminDashboard(unittest.TestCase):
    def setUp(self) -> None:
        self.app, self.client, self.users = make_app()
        self.admin = add_user(self.users, email="root@x.com", role=Role.ADMIN, name="Root")
        self.alice = add_user(self.users, email="alice@x.com", name="Alice")
        self.bob = add_user(self.users, email="bob@x.com", name="Bob")

    def test_lists_only_non_admin_users_without_passwords(self) -> None:
        resp = self.client.get("/admin/dashboard", headers=bearer("root@x.com", Role.ADMIN))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "All user details fetched successfully.")
        self.assertEqual(body["totalUsers"], 2)
        self.assertEqual([u["email"] for u in body["users"]], ["alice@x.com", "bob@x.com"])
        self.assertNotIn("password", resp.text)

    def test_user_role_is_forbidden(self) -> None:
        resp = self.client.get("/admin/dashboard", headers=bearer("alice@x.com"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "Forbidden: role not permitted")

    def test_no_token_is_unauthenticated(self) -> None:
        resp = self.client.get("/admin/dashboard")
        self.assertEqual(resp.status_code, 401)

    def test_token_claiming_admin_for_user_account_is_forbidden(self) -> None:
        resp = self.client.get("/admin/dashboard", headers=bearer("alice@x.com", Role.ADMIN))
        self.assertEqual(resp.status_code, 403)


class TestAdminDeleteUser(unittest.TestCase):
    def setUp(self) -> None:
        self.app, self.client, self.users = make_app()
        self.admin = add_user(self.users, email="root@x.com", role=Role.ADMIN, name="Root")
        self.alice = add_user(self.users, email="alice@x.com", name="Alice")
        self.admin_headers = bearer("root@x.com", Role.ADMIN)

    def test_delete_then_token_no_longer_resolves(self) -> None:
        alice_headers = bearer("alice@x.com")
        with self.assertLogs("profilehub.api.admin", level="INFO") as logs:
            resp = self.client.delete(
                f"/admin/deleteUser/{self.alice.id}", headers=self.admin_headers
            )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "User successfully deleted"})
        self.assertTrue(any(f"deleted user id={self.alice.id}" in line for line in logs.output))

        again = self.client.put(
            f"/user/edit/{self.alice.id}", json={"name": "Z"}, headers=alice_headers
        )
        self.assertEqual(again.status_code, 401)
        self.assertEqual(again.json()["detail"], "Unauthenticated: identity not found")

    def test_unknown_id_is_404(self) -> None:
        resp = self.client.delete("/admin/deleteUser/9999", headers=self.admin_headers)
        self.assertEqual(resp.status_code, 404)

    def test_malformed_id_is_400(self) -> None:
        resp = self.client.delete("/admin/deleteUser/abc", headers=self.admin_headers)
        self.assertEqual(resp.status_code, 400)

    def test_non_ascii_digit_and_out_of_range_ids_are_400(self) -> None:
        """Only ASCII digits within the id column's range reach the store."""
        for raw in ("%C2%B2", "%D9%A3", "0", "2147483648", "99999999999999999999"):
            with self.subTest(raw=raw):
                resp = self.client.delete(f"/admin/deleteUser/{raw}", headers=self.admin_headers)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["detail"], "Invalid user id")

    def test_user_cannot_delete(self) -> None:
        resp = self.client.delete(
            f"/admin/deleteUser/{self.admin.id}", headers=bearer("alice@x.com")
        )
        self.assertEqual(resp.status_code, 403)
