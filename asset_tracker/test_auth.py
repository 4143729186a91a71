import unittest

from asset_tracker.testing import ApiTestCase, PASSWORD
from asset_tracker.utils.security import hash_password, verify_password


class TestPasswordHashing(unittest.TestCase):

    def test_hash_and_verify(self):
        hashed = hash_password("hunter22")
        self.assertNotEqual(hashed, "hunter22")
        self.assertTrue(verify_password("hunter22", hashed))
        self.assertFalse(verify_password("hunter23", hashed))


class TestAuthApi(ApiTestCase):

    def test_login_success(self):
        res = self.client.post("/api/login", json={"username": "ravi", "password": PASSWORD, "role": "Engineer"})
        self.assertEqual(res.status_code, 200, res.text)
        body = res.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"], {
            "user_id": self.eng_it_id, "username": "ravi", "user_role": "Engineer", "dept_id": self.it_dept,
        })

    def test_login_wrong_role(self):
        res = self.client.post("/api/login", json={"username": "ravi", "password": PASSWORD, "role": "Admin"})
        body = self.assertError(res, 401, "UNAUTHORIZED")
        self.assertEqual(body["message"], "Invalid credentials")

    def test_login_unknown_user(self):
        res = self.client.post("/api/login", json={"username": "ghost", "password": PASSWORD, "role": "Admin"})
        self.assertEqual(self.assertError(res, 401, "UNAUTHORIZED")["message"], "Invalid credentials")

    def test_login_wrong_password(self):
        res = self.client.post("/api/login", json={"username": "admin", "password": "nope", "role": "Admin"})
        self.assertEqual(self.assertError(res, 401, "UNAUTHORIZED")["message"], "Incorrect password")

    def test_login_rejects_unknown_role(self):
        res = self.client.post("/api/login", json={"username": "admin", "password": PASSWORD, "role": "Root"})
        self.assertError(res, 400, "VALIDATION_ERROR")

    def test_list_users_by_role(self):
        users = self.client.get("/api/users").json()
        self.assertEqual([u["username"] for u in users], ["admin", "ravi", "meena"])
        self.assertNotIn("password_hash", users[0])

        engineers = self.client.get("/api/users", params={"role": "Engineer"}).json()
        self.assertEqual([u["username"] for u in engineers], ["ravi", "meena"])

    def test_list_departments(self):
        self.assertEqual([d["dept_name"] for d in self.client.get("/api/departments").json()], ["HR", "IT"])

    def test_health(self):
        self.assertEqual(self.client.get("/health").json()["status"], "ok")


if __name__ == '__main__':
    unittest.main()
