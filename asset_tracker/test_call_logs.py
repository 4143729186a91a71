import unittest

from asset_tracker.testing import ApiTestCase


class TestCallLogApi(ApiTestCase):

    def _create(self, **overrides) -> int:
        body = {
            "call_type":      "Phone",
            "contact_person": "Anita (Accounts)",
            "contact_number": "+91 98450 00000",
            "description":    "Printer on 3rd floor jammed",
            "handled_by":     "ravi",
        }
        body.update(overrides)
        res = self.client.post("/api/call-logs", json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["call_id"]

    def test_create_always_starts_open(self):
        call_id = self._create(status="Closed")
        c = self.client.get(f"/api/call-logs/{call_id}").json()
        self.assertEqual(c["status"], "Open")
        self.assertEqual(c["call_type"], "Phone")
        self.assertIsNotNone(c["created_at"])

    def test_create_requires_contact_person(self):
        res = self.client.post("/api/call-logs", json={"call_type": "Email", "contact_person": "  "})
        self.assertError(res, 400, "VALIDATION_ERROR")

    def test_walk_in_call_type(self):
        call_id = self._create(call_type="Walk-in")
        self.assertEqual(self.client.get(f"/api/call-logs/{call_id}").json()["call_type"], "Walk-in")

    def test_list_newest_first(self):
        first = self._create()
        second = self._create(call_type="Email")
        self.assertEqual([c["call_id"] for c in self.client.get("/api/call-logs").json()], [second, first])

    def test_update_keeps_omitted_fields(self):
        call_id = self._create()
        res = self.client.put(f"/api/call-logs/{call_id}", json={"status": "In Progress"})
        self.assertEqual(res.status_code, 200, res.text)

        c = self.client.get(f"/api/call-logs/{call_id}").json()
        self.assertEqual(c["status"], "In Progress")
        self.assertEqual(c["description"], "Printer on 3rd floor jammed")
        self.assertEqual(c["handled_by"], "ravi")

    def test_update_replaces_given_fields(self):
        call_id = self._create()
        self.client.put(f"/api/call-logs/{call_id}", json={"status": "Closed", "handled_by": "meena"})
        c = self.client.get(f"/api/call-logs/{call_id}").json()
        self.assertEqual((c["status"], c["handled_by"]), ("Closed", "meena"))

    def test_update_requires_status(self):
        call_id = self._create()
        self.assertError(self.client.put(f"/api/call-logs/{call_id}", json={"handled_by": "meena"}),
                         400, "VALIDATION_ERROR")

    def test_unknown_call_log(self):
        self.assertError(self.client.get("/api/call-logs/9999"), 404, "NOT_FOUND")
        self.assertError(self.client.put("/api/call-logs/9999", json={"status": "Closed"}), 404, "NOT_FOUND")
        self.assertError(self.client.delete("/api/call-logs/9999"), 404, "NOT_FOUND")

    def test_delete(self):
        call_id = self._create()
        self.assertEqual(self.client.delete(f"/api/call-logs/{call_id}").status_code, 200)
        self.assertEqual(self.client.get("/api/call-logs").json(), [])


if __name__ == '__main__':
    unittest.main()
