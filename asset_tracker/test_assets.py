import unittest
from datetime import datetime
from io import BytesIO

from openpyxl import Workbook

from asset_tracker.schemas.asset import normalize_asset_row
from asset_tracker.testing import ApiTestCase

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class TestNormalizeAssetRow(unittest.TestCase):

    def test_legacy_headers(self):
        row = normalize_asset_row({
            "Asset Name": " HP LaserJet ", "S No": "HP-77", "AMC/Warranty": "AMC",
            "Inventory": 3, "Vendor": "HP", "Department ID": 4, "Location": "  ",
        })
        self.assertEqual(row, {
            "asset_name": "HP LaserJet", "serial_number": "HP-77", "amc_or_warranty": "AMC",
            "inventory_count": 3, "vendor_name": "HP", "dept_id": 4,
        })


class TestAssetApi(ApiTestCase):

    # ─── CRUD ─────────────────────────────────────────────────────────────────
    def test_create_and_get(self):
        asset_id = self.create_asset(purchase_date="2024-01-15", amc_or_warranty="Warranty", vendor_name="Dell")
        a = self.client.get(f"/api/assets/{asset_id}").json()
        self.assertEqual(a["asset_name"], "Dell OptiPlex 7090")
        self.assertEqual(a["category"], "PC/CPU")
        self.assertEqual(a["purchase_date"], "2024-01-15")
        self.assertEqual(a["amc_or_warranty"], "Warranty")
        self.assertEqual(a["dept_name"], "IT")

    def test_create_rejects_negative_inventory(self):
        res = self.client.post("/api/assets", json={
            "asset_name": "Switch", "category": "Router", "serial_number": "R-1",
            "inventory_count": -1, "dept_id": self.it_dept,
        })
        body = self.assertError(res, 400, "VALIDATION_ERROR")
        self.assertEqual(body["details"][0]["field"], "inventory_count")

    def test_create_rejects_unknown_category(self):
        res = self.client.post("/api/assets", json={
            "asset_name": "Toaster", "category": "Kitchen", "serial_number": "K-1", "dept_id": self.it_dept,
        })
        self.assertError(res, 400, "VALIDATION_ERROR")

    def test_create_for_unknown_department_is_reference_error(self):
        res = self.client.post("/api/assets", json={
            "asset_name": "Switch", "category": "Router", "serial_number": "R-1", "dept_id": 9999,
        })
        self.assertError(res, 409, "REFERENCE_ERROR")

    def test_update_is_partial(self):
        asset_id = self.create_asset(location="Floor 2")
        res = self.client.put(f"/api/assets/{asset_id}", json={"status": "Under Repair", "asset_name": None})
        self.assertEqual(res.status_code, 200, res.text)

        a = res.json()["asset"]
        self.assertEqual(a["status"], "In Repair")
        self.assertEqual(a["asset_name"], "Dell OptiPlex 7090")
        self.assertEqual(a["location"], "Floor 2")

    def test_update_unknown_asset(self):
        self.assertError(self.client.put("/api/assets/9999", json={"location": "x"}), 404, "NOT_FOUND")

    def test_delete(self):
        asset_id = self.create_asset()
        res = self.client.delete(f"/api/assets/{asset_id}")
        self.assertEqual(res.status_code, 200)
        self.assertError(self.client.get(f"/api/assets/{asset_id}"), 404, "NOT_FOUND")

    def test_delete_with_complaints_is_blocked(self):
        asset_id = self.create_asset()
        comp_id = self.create_complaint(asset_id)

        self.assertError(self.client.delete(f"/api/assets/{asset_id}"), 409, "REFERENCE_ERROR")
        self.assertEqual(self.client.get(f"/api/assets/{asset_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/complaints/{comp_id}").json()["asset_id"], asset_id)

    # ─── Scoping ──────────────────────────────────────────────────────────────
    def test_engineer_sees_own_department_only(self):
        it_asset = self.create_asset(serial_number="IT-1")
        hr_asset = self.create_asset(dept_id=self.hr_dept, serial_number="HR-1")

        everything = self.client.get("/api/assets").json()
        self.assertEqual([a["asset_id"] for a in everything], [it_asset, hr_asset])

        hr_only = self.client.get("/api/assets", params=self.engineer_scope(self.hr_dept)).json()
        self.assertEqual([a["asset_id"] for a in hr_only], [hr_asset])

        # Engineer without a department is not narrowed
        no_dept = self.client.get("/api/assets", params={"user_role": "Engineer"}).json()
        self.assertEqual(len(no_dept), 2)

    # ─── Bulk upload ──────────────────────────────────────────────────────────
    def test_bulk_upload_inserts_every_row(self):
        rows = [
            {"asset_name": "PC-1", "category": "PC/CPU", "serial_number": "B-1", "dept_id": self.it_dept},
            {"Asset Name": "Printer-1", "Category": "Printer", "S No": "B-2",
             "Status": "Under Repair", "Department ID": self.hr_dept},
        ]
        res = self.client.post("/api/assets/bulk-upload", json=rows)
        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(res.json()["inserted"], 2)

        assets = self.client.get("/api/assets").json()
        self.assertEqual([(a["serial_number"], a["status"]) for a in assets], [("B-1", "Active"), ("B-2", "In Repair")])

    def test_bulk_upload_is_all_or_nothing(self):
        rows = [
            {"asset_name": "PC-1", "category": "PC/CPU", "serial_number": "B-1", "dept_id": self.it_dept},
            {"asset_name": "PC-2", "category": "PC/CPU", "dept_id": self.it_dept},
            {"asset_name": "PC-3", "category": "PC/CPU", "serial_number": "B-3", "dept_id": self.it_dept,
             "inventory_count": -2},
        ]
        body = self.assertError(self.client.post("/api/assets/bulk-upload", json=rows), 400, "VALIDATION_ERROR")
        self.assertEqual(sorted({d["row"] for d in body["details"]}), [2, 3])
        self.assertIn("serial_number", [d["field"] for d in body["details"] if d["row"] == 2])
        self.assertEqual(self.client.get("/api/assets").json(), [])

    def test_bulk_upload_unknown_department_inserts_nothing(self):
        rows = [
            {"asset_name": "PC-1", "category": "PC/CPU", "serial_number": "B-1", "dept_id": self.it_dept},
            {"asset_name": "PC-2", "category": "PC/CPU", "serial_number": "B-2", "dept_id": 9999},
        ]
        self.assertError(self.client.post("/api/assets/bulk-upload", json=rows), 409, "REFERENCE_ERROR")
        self.assertEqual(self.client.get("/api/assets").json(), [])

    def test_bulk_upload_empty(self):
        self.assertError(self.client.post("/api/assets/bulk-upload", json=[]), 400, "VALIDATION_ERROR")

    def test_bulk_upload_xlsx(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["Asset Name", "Category", "Serial Number", "Status", "Purchase Date", "Inventory", "Department ID"])
        ws.append(["Core Switch", "Router", "SW-1", "Active", datetime(2023, 6, 1), 2, self.it_dept])
        ws.append([None] * 7)
        ws.append(["NAS", "Storage", "NAS-1", "In Repair", None, None, self.hr_dept])
        buf = BytesIO()
        wb.save(buf)

        res = self.client.post("/api/assets/bulk-upload/file",
                               files={"file": ("assets.xlsx", buf.getvalue(), XLSX_MIME)})
        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(res.json()["inserted"], 2)

        switch, nas = self.client.get("/api/assets").json()
        self.assertEqual(switch["purchase_date"], "2023-06-01")
        self.assertEqual(switch["inventory_count"], 2)
        self.assertEqual(nas["inventory_count"], 0)
        self.assertEqual(nas["dept_id"], self.hr_dept)

    def test_bulk_upload_numeric_serial_json(self):
        rows = [{"asset_name": "HP LaserJet", "category": "Printer", "serial_number": 12345,
                 "status": "Active", "dept_id": self.it_dept}]
        res = self.client.post("/api/assets/bulk-upload", json=rows)
        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(self.client.get("/api/assets").json()[0]["serial_number"], "12345")

    def test_bulk_upload_numeric_cells_xlsx(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["Asset Name", "Category", "Serial Number", "Vendor", "Department ID"])
        ws.append(["HP LaserJet", "Printer", 12345, 2024, self.it_dept])
        ws.append([987, "Storage", 55.0, None, self.hr_dept])
        buf = BytesIO()
        wb.save(buf)

        res = self.client.post("/api/assets/bulk-upload/file",
                               files={"file": ("assets.xlsx", buf.getvalue(), XLSX_MIME)})
        self.assertEqual(res.status_code, 201, res.text)

        printer, disk = self.client.get("/api/assets").json()
        self.assertEqual((printer["serial_number"], printer["vendor_name"]), ("12345", "2024"))
        self.assertEqual((disk["asset_name"], disk["serial_number"]), ("987", "55"))

    def test_bulk_upload_import_template_headers(self):
        rows = [
            {"Asset": "HP LaserJet", "Category": "Printer", "Serial Number": "HP-1",
             "Status": "Active", "Department": self.it_dept, "Location": "Floor 1"},
            {"Asset": "NAS", "Category": "Storage", "Serial Number": "NAS-1",
             "Status": "Under Repair", "Department": "hr", "Location": "Server room"},
        ]
        res = self.client.post("/api/assets/bulk-upload", json=rows)
        self.assertEqual(res.status_code, 201, res.text)

        printer, nas = self.client.get("/api/assets").json()
        self.assertEqual((printer["asset_name"], printer["dept_id"], printer["location"]),
                         ("HP LaserJet", self.it_dept, "Floor 1"))
        self.assertEqual((nas["dept_name"], nas["status"]), ("HR", "In Repair"))

    def test_bulk_upload_unknown_department_name(self):
        rows = [
            {"Asset": "PC-1", "Category": "PC/CPU", "Serial Number": "B-1", "Department": "IT"},
            {"Asset": "PC-2", "Category": "PC/CPU", "Serial Number": "B-2", "Department": "Finance"},
        ]
        body = self.assertError(self.client.post("/api/assets/bulk-upload", json=rows), 400, "VALIDATION_ERROR")
        self.assertEqual(body["details"], [{"row": 2, "field": "dept_id", "message": "Unknown department 'Finance'"}])
        self.assertEqual(self.client.get("/api/assets").json(), [])

    def test_bulk_upload_csv(self):
        content = (
            "asset_name,category,serial_number,inventory_count,dept_id\n"
            f"Office 365,License,LIC-1,25,{self.it_dept}\n"
        ).encode("utf-8-sig")
        res = self.client.post("/api/assets/bulk-upload/file", files={"file": ("assets.csv", content, "text/csv")})
        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(self.client.get("/api/assets").json()[0]["inventory_count"], 25)

    def test_bulk_upload_rejects_other_file_types(self):
        res = self.client.post("/api/assets/bulk-upload/file", files={"file": ("assets.txt", b"x", "text/plain")})
        self.assertError(res, 400, "VALIDATION_ERROR")


if __name__ == '__main__':
    unittest.main()
