import unittest
from datetime import date

from asset_tracker.services.analytics_service import (
    CHART_COLORS,
    compute_category_distribution,
    compute_dashboard_stats,
    compute_engineer_performance,
    compute_monthly_trends,
    compute_status_breakdown,
    trailing_months,
)
from asset_tracker.testing import ApiTestCase


def _complaints(*statuses, **fields):
    return [dict({"comp_status": s}, **fields) for s in statuses]


class TestDashboardStats(unittest.TestCase):

    def test_empty_input_gives_zeroes(self):
        stats = compute_dashboard_stats([], [], [], [])
        self.assertEqual(stats["resolution_rate"], 0)
        self.assertTrue(all(v == 0 for v in stats.values()))

    def test_resolution_rate_rounds_half_up(self):
        self.assertEqual(compute_dashboard_stats([], _complaints("Resolved", "Open"), [], [])["resolution_rate"], 50)
        one_of_eight = _complaints("Resolved", *["Open"] * 7)
        self.assertEqual(compute_dashboard_stats([], one_of_eight, [], [])["resolution_rate"], 13)
        two_of_three = _complaints("Resolved", "Resolved", "In Progress")
        self.assertEqual(compute_dashboard_stats([], two_of_three, [], [])["resolution_rate"], 67)

    def test_counters(self):
        assets = [{"status": "Active"}, {"status": "In Repair"}, {"status": "Under Repair"}]
        complaints = [
            {"comp_status": "Open",        "priority": "Critical"},
            {"comp_status": "In Progress", "priority": "High"},
            {"comp_status": "Resolved",    "priority": "Medium"},
        ]
        stats = compute_dashboard_stats(assets, complaints, [{}, {}], [{}])
        self.assertEqual(stats["total_assets"], 3)
        self.assertEqual(stats["assets_under_repair"], 2)
        self.assertEqual(stats["active_assets"], 1)
        self.assertEqual(stats["active_complaints"], 2)
        self.assertEqual(stats["critical_complaints"], 1)
        self.assertEqual(stats["high_priority_complaints"], 1)
        self.assertEqual(stats["medium_priority_complaints"], 1)
        self.assertEqual(stats["call_logs"], 2)
        self.assertEqual(stats["pm_reports"], 1)


class TestEngineerPerformance(unittest.TestCase):

    def test_engineers_without_complaints_are_left_out(self):
        engineers = [{"user_id": 1, "username": "ravi"}, {"user_id": 2, "username": "meena"}]
        complaints = [
            {"eng_assigned": 1, "comp_status": "Resolved"},
            {"eng_assigned": 1, "comp_status": "Resolved"},
            {"eng_assigned": 1, "comp_status": "Open"},
            {"eng_assigned": None, "comp_status": "Open"},
        ]
        result = compute_engineer_performance(engineers, complaints)
        self.assertEqual(result, [{
            "user_id": 1, "name": "ravi", "resolved": 2, "pending": 1, "total": 3, "resolution_rate": "66.7",
        }])

    def test_no_complaints(self):
        self.assertEqual(compute_engineer_performance([{"user_id": 1, "username": "ravi"}], []), [])


class TestMonthlyTrends(unittest.TestCase):

    def test_trailing_months_cross_year_boundary(self):
        months = trailing_months(7, date(2026, 3, 15))
        self.assertEqual(months[0], date(2025, 9, 1))
        self.assertEqual(months[-1], date(2026, 3, 1))
        self.assertEqual(len(months), 7)

    def test_counts_per_month(self):
        complaints = [
            {"creation_time": "2026-03-02T10:00:00+00:00", "comp_status": "Resolved"},
            {"creation_time": "2026-03-20T08:30:00+00:00", "comp_status": "Open"},
            {"creation_time": "2026-01-05T00:00:00+00:00", "comp_status": "Open"},
            {"creation_time": "2024-03-02T10:00:00+00:00", "comp_status": "Resolved"},
            {"creation_time": None, "comp_status": "Open"},
        ]
        call_logs = [{"created_at": "2026-02-11T09:00:00+00:00"}, {"created_at": "2026-03-01T09:00:00+00:00"}]

        trends = compute_monthly_trends(complaints, call_logs, 7, date(2026, 3, 15))
        self.assertEqual([t["month"] for t in trends], ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar"])

        by_period = {t["period"]: t for t in trends}
        self.assertEqual(by_period["2026-03"]["complaints"], 2)
        self.assertEqual(by_period["2026-03"]["resolved"], 1)
        self.assertEqual(by_period["2026-03"]["calls"], 1)
        self.assertEqual(by_period["2026-02"]["calls"], 1)
        self.assertEqual(by_period["2026-01"]["complaints"], 1)
        self.assertEqual(by_period["2025-09"], {
            "month": "Sep", "period": "2025-09", "complaints": 0, "resolved": 0, "calls": 0,
        })


class TestAssetCharts(unittest.TestCase):

    def test_category_distribution_keeps_first_seen_order(self):
        assets = [{"category": "Printer"}, {"category": "PC/CPU"}, {"category": "Printer"}, {"category": None}]
        dist = compute_category_distribution(assets)
        self.assertEqual(sum(d["value"] for d in dist), len(assets))
        self.assertEqual(dist, [
            {"name": "Printer", "value": 2, "color": CHART_COLORS[0]},
            {"name": "PC/CPU",  "value": 1, "color": CHART_COLORS[1]},
            {"name": "Other",   "value": 1, "color": CHART_COLORS[2]},
        ])

    def test_status_breakdown_within_category(self):
        assets = [
            {"category": "Printer", "status": "Active"},
            {"category": "Printer", "status": "In Repair"},
            {"category": "Printer", "status": "Active"},
            {"category": "Router",  "status": "In Repair"},
        ]
        self.assertEqual(compute_status_breakdown(assets, "Printer"), [
            {"status": "Active", "count": 2},
            {"status": "In Repair", "count": 1},
        ])
        self.assertEqual(compute_status_breakdown(assets, "Storage"), [])


class TestAnalyticsApi(ApiTestCase):

    def test_dashboard_is_department_scoped(self):
        it_asset = self.create_asset(serial_number="SN-IT-1")
        hr_asset = self.create_asset(dept_id=self.hr_dept, serial_number="SN-HR-1", status="In Repair")
        self.create_complaint(it_asset, comp_status="Resolved")
        self.create_complaint(hr_asset)
        self.client.post("/api/call-logs", json={"call_type": "Phone", "contact_person": "Front desk"})

        full = self.client.get("/api/analytics/dashboard").json()
        self.assertEqual(full["stats"]["total_assets"], 2)
        self.assertEqual(full["stats"]["resolution_rate"], 50)
        self.assertEqual(len(full["recent_complaints"]), 2)
        self.assertEqual(len(full["recent_call_logs"]), 1)

        hr = self.client.get("/api/analytics/dashboard", params=self.engineer_scope(self.hr_dept)).json()
        self.assertEqual(hr["stats"]["total_assets"], 1)
        self.assertEqual(hr["stats"]["assets_under_repair"], 1)
        self.assertEqual(hr["stats"]["active_complaints"], 1)
        self.assertEqual(hr["stats"]["resolution_rate"], 0)
        # Call logs are shared across departments
        self.assertEqual(hr["stats"]["call_logs"], 1)

    def test_recent_complaints_are_newest_first(self):
        asset_id = self.create_asset()
        ids = [self.create_complaint(asset_id) for _ in range(7)]
        dashboard = self.client.get("/api/analytics/dashboard").json()
        self.assertEqual([c["comp_id"] for c in dashboard["recent_complaints"]], ids[::-1][:5])

    def test_engineer_performance_endpoint(self):
        asset_id = self.create_asset()
        self.create_complaint(asset_id, eng_assigned=self.eng_it_id, comp_status="Resolved")
        res = self.client.get("/api/analytics/engineer-performance")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([(e["name"], e["resolution_rate"]) for e in res.json()], [("ravi", "100.0")])

    def test_monthly_trends_endpoint_includes_this_month(self):
        self.create_complaint(self.create_asset())
        trends = self.client.get("/api/analytics/monthly-trends", params={"months": 3}).json()
        self.assertEqual(len(trends), 3)
        self.assertEqual(trends[-1]["complaints"], 1)

    def test_chart_endpoints(self):
        self.create_asset(category="Printer", serial_number="P-1")
        self.create_asset(category="Printer", serial_number="P-2", status="In Repair")

        dist = self.client.get("/api/analytics/category-distribution").json()
        self.assertEqual([(d["name"], d["value"]) for d in dist], [("Printer", 2)])

        res = self.client.get("/api/analytics/status-breakdown", params={"category": "Printer"})
        self.assertEqual(sorted((s["status"], s["count"]) for s in res.json()), [("Active", 1), ("In Repair", 1)])

        self.assertError(self.client.get("/api/analytics/status-breakdown"), 400, "VALIDATION_ERROR")


if __name__ == '__main__':
    unittest.main()
