"""
Tests for the reports endpoints
"""

import uuid

import pytest


@pytest.fixture
def report_for(api):
    def _report_for(app: dict, reasons: list[str] | None = None) -> dict:
        body = {"appId": app["id"], "appName": app["name"], "reasons": reasons or ["Spam or misleading"]}
        response = api.post("/api/reports", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _report_for


class TestCreateReport:
    """Tests for POST /api/reports"""

    def test_report_scenario(self, api, approved, report_for):
        foo = approved()
        api.put(f"/api/apps/{foo['id']}", json={"featured": True})

        report = report_for(foo, ["Spam or misleading"])

        reports = api.get("/api/reports").json()
        assert [r["appId"] for r in reports] == [foo["id"]]
        assert reports[0] == report
        assert report["appName"] == "Foo"
        assert report["reasons"] == ["Spam or misleading"]
        assert isinstance(report["timestamp"], int)

        assert api.delete(f"/api/reports/{report['id']}").status_code == 204
        assert api.get("/api/reports").json() == []

        app = api.get("/api/apps").json()[0]
        assert app["approved"] is True
        assert app["featured"] is True

    def test_duplicate_reasons_are_collapsed(self, api, submit, report_for):
        app = submit()

        report = report_for(app, ["Duplicate listing", "Inappropriate content", "Duplicate listing"])

        assert report["reasons"] == ["Duplicate listing", "Inappropriate content"]

    def test_app_name_is_a_snapshot(self, api, submit, report_for):
        app = submit()
        report_for(app)

        api.put(f"/api/apps/{app['id']}", json={"name": "Renamed"})

        assert api.get("/api/reports").json()[0]["appName"] == "Foo"

    @pytest.mark.parametrize(
        "reasons",
        [[], "Spam or misleading", ["Not a real reason"], None],
        ids=["empty", "not-a-list", "unknown-label", "null"],
    )
    def test_invalid_reasons_are_rejected(self, api, submit, reasons):
        app = submit()

        response = api.post("/api/reports", json={"appId": app["id"], "appName": app["name"], "reasons": reasons})

        assert response.status_code == 400
        assert api.get("/api/reports").json() == []

    def test_missing_reasons_are_rejected(self, api, submit):
        app = submit()

        response = api.post("/api/reports", json={"appId": app["id"], "appName": app["name"]})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: reasons"

    def test_report_for_unknown_app_returns_404(self, api):
        body = {"appId": str(uuid.uuid4()), "appName": "Ghost", "reasons": ["Spam or misleading"]}

        response = api.post("/api/reports", json=body)

        assert response.status_code == 404
        assert api.get("/api/reports").json() == []


class TestListReports:
    def test_most_recent_first(self, api, submit, report_for):
        app = submit()
        reports = [report_for(app) for _ in range(3)]

        listed = api.get("/api/reports").json()

        timestamps = [report["timestamp"] for report in listed]
        assert timestamps == sorted(timestamps, reverse=True)
        assert {report["id"] for report in listed} == {report["id"] for report in reports}


class TestDeleteReports:
    def test_dismiss_missing_report_returns_404(self, api):
        assert api.delete(f"/api/reports/{uuid.uuid4()}").status_code == 404
        assert api.delete("/api/reports/not-an-id").status_code == 404

    def test_delete_all_reports_for_app(self, api, submit, report_for):
        target = submit(name="Target")
        other = submit(name="Other")
        report_for(target)
        report_for(target, ["Broken link or not working"])
        kept = report_for(other)

        response = api.delete(f"/api/reports/app/{target['id']}")

        assert response.status_code == 204
        assert api.get("/api/reports").json() == [kept]

    def test_delete_for_app_without_reports_succeeds(self, api):
        assert api.delete(f"/api/reports/app/{uuid.uuid4()}").status_code == 204
        assert api.delete("/api/reports/app/not-an-id").status_code == 204

    def test_delete_for_app_keeps_the_app(self, api, approved, report_for):
        app = approved()
        report_for(app)

        api.delete(f"/api/reports/app/{app['id']}")

        assert [a["id"] for a in api.get("/api/apps").json()] == [app["id"]]
