"""
Tests for the directory view controller
"""

import pytest

from app.client.admin_gate import AdminGate
from app.client.listing import ALL_CATEGORIES, SortOption
from app.client.view_controller import LOAD_ERROR_MESSAGE, DirectoryViewController, ViewState, normalize_url
from app.models.app import Category
from tests.fakes import FakeDirectoryClient


@pytest.fixture
def client() -> FakeDirectoryClient:
    return FakeDirectoryClient()


@pytest.fixture
def notices() -> list[str]:
    return []


@pytest.fixture
def controller(client, notices) -> DirectoryViewController:
    return DirectoryViewController(client, admin_gate=AdminGate("letmein"), notify=notices.append)


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("foo.example", "https://foo.example"),
            ("  foo.example/path ", "https://foo.example/path"),
            ("http://foo.example", "http://foo.example"),
            ("HTTPS://foo.example", "HTTPS://foo.example"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_url(raw) == expected


class TestLoad:
    async def test_load_fills_public_cache_and_reports(self, controller, client):
        listed = client.seed_app("Listed", approved=True)
        client.seed_app("Pending")
        report = client.seed_report(listed)

        await controller.load()

        assert [app.name for app in controller.apps] == ["Listed"]
        assert controller.reports == [report]
        assert controller.report_counts[listed.id] == 1
        assert controller.load_error is None
        assert controller.is_loading is False

    async def test_report_failure_degrades_to_empty_list(self, controller, client):
        client.seed_app("Listed", approved=True)
        client.fail("get_reports")

        await controller.load()

        assert [app.name for app in controller.apps] == ["Listed"]
        assert controller.reports == []
        assert controller.load_error is None

    async def test_app_failure_sets_load_error(self, controller, client):
        client.fail("get_apps")

        await controller.load()

        assert controller.load_error == LOAD_ERROR_MESSAGE
        assert controller.apps == []
        assert controller.is_loading is False


class TestVisibleApps:
    async def test_filters_and_sorts(self, controller, client):
        client.seed_app("Swap", approved=True, category=Category.DEFI, clicks=3)
        client.seed_app("Lend", approved=True, category=Category.DEFI, clicks=9)
        client.seed_app("Mint", approved=True, category=Category.NFT, clicks=50)
        await controller.load()

        controller.active_category = Category.DEFI
        controller.sort_by = SortOption.POPULAR

        assert [app.name for app in controller.visible_apps] == ["Lend", "Swap"]

    async def test_default_sort_is_featured(self, controller, client):
        client.seed_app("Popular", approved=True, clicks=100)
        client.seed_app("Picked", approved=True, featured=True, clicks=5)
        await controller.load()

        assert [app.name for app in controller.visible_apps] == ["Picked", "Popular"]

    async def test_unapproved_entries_in_cache_stay_hidden(self, controller, client):
        pending = client.seed_app("Pending")
        controller.apps = [pending]

        assert controller.visible_apps == []


class TestClickApp:
    async def test_click_is_counted_locally_and_on_server(self, controller, client):
        app = client.seed_app("Foo", approved=True, clicks=4)
        await controller.load()

        await controller.click_app(app.id)

        assert controller.apps[0].clicks == 5
        assert client.apps[app.id].clicks == 5

    async def test_failed_click_is_not_rolled_back(self, controller, client, notices):
        app = client.seed_app("Foo", approved=True, clicks=4)
        await controller.load()
        client.fail("increment_clicks")

        await controller.click_app(app.id)

        assert controller.apps[0].clicks == 5
        assert client.apps[app.id].clicks == 4
        assert notices == []


class TestSubmitApp:
    async def test_submission_resets_filters_and_is_not_listed(self, controller, client):
        await controller.load()
        controller.active_category = Category.NFT
        controller.search_term = "foo"
        controller.sort_by = SortOption.POPULAR

        created = await controller.submit_app("Foo", "Foo app", "foo.example", Category.TOOLS)

        assert created is not None
        assert created.url == "https://foo.example"
        assert created.approved is False
        assert controller.apps == []
        assert controller.active_category == ALL_CATEGORIES
        assert controller.search_term == ""
        assert controller.sort_by == SortOption.NEWEST

    async def test_failed_submission_notifies_and_keeps_filters(self, controller, client, notices):
        client.fail("create_app")
        controller.search_term = "foo"

        created = await controller.submit_app("Foo", "Foo app", "foo.example", Category.TOOLS)

        assert created is None
        assert len(notices) == 1
        assert controller.search_term == "foo"


class TestReportApp:
    async def test_report_is_prepended(self, controller, client):
        app = client.seed_app("Foo", approved=True)
        older = client.seed_report(app)
        await controller.load()

        report = await controller.report_app(app, ["Scam / Malware / Phishing"])

        assert controller.reports == [report, older]
        assert controller.report_counts[app.id] == 2

    async def test_failed_report_notifies_and_leaves_state(self, controller, client, notices):
        app = client.seed_app("Foo", approved=True)
        await controller.load()
        client.fail("create_report")

        report = await controller.report_app(app, ["Spam or misleading"])

        assert report is None
        assert controller.reports == []
        assert notices == ["Failed to submit report."]


class TestAdminLogin:
    async def test_wrong_password_stays_on_login(self, controller):
        controller.open_admin_login()

        assert await controller.login("guess") is False
        assert controller.view == ViewState.ADMIN_LOGIN
        assert controller.login_error is True

    async def test_login_loads_every_app(self, controller, client):
        client.seed_app("Listed", approved=True)
        client.seed_app("Pending")
        controller.open_admin_login()

        assert await controller.login("letmein") is True
        assert controller.view == ViewState.ADMIN_DASHBOARD
        assert {app.name for app in controller.admin_apps} == {"Listed", "Pending"}

    async def test_no_configured_password_never_unlocks(self, client):
        controller = DirectoryViewController(client, admin_gate=AdminGate(""))

        assert await controller.login("") is False

    async def test_exit_reloads_public_view(self, controller, client):
        await controller.login("letmein")
        client.seed_app("Fresh", approved=True)

        await controller.exit_admin()

        assert controller.view == ViewState.HOME
        assert [app.name for app in controller.apps] == ["Fresh"]


class TestAdminActions:
    @pytest.fixture
    async def admin(self, controller):
        await controller.load()
        await controller.login("letmein")
        return controller

    async def test_delete_removes_reports_before_the_app(self, admin, client):
        app = client.seed_app("Foo", approved=True)
        other = client.seed_app("Bar", approved=True)
        client.seed_report(app)
        kept = client.seed_report(other)
        await admin.load()
        await admin.load_admin_apps()

        assert await admin.admin_delete_app(app.id) is True

        order = [name for name, _ in client.calls if name in ("delete_reports_for_app", "delete_app")]
        assert order == ["delete_reports_for_app", "delete_app"]
        assert [a.name for a in admin.apps] == ["Bar"]
        assert [a.name for a in admin.admin_apps] == ["Bar"]
        assert admin.reports == [kept]
        assert admin.report_counts[app.id] == 0

    async def test_failed_delete_keeps_state(self, admin, client, notices):
        app = client.seed_app("Foo", approved=True)
        await admin.load()
        client.fail("delete_app")

        assert await admin.admin_delete_app(app.id) is False
        assert [a.name for a in admin.apps] == ["Foo"]
        assert len(notices) == 1

    async def test_approve_refreshes_public_cache(self, admin, client):
        app = client.seed_app("Foo")
        await admin.load_admin_apps()
        assert admin.apps == []

        await admin.admin_set_approval(app.id, True)

        assert [a.name for a in admin.apps] == ["Foo"]
        assert admin.admin_apps[0].approved is True

    async def test_unapprove_drops_from_public_cache(self, admin, client):
        app = client.seed_app("Foo", approved=True)
        await admin.load()
        await admin.load_admin_apps()

        await admin.admin_set_approval(app.id, False)

        assert admin.apps == []
        assert admin.admin_apps[0].approved is False

    async def test_failed_approval_notifies(self, admin, client, notices):
        app = client.seed_app("Foo")
        await admin.load_admin_apps()
        client.fail("set_approval")

        assert await admin.admin_set_approval(app.id, True) is None
        assert admin.admin_apps[0].approved is False
        assert notices == ["Failed to update approval status"]

    async def test_toggle_featured_updates_both_caches(self, admin, client):
        app = client.seed_app("Foo", approved=True)
        await admin.load()
        await admin.load_admin_apps()

        await admin.admin_toggle_featured(app.id)

        assert admin.apps[0].featured is True
        assert admin.admin_apps[0].featured is True
        assert client.apps[app.id].featured is True

    async def test_failed_toggle_is_rolled_back(self, admin, client, notices):
        app = client.seed_app("Foo", approved=True)
        await admin.load()
        await admin.load_admin_apps()
        client.fail("update_app")

        await admin.admin_toggle_featured(app.id)

        assert admin.apps[0].featured is False
        assert admin.admin_apps[0].featured is False
        assert notices == ["Failed to update featured status"]

    async def test_add_app_is_approved_immediately(self, admin, client):
        added = await admin.admin_add_app("Foo", "Foo app", "foo.example", Category.WALLET)

        assert added is not None and added.approved is True
        assert [a.name for a in admin.apps] == ["Foo"]
        assert admin.admin_apps[0].id == added.id

    async def test_added_app_stays_pending_when_approval_fails(self, admin, client, notices):
        client.fail("set_approval")

        added = await admin.admin_add_app("Foo", "Foo app", "foo.example", Category.WALLET)

        assert added is not None and added.approved is False
        assert [a.id for a in admin.admin_apps] == [added.id]
        assert admin.apps == []
        assert added.id in client.apps
        assert notices == ["The listing was added but could not be approved: set_approval failed"]

    async def test_failed_add_leaves_caches_alone(self, admin, client, notices):
        client.fail("create_app")

        assert await admin.admin_add_app("Foo", "Foo app", "foo.example", Category.WALLET) is None
        assert admin.admin_apps == []
        assert notices == ["Add failed: create_app failed"]

    async def test_update_replaces_entry_in_both_caches(self, admin, client):
        app = client.seed_app("Foo", approved=True)
        await admin.load()
        await admin.load_admin_apps()

        await admin.admin_update_app(app.id, "Bar", "Bar app", "https://bar.example", Category.SOCIAL)

        assert admin.apps[0].name == "Bar"
        assert admin.admin_apps[0].category == Category.SOCIAL

    async def test_dismiss_report(self, admin, client):
        app = client.seed_app("Foo", approved=True)
        report = client.seed_report(app)
        await admin.load()

        assert await admin.admin_dismiss_report(report.id) is True
        assert admin.reports == []
        assert client.reports == {}
