"""Tests for the route guard."""

import pytest

from together.config import RouteGuardSettings
from together.interface.api.guard import RouteGuard, resolve_post_login_redirect


@pytest.fixture
def guard() -> RouteGuard:
    return RouteGuard(RouteGuardSettings())


class TestRouteGuard:
    """Tests for RouteGuard.decide."""

    def test_signed_out_protected_page_goes_to_login(self, guard):
        # Act
        decision = guard.decide("/list/abc", "tab=done", authenticated=False)

        # Assert
        assert decision.location == "/auth/login?redirect=%2Flist%2Fabc%3Ftab%3Ddone"

    def test_signed_in_protected_page_allowed(self, guard):
        assert guard.decide("/dashboard", "", authenticated=True).allowed

    def test_signed_in_auth_page_goes_to_dashboard(self, guard):
        decision = guard.decide("/auth/login", "", authenticated=True)
        assert decision.location == "/dashboard"

    def test_signed_out_auth_page_allowed(self, guard):
        assert guard.decide("/auth/login", "", authenticated=False).allowed

    @pytest.mark.parametrize("path", ["/list/", "/list/[listId]"])
    def test_list_without_id_goes_to_dashboard(self, guard, path):
        """Links with no list id never render an empty list page."""
        decision = guard.decide(path, "", authenticated=True)
        assert decision.location == "/dashboard"

    @pytest.mark.parametrize("path", ["/", "/accept-invite", "/listing", "/pricing"])
    def test_public_pages_allowed(self, guard, path):
        """Prefixes only match whole path segments."""
        assert guard.decide(path, "", authenticated=False).allowed

    @pytest.mark.parametrize("path", ["/dashboard", "/pro/upgrade", "/settings"])
    def test_prefixes_protected(self, guard, path):
        assert guard.is_protected(path)


class TestResolvePostLoginRedirect:
    """Tests for resolve_post_login_redirect."""

    @pytest.mark.parametrize(
        "redirect,expected",
        [
            ("/list/abc", "/list/abc"),
            ("/accept-invite?token=t", "/accept-invite?token=t"),
            (None, "/dashboard"),
            ("", "/dashboard"),
            ("https://evil.example", "/dashboard"),
            ("//evil.example", "/dashboard"),
            ("/\\evil.example", "/dashboard"),
        ],
    )
    def test_only_relative_paths(self, redirect, expected):
        assert resolve_post_login_redirect(redirect, "/dashboard") == expected
