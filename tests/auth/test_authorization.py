"""
Tests for the route authorization predicate and the gate's path matcher.
"""

import pytest

from backend.auth.authorization import (
    ALLOW,
    DENY,
    AuthOutcome,
    authorize,
    is_protected_path,
)
from backend.auth.middleware import is_gated, login_redirect_url


class TestAuthorize:
    """authorize() over the full (protected, logged in) table."""

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/invoices", "/dashboard/invoices/1/edit"])
    def test_protected_path_with_principal_is_allowed(self, path):
        assert authorize(path, True) == ALLOW

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/invoices", "/dashboard/customers"])
    def test_protected_path_without_principal_is_denied(self, path):
        decision = authorize(path, False)

        assert decision == DENY
        assert not decision.allowed

    @pytest.mark.parametrize("path", ["/", "/auth/login", "/about"])
    def test_public_path_with_principal_redirects_to_dashboard(self, path):
        decision = authorize(path, True)

        assert decision.outcome is AuthOutcome.REDIRECT
        assert decision.redirect_to == "/dashboard"

    @pytest.mark.parametrize("path", ["/", "/auth/login", "/about"])
    def test_public_path_without_principal_is_allowed(self, path):
        assert authorize(path, False).allowed

    def test_prefix_match_is_per_segment(self):
        assert not is_protected_path("/dashboards")
        assert authorize("/dashboards", False).allowed
        assert is_protected_path("/dashboard/")


class TestGateMatcher:
    """Paths the gate middleware skips."""

    @pytest.mark.parametrize("path", ["/health", "/static/app.css", "/auth/logout", "/auth/me", "/docs"])
    def test_ungated_paths(self, path):
        assert not is_gated(path)

    @pytest.mark.parametrize("path", ["/", "/auth/login", "/dashboard", "/healthz"])
    def test_gated_paths(self, path):
        assert is_gated(path)

    def test_login_redirect_carries_callback(self):
        assert login_redirect_url("/dashboard/invoices") == "/auth/login?callbackUrl=%2Fdashboard%2Finvoices"
