# SafeWare UI Tests - Authentication and Navigation
#
# Browser-based checks for login, the role home page and logout.

import os

import pytest

sync_api = pytest.importorskip("playwright.sync_api")
expect = sync_api.expect

pytestmark = pytest.mark.ui

UI_BASE_URL = os.environ.get("TEST_FRONTEND_URL")


class TestLoginUI:
    """Login UI tests."""

    @pytest.mark.smoke
    def test_login_page_loads(self, page):
        """
        SCENARIO: Open the app root without a session
        EXPECTED: Redirected to the login form
        """
        page.goto(UI_BASE_URL)

        expect(page.locator('input[name="email"]')).to_be_visible()
        expect(page.locator('input[name="password"]')).to_be_visible()

    @pytest.mark.smoke
    def test_successful_login_shows_welcome(self, logged_in_page):
        """
        SCENARIO: Sign in with valid credentials
        EXPECTED: Role home page with a "Welcome back" notification
        """
        expect(logged_in_page.locator(".notification-success")).to_contain_text("Welcome back")
        expect(logged_in_page.locator("header nav")).to_be_visible()

    def test_wrong_password_stays_on_login(self, page):
        page.goto(f"{UI_BASE_URL}/login")
        page.fill('input[name="email"]', "nobody@example.test")
        page.fill('input[name="password"]', "WrongPass1")
        page.click('button[type="submit"]')

        expect(page.locator(".notification-error")).to_be_visible()
        expect(page.locator('input[name="password"]')).to_be_visible()

    def test_logout_returns_to_login(self, logged_in_page):
        logged_in_page.click('header form button[type="submit"]')

        expect(logged_in_page.locator(".notification-info")).to_contain_text("signed out")
        expect(logged_in_page.locator('input[name="email"]')).to_be_visible()
