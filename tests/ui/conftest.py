# SafeWare UI Tests - Playwright Configuration
#
# Browser fixtures for running against a live SafeWare frontend.
# Skipped unless TEST_FRONTEND_URL points at a running instance.

import os
from pathlib import Path
from typing import Generator

import pytest


UI_BASE_URL = os.environ.get("TEST_FRONTEND_URL")
UI_EMAIL = os.environ.get("TEST_UI_EMAIL", "maria@acme.test")
UI_PASSWORD = os.environ.get("TEST_UI_PASSWORD", "Password123")
HEADLESS = os.environ.get("TEST_HEADLESS", "true").lower() == "true"
SLOW_MO = int(os.environ.get("TEST_SLOW_MO", "0"))

# Screenshots on failure
ARTIFACTS_DIR = Path(__file__).parent.parent / "artifacts"


def pytest_collection_modifyitems(config, items):
    if UI_BASE_URL:
        return
    skip_ui = pytest.mark.skip(reason="TEST_FRONTEND_URL not set")
    for item in items:
        if "ui" in item.keywords:
            item.add_marker(skip_ui)


@pytest.fixture(scope="session")
def playwright_instance():
    sync_api = pytest.importorskip("playwright.sync_api")
    with sync_api.sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser(playwright_instance):
    browser = playwright_instance.chromium.launch(headless=HEADLESS, slow_mo=SLOW_MO)
    yield browser
    browser.close()


@pytest.fixture
def page(browser) -> Generator:
    """Fresh context per test so no session cookie leaks between tests."""
    context = browser.new_context(viewport={"width": 1280, "height": 720})
    page = context.new_page()
    yield page
    context.close()


@pytest.fixture
def logged_in_page(page):
    """Page signed in with TEST_UI_EMAIL / TEST_UI_PASSWORD."""
    page.goto(f"{UI_BASE_URL}/login")
    page.fill('input[name="email"]', UI_EMAIL)
    page.fill('input[name="password"]', UI_PASSWORD)
    page.click('button[type="submit"]')
    page.wait_for_selector(".notification-success", timeout=10000)
    yield page


@pytest.fixture(autouse=True)
def screenshot_on_failure(request):
    yield
    report = getattr(request.node, "rep_call", None)
    if report is None or not report.failed or "page" not in request.fixturenames:
        return
    ARTIFACTS_DIR.mkdir(exist_ok=True)
    path = ARTIFACTS_DIR / f"{request.node.name}.png"
    request.getfixturevalue("page").screenshot(path=str(path))
    print(f"Screenshot saved: {path}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item for screenshot_on_failure."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
