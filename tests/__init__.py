# SafeWare Web Test Suite
#
# This package contains:
# - Unit tests for the API client, session store, list state and validation
# - Route tests (Flask test client against an httpx.MockTransport backend)
# - UI smoke tests (Playwright, marked `ui`, need a running frontend)
#
# Run with: pytest            (UI tests skip unless TEST_FRONTEND_URL is set)
