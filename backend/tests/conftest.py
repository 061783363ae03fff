# backend/tests/conftest.py
"""
Pytest configuration for FGPE Email API tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import fgpe_mail.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., RESEND_API_KEY).
- Clears cached settings between tests so monkeypatched env vars take effect.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    In real environments, proper values should be provided via .env or system env.
    """
    os.environ.setdefault("RESEND_API_KEY", "re_dummy_key_for_tests")
    os.environ.setdefault("RESEND_API_BASE_URL", "https://api.resend.test")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    from fgpe_mail.notifications.config import get_notification_settings
    from fgpe_mail.notifications.factory import get_email_transport
    from fgpe_mail.resend_api.config import get_resend_config
    from fgpe_mail.utils.config import get_app_settings

    caches = (get_notification_settings, get_email_transport, get_resend_config, get_app_settings)
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()
