"""Quick check of the configured submissions API.

Run with `python scripts/check_submissions_api.py` to confirm the endpoint
answers and that the records parse and derive into a first page.
"""

from __future__ import annotations

import admin_dashboard.bootstrap_env  # noqa: F401  load .env before reading settings

from admin_dashboard.config import load_settings
from admin_dashboard.data.filters import DEFAULT_STATE, derive_view
from admin_dashboard.data.loader import load_submissions
from admin_dashboard.data.models import submissions_to_frame


def main() -> None:
    settings = load_settings()
    result = load_submissions(settings)
    if result.error:
        raise SystemExit(f"Fetch failed: {result.error}")

    frame = submissions_to_frame(result.data, settings.timezone)
    unparsed = int((~frame["created_at_parse_ok"]).sum())
    view = derive_view(frame, DEFAULT_STATE, settings.timezone, settings.page_size)

    print("API:", settings.api_url)
    print("Submissions:", len(frame), "by type:", frame["type"].value_counts().to_dict())
    print("Unparseable createdAt values:", unparsed)
    print("Pages:", view.total_pages)


if __name__ == "__main__":
    main()
