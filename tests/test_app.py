"""
End-to-end runs of the Streamlit page with the network patched out.
"""

from datetime import date
from pathlib import Path

import httpx
import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parents[1] / "app.py")


def _records(count: int) -> list:
    return [
        {
            "id": str(i),
            "type": "waitlist" if i % 2 == 0 else "feedback",
            "email": f"user{i}@example.com" if i % 2 == 0 else None,
            "feedback": None if i % 2 == 0 else f"feedback {i}",
            "createdAt": f"2024-01-{1 + i % 28:02d}T03:00:00Z",
        }
        for i in range(count)
    ]


@pytest.fixture
def api_env(monkeypatch):
    monkeypatch.setenv("API_URL", "https://api.example.test")
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Asia/Seoul")


def _patch_api(monkeypatch, response_factory):
    def fake_get(url, **kwargs):
        response = response_factory()
        response.request = httpx.Request("GET", url)
        return response

    monkeypatch.setattr(httpx, "get", fake_get)


def test_failed_fetch_shows_error_and_no_rows(monkeypatch, api_env):
    _patch_api(monkeypatch, lambda: httpx.Response(500))

    at = AppTest.from_file(APP_PATH, default_timeout=30).run()

    assert not at.exception
    assert "500" in at.error[0].value
    assert at.info[0].value == "데이터가 없습니다."


def test_pages_and_type_filter(monkeypatch, api_env):
    _patch_api(monkeypatch, lambda: httpx.Response(200, json=_records(25)))

    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    assert not at.exception
    assert len(at.error) == 0
    assert len(at.dataframe[0].value) == 20

    at.button(key="sd_page_next").click().run()
    assert len(at.dataframe[0].value) == 5

    # changing the filter goes back to page 1
    at.radio(key="sd_type_filter").set_value("feedback").run()
    table = at.dataframe[0].value
    assert len(table) == 12
    assert set(table["구분"]) == {"피드백"}


def test_sort_toggle_flips_first_row(monkeypatch, api_env):
    _patch_api(monkeypatch, lambda: httpx.Response(200, json=_records(25)))

    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    assert at.dataframe[0].value["날짜"].iloc[0].startswith("2024. 1. 25.")

    at.button(key="sd_toggle_sort").click().run()
    assert not at.exception
    assert at.dataframe[0].value["날짜"].iloc[0].startswith("2024. 1. 1.")


def test_date_filter_and_clear(monkeypatch, api_env):
    _patch_api(monkeypatch, lambda: httpx.Response(200, json=_records(25)))

    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.date_input(key="sd_date_start").set_value(date(2024, 1, 3)).run()
    assert not at.exception
    assert at.dataframe[0].value["이메일 / 피드백"].tolist() == ["user2@example.com"]

    at.button(key="sd_clear_dates").click().run()
    assert not at.exception
    assert len(at.dataframe[0].value) == 20
    assert at.date_input(key="sd_date_start").value is None


def test_download_holds_full_filtered_set(monkeypatch, api_env):
    _patch_api(monkeypatch, lambda: httpx.Response(200, json=_records(25)))
    downloads = []
    original = st.download_button

    def recording_download_button(label, data, **kwargs):
        downloads.append(data)
        return original(label, data, **kwargs)

    monkeypatch.setattr(st, "download_button", recording_download_button)

    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.radio(key="sd_type_filter").set_value("feedback").run()
    assert not at.exception

    text = downloads[-1].decode("utf-8")
    lines = text.split("\n")
    assert text.startswith("\ufeff")
    assert lines[0] == '\ufeff"날짜","구분","이메일/피드백","기관명"'
    # 12 feedback rows across pages, not just the visible one
    assert len(lines) == 13
    assert all('"피드백"' in line for line in lines[1:])
