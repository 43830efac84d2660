import pytest
import requests
import streamlit as st


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture(autouse=True)
def clear_streamlit_cache():
    st.cache_data.clear()
    yield
    st.cache_data.clear()


@pytest.fixture
def fake_http(monkeypatch):
    """Route ``requests.get`` to canned payloads keyed by URL.

    Unrouted URLs raise ``requests.ConnectionError``. Each call is recorded in
    ``calls`` as ``(url, params)``.
    """

    routes = {}
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        if url not in routes:
            raise requests.ConnectionError(f"no route to {url}")
        payload = routes[url]
        if isinstance(payload, FakeResponse):
            return payload
        return FakeResponse(payload)

    monkeypatch.setattr(requests, "get", fake_get)
    fake_get.routes = routes
    fake_get.calls = calls
    return fake_get


def square(west, south, east, north):
    return {
        "type": "Polygon",
        "coordinates": [[[west, south], [east, south], [east, north], [west, north], [west, south]]],
    }
