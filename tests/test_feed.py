import logging

import pytest
import requests
import responses

from on_this_day.fetchers import BUILTIN_PROVIDERS, FeedClient, MissingCredentialError, get_provider
from on_this_day.utils.config_loader import ConfigError

ONTHISDAY_URL = "https://on-this-day-api.helopsokken.nl/api/v1/events/that-happened-on/10/18"


def _errors(caplog):
    return [r for r in caplog.records if r.name == "otd.fetchers.feed" and r.levelno >= logging.ERROR]


def test_provider_urls(today):
    assert BUILTIN_PROVIDERS["onthisday"].url_for(today) == ONTHISDAY_URL
    assert (
        BUILTIN_PROVIDERS["onthisday-regular"].url_for(today.replace(month=3, day=7))
        == "https://on-this-day-api.helopsokken.nl/api/v1/events/that-happened-on/3/7?category=regular"
    )
    assert (
        BUILTIN_PROVIDERS["wikipedia"].url_for(today.replace(month=3, day=7))
        == "https://en.wikipedia.org/api/rest_v1/feed/onthisday/all/03/07"
    )


def test_unknown_provider():
    with pytest.raises(ConfigError):
        get_provider("nope")


@responses.activate
def test_fetch_decodes_events(today, data_array_payload):
    responses.add(responses.GET, ONTHISDAY_URL, json=data_array_payload, status=200)
    client = FeedClient(BUILTIN_PROVIDERS["onthisday"])

    events = client.fetch_today_events(today)

    assert [e.year for e in events] == [1867, 1990, None]
    request = responses.calls[0].request
    assert request.headers["Api-User-Agent"] == "on-this-day-cli"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Content-Type"] == "application/json"
    assert "Authorization" not in request.headers


@responses.activate
def test_fetch_sends_bearer_token(today, data_array_payload):
    provider = BUILTIN_PROVIDERS["onthisday-regular"]
    responses.add(responses.GET, provider.url_for(today), json=data_array_payload, status=200)
    client = FeedClient(provider, access_token="s3cret")

    assert len(client.fetch_today_events(today)) == 3
    assert responses.calls[0].request.headers["Authorization"] == "Bearer s3cret"
    assert responses.calls[0].request.url.endswith("/10/18?category=regular")


@responses.activate
def test_missing_token_skips_network(today):
    client = FeedClient(BUILTIN_PROVIDERS["onthisday-regular"])
    with pytest.raises(MissingCredentialError):
        client.fetch_today_events(today)
    assert len(responses.calls) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": 500, "json": {"error": "boom"}},
        {"status": 401, "json": {"message": "unauthenticated"}},
        {"status": 200, "body": "<html>not json</html>"},
        {"status": 200, "json": {"data": [{"eventyear": 1}]}},
        {"status": 200, "json": {"unexpected": True}},
    ],
)
@responses.activate
def test_failures_yield_empty_and_one_diagnostic(today, caplog, kwargs):
    responses.add(responses.GET, ONTHISDAY_URL, **kwargs)
    client = FeedClient(BUILTIN_PROVIDERS["onthisday"])

    with caplog.at_level(logging.ERROR, logger="otd.fetchers.feed"):
        assert client.fetch_today_events(today) == []

    assert len(_errors(caplog)) == 1


@responses.activate
def test_network_error_yields_empty(today, caplog):
    responses.add(responses.GET, ONTHISDAY_URL, body=requests.ConnectionError("unreachable"))
    client = FeedClient(BUILTIN_PROVIDERS["onthisday"])

    with caplog.at_level(logging.ERROR, logger="otd.fetchers.feed"):
        assert client.fetch_today_events(today) == []

    assert len(_errors(caplog)) == 1
    assert len(responses.calls) == 1


def test_fetch_uses_module_level_get_with_timeout(today, monkeypatch, data_array_payload):
    seen = {}

    class _Response:
        def raise_for_status(self):
            pass

        def json(self):
            return data_array_payload

    def _get(url, headers=None, timeout=None):
        seen.update(url=url, timeout=timeout)
        return _Response()

    monkeypatch.setattr("on_this_day.fetchers.feed.requests.get", _get)

    events = FeedClient(BUILTIN_PROVIDERS["onthisday"], timeout=12).fetch_today_events(today)

    assert len(events) == 3
    assert seen == {"url": ONTHISDAY_URL, "timeout": 12}
