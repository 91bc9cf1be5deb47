"""
Shared fixtures: REST Countries payloads, a stub client and a recording page.
"""

import pytest

from countrysearch.schemas.country import CountryRecord
from countrysearch.services.page import DETAIL_TARGET, LIST_TARGET, Container, Notifier


def country_payload(
    common,
    official=None,
    capital=("Capital City",),
    population=1000,
    languages=None,
    flags=None,
):
    return {
        "name": {"common": common, "official": official or f"Republic of {common}"},
        "capital": list(capital),
        "population": population,
        "flags": flags if flags is not None else [f"https://flagcdn.com/{common.lower()}.svg"],
        "languages": languages if languages is not None else {"eng": "English"},
    }


def make_record(common, **kwargs) -> CountryRecord:
    return CountryRecord.model_validate(country_payload(common, **kwargs))


CANADA = country_payload(
    "Canada",
    official="Canada",
    capital=("Ottawa",),
    population=38005238,
    languages={"eng": "English", "fra": "French"},
)


class StubClient:
    """Stands in for CountryClient; records every searched name."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def search(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return list(self.responses.get(name, []))


class RecordingPage:
    """Containers and notifier publishing into one message list."""

    def __init__(self):
        self.messages = []
        self.list = Container(LIST_TARGET, self.messages.append)
        self.detail = Container(DETAIL_TARGET, self.messages.append)
        self.notifier = Notifier(self.messages.append)

    @property
    def notifications(self):
        return [(m.level, m.message) for m in self.messages if m.type == "notify"]

    @property
    def patches(self):
        return [m for m in self.messages if m.type == "patch"]


@pytest.fixture
def page():
    return RecordingPage()
