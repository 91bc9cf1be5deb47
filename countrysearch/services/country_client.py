import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from countrysearch.core.config import Settings, settings as default_settings
from countrysearch.schemas.country import CountryRecord

logger = logging.getLogger(__name__)

NAME_PATH = "/v3/name/{name}"


class CountryLookupError(Exception):
    """Base class for failed country lookups."""


class HttpStatusError(CountryLookupError):
    def __init__(self, status_code: int):
        super().__init__(f"REST Countries responded with HTTP {status_code}")
        self.status_code = status_code


class FetchError(CountryLookupError):
    def __init__(self, message: str = "An error occurred while fetching the data."):
        super().__init__(message)


class CountryClient:
    """Looks countries up by name on the REST Countries service.

    A fresh ``httpx.AsyncClient`` is opened per search. ``transport`` is
    handed to it unchanged, which lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self.transport = transport

    def build_url(self, name: str) -> str:
        base = self.settings.RESTCOUNTRIES_BASE_URL.rstrip("/")
        path = NAME_PATH.format(name=quote(name, safe=""))
        return f"{base}{path}?fields={self.settings.RESTCOUNTRIES_FIELDS}"

    async def search(self, name: str) -> List[CountryRecord]:
        url = self.build_url(name)
        async with httpx.AsyncClient(
            timeout=self.settings.REQUEST_TIMEOUT, transport=self.transport
        ) as client:
            try:
                r = await client.get(url)
            except httpx.HTTPError as e:
                logger.error("[RESTCOUNTRIES] request for %r failed: %s", name, e)
                raise FetchError() from e

        if not r.is_success:
            logger.error("[RESTCOUNTRIES] HTTP %s for %r", r.status_code, name)
            raise HttpStatusError(r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            logger.error("[RESTCOUNTRIES] response for %r is not JSON: %s", name, e)
            raise FetchError() from e

        if not isinstance(data, list):
            logger.error("[RESTCOUNTRIES] expected a list for %r, got %s", name, type(data).__name__)
            raise FetchError()

        try:
            return [CountryRecord.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error("[RESTCOUNTRIES] malformed record for %r: %s", name, e)
            raise FetchError() from e
