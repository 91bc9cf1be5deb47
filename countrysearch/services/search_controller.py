import logging
from typing import Dict, Optional

from countrysearch.core.config import Settings, settings as default_settings
from countrysearch.schemas.country import CountryRecord
from countrysearch.services.country_client import CountryClient, CountryLookupError
from countrysearch.services.debounce import debounce
from countrysearch.services.page import Container, Notifier
from countrysearch.services.renderer import Renderer, style_for

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "Oops, there is no country with that name."
SELECT_FAILED_MESSAGE = "Oops, something went wrong."
TOO_MANY_MESSAGE = "Too many matches found. Please enter a more specific name."
ONE_FOUND_MESSAGE = "One country found."


class SearchController:
    """Handles the page's two event sources: search input and list clicks.

    Each search takes a fresh generation number; a response is only drawn
    if no newer search (or input clear) started while it was in flight.
    """

    def __init__(
        self,
        client: CountryClient,
        list_container: Container,
        detail_container: Container,
        notifier: Notifier,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.client = client
        self.list_container = list_container
        self.renderer = Renderer(list_container, detail_container)
        self.notifier = notifier
        self.entries: Dict[str, CountryRecord] = {}
        self._generation = 0
        self.on_input = debounce(self.handle_search, self.settings.DEBOUNCE_DELAY_MS)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int, term: str) -> bool:
        if generation != self._generation:
            logger.debug("[SEARCH] dropping stale response for %r", term)
            return True
        return False

    def _render(self, results) -> None:
        self.entries = self.renderer.render_list(results)

    async def handle_search(self, value: str) -> None:
        term = (value or "").strip()
        generation = self._next_generation()
        if not term:
            self.entries = {}
            self.list_container.replace("", style=style_for("ul"))
            return

        try:
            results = await self.client.search(term)
        except CountryLookupError:
            if not self._is_stale(generation, term):
                self.notifier.failure(NO_MATCH_MESSAGE)
            return

        if self._is_stale(generation, term):
            return

        self._render(results)
        count = len(results)
        if count > self.settings.MAX_LISTED_RESULTS:
            self.notifier.info(TOO_MANY_MESSAGE)
        elif count >= 2:
            self.notifier.success(f"{count} countries found.")
        elif count == 1:
            self.notifier.success(ONE_FOUND_MESSAGE)
        else:
            self.notifier.failure(NO_MATCH_MESSAGE)

    async def on_select(self, identifier: Optional[str]) -> None:
        if not identifier:
            return

        record = self.entries.get(identifier)
        if record is not None and self.settings.DETAIL_CACHE_ENABLED:
            self._next_generation()
            self._render([record])
            return

        name = record.common_name if record is not None else identifier
        generation = self._next_generation()
        try:
            results = await self.client.search(name)
        except CountryLookupError:
            if not self._is_stale(generation, name):
                self.notifier.failure(SELECT_FAILED_MESSAGE)
            return

        if self._is_stale(generation, name):
            return

        if record is not None and len(results) > 1:
            # Same common name shared by several records: keep the clicked one
            matches = [r for r in results if r.official_name == record.official_name]
            if len(matches) == 1:
                results = matches
        self._render(results)

    def close(self) -> None:
        self.on_input.cancel_all()
