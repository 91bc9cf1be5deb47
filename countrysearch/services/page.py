from typing import Callable, Optional

from pydantic import BaseModel

from countrysearch.schemas.live import NotifyMessage, PatchMessage

Sink = Callable[[BaseModel], None]

LIST_TARGET = "country-list"
DETAIL_TARGET = "country-info"


class Container:
    """Server-side mirror of one page element whose markup we own.

    Every replacement is published to ``sink`` as a ``PatchMessage`` so the
    browser can swap the element's content.
    """

    def __init__(self, target: str, sink: Sink):
        self.target = target
        self.sink = sink
        self.html = ""
        self.style: Optional[str] = None

    def replace(self, html: str, style: Optional[str] = None) -> None:
        self.html = html
        if style is not None:
            self.style = style
        self.sink(PatchMessage(target=self.target, html=html, style=style))

    def clear(self) -> None:
        self.replace("")


class Notifier:
    """Fire-and-forget toast channel."""

    def __init__(self, sink: Sink):
        self.sink = sink

    def success(self, message: str) -> None:
        self.sink(NotifyMessage(level="success", message=message))

    def info(self, message: str) -> None:
        self.sink(NotifyMessage(level="info", message=message))

    def failure(self, message: str) -> None:
        self.sink(NotifyMessage(level="failure", message=message))
