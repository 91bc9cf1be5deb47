from enum import Enum
from typing import Dict, List, Sequence

from markupsafe import escape

from countrysearch.schemas.country import CountryRecord
from countrysearch.services.page import Container


class ElementKind(str, Enum):
    LIST_CONTAINER = "ul"
    LIST_ITEM = "li"
    IMAGE = "img"
    PARAGRAPH = "p"
    HEADING = "h4"
    LABEL_SPAN = "span"


STYLES: Dict[ElementKind, Dict[str, str]] = {
    ElementKind.LIST_CONTAINER: {
        "display": "flex",
        "flex-direction": "column",
        "gap": "10px",
        "padding": "0",
    },
    ElementKind.LIST_ITEM: {
        "list-style": "none",
        "display": "inline-flex",
        "gap": "10px",
        "cursor": "pointer",
    },
    ElementKind.IMAGE: {"width": "35px"},
    ElementKind.PARAGRAPH: {"margin": "0"},
    ElementKind.HEADING: {
        "font-size": "30px",
        "font-weight": "bold",
        "margin": "0",
    },
    ElementKind.LABEL_SPAN: {"font-weight": "bold"},
}


def style_for(kind) -> str:
    """Inline CSS declarations for ``kind``, e.g. ``"width:35px"``."""
    try:
        declarations = STYLES[ElementKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown element kind: {kind!r}") from None
    return ";".join(f"{prop}:{value}" for prop, value in declarations.items())


def assign_identifiers(results: Sequence[CountryRecord]) -> Dict[str, CountryRecord]:
    """Map a DOM id to each record, keeping common names where they are unique."""
    entries: Dict[str, CountryRecord] = {}
    for record in results:
        ident = record.common_name
        if ident in entries and record.official_name:
            ident = f"{record.common_name} ({record.official_name})"
        n = 2
        base = ident
        while ident in entries:
            ident = f"{base} #{n}"
            n += 1
        entries[ident] = record
    return entries


def list_item_markup(ident: str, record: CountryRecord) -> str:
    name = escape(record.common_name)
    return (
        f'<li id="{escape(ident)}" style="{style_for("li")}">'
        f'<img src="{escape(record.flag_image_url)}" alt="{name} flag" style="{style_for("img")}">'
        f'<p style="{style_for("p")}">{name}</p>'
        f"</li>"
    )


def _detail_row(label: str, value) -> str:
    return (
        f'<li style="{style_for("li")}">'
        f'<span style="{style_for("span")}">{label}:</span>'
        f'<p style="{style_for("p")}">{escape(value)}</p>'
        f"</li>"
    )


def detail_markup(record: CountryRecord) -> str:
    name = escape(record.common_name)
    return (
        f'<ul style="{style_for("ul")}">'
        f'<li style="{style_for("li")}">'
        f'<img src="{escape(record.flag_image_url)}" alt="{name} flag" style="{style_for("img")}">'
        f'<h4 style="{style_for("h4")}">{name}</h4>'
        f"</li>"
        + _detail_row("Capital", record.primary_capital)
        + _detail_row("Population", str(record.population))
        + _detail_row("Languages", record.language_names)
        + "</ul>"
    )


class Renderer:
    def __init__(self, list_container: Container, detail_container: Container):
        self.list_container = list_container
        self.detail_container = detail_container

    def render_list(self, results: List[CountryRecord]) -> Dict[str, CountryRecord]:
        """Draw ``results`` and return the id -> record map of listed entries.

        One record gets the detail panel, anything else the clickable list.
        Both containers are rewritten on every call.
        """
        entries: Dict[str, CountryRecord] = {}
        if len(results) == 1:
            list_html = ""
            detail_html = detail_markup(results[0])
        else:
            entries = assign_identifiers(results)
            list_html = "".join(
                list_item_markup(ident, record) for ident, record in entries.items()
            )
            detail_html = ""

        self.list_container.replace(list_html, style=style_for(ElementKind.LIST_CONTAINER))
        self.detail_container.replace(detail_html)
        return entries
