from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CountryRecord(BaseModel):
    """One country as returned by the REST Countries ``/name`` endpoint."""

    model_config = ConfigDict(frozen=True)

    common_name: str
    official_name: str = ""
    capital: Tuple[str, ...] = ()
    population: int = Field(ge=0)
    flag_image_url: str = ""
    languages: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_api_payload(cls, data: Any) -> Any:
        # Already flattened
        if not isinstance(data, dict) or "name" not in data:
            return data

        name = data.get("name") or {}
        if isinstance(name, str):
            name = {"common": name}

        return {
            "common_name": name.get("common"),
            "official_name": name.get("official") or "",
            "capital": data.get("capital") or (),
            "population": data.get("population"),
            "flag_image_url": _first_flag(data.get("flags")),
            "languages": data.get("languages") or {},
        }

    @property
    def primary_capital(self) -> str:
        return self.capital[0] if self.capital else "-"

    @property
    def language_names(self) -> str:
        return ", ".join(self.languages.values())


def _first_flag(flags: Any) -> str:
    # v3 returns a list of URLs, v3.1 an object keyed by image format
    if isinstance(flags, (list, tuple)):
        return flags[0] if flags else ""
    if isinstance(flags, dict):
        return flags.get("png") or flags.get("svg") or ""
    return ""
