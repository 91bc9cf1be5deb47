from fastapi import Depends

from countrysearch.core.config import Settings, get_settings
from countrysearch.services.country_client import CountryClient


def get_country_client(settings: Settings = Depends(get_settings)) -> CountryClient:
    return CountryClient(settings)
