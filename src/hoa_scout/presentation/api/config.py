"""Settings as seen by the API dependencies."""

from hoa_scout_config.settings import Settings, get_settings


def get_api_settings() -> Settings:
    # Not cached here: clear_settings_cache() must reach the API as well.
    return get_settings()
