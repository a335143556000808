"""Configuration for gofr-dotenv tools

Example:
    from gofr_dotenv import load_env
    from gofr_dotenv.config import LoaderSettings

    settings = LoaderSettings.from_env(prefix="GOFR_DOTENV")
    load_env(settings.path, settings.env_key, settings.default_env)
"""

from gofr_dotenv.config.settings import DEFAULT_PREFIX, LoaderSettings

__all__ = [
    "DEFAULT_PREFIX",
    "LoaderSettings",
]
