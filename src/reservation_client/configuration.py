from functools import lru_cache

from pydantic_settings import BaseSettings


class Configuration(BaseSettings):
    api_base_url: str = "http://localhost:5000"
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_configuration() -> Configuration:
    return Configuration()
