# config.py — connection settings for the alts.trade REST client
from dataclasses import dataclass


@dataclass
class ClientConfig:
    host: str = "alts.trade"
    base_path: str = "/rest_api"
    scheme: str = "https"
    # Socket idle timeout; no data for this long aborts the request
    timeout_s: float = 5.0
    user_agent: str = "Mozilla/4.0 (compatible; Altstrade python client)"
    max_workers: int = 4
    api_key_env: str = "ALTSTRADE_KEY"
    secret_env: str = "ALTSTRADE_SECRET"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"


SETTINGS = ClientConfig()
