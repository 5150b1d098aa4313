import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PUBLIC_API_URL = "http://backend:4000/api"
# Container hostnames are invisible to a developer's browser
DEV_BROWSER_API_URL = "http://localhost:4000/api"
DEFAULT_TIMEOUT = 10.0


def resolve_api_base(
    public_api_url: Optional[str],
    *,
    server_side: bool,
    environment: str = "development",
) -> str:
    """
    Pick the API base URL for the current execution context.

    - server side (any environment): the configured public URL
    - browser in production: the configured public URL
    - browser otherwise: localhost, since docker service names do not
      resolve outside the compose network
    """
    configured = (public_api_url or DEFAULT_PUBLIC_API_URL).rstrip("/")

    if server_side or environment == "production":
        return configured
    return DEV_BROWSER_API_URL


@dataclass(frozen=True)
class ClientConfig:
    public_api_url: str = DEFAULT_PUBLIC_API_URL
    environment: str = "development"
    server_side: bool = True
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, *, server_side: bool = True) -> "ClientConfig":
        env = os.environ if env is None else env
        return cls(
            public_api_url=env.get("NUXT_PUBLIC_API_URL") or DEFAULT_PUBLIC_API_URL,
            environment=env.get("NODE_ENV", "development"),
            server_side=server_side,
        )

    @property
    def api_base(self) -> str:
        return resolve_api_base(
            self.public_api_url,
            server_side=self.server_side,
            environment=self.environment,
        )
