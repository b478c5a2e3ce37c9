"""Configuration for the mac-agent desktop shell."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    # Runner service
    runner_url: str = "http://localhost:3847"
    request_timeout: float = 30.0

    # OS credential store namespace
    keychain_service: str = "mac-agent"

    # Local invoke surface for the GUI front-end
    host: str = "127.0.0.1"
    port: int = 3848
    allowed_origins: str = "tauri://localhost,http://localhost:1420,http://localhost:5173"
    ipc_token: str = ""

    debug: bool = False
    log_level: str = "INFO"

    model_config = {"env_prefix": "MAC_AGENT_"}

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


settings = AppSettings()
