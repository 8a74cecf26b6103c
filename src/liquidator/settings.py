from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator

from .exceptions import InvalidCredentialsError
from .exchanges.base import DEFAULT_BASE_URL
from .exchanges.signing import decode_secret


class ProxySettings(BaseModel):
    enabled: bool = False
    url: str | None = None
    username: str | None = None
    password: SecretStr | None = None

    model_config = {"extra": "forbid"}


class ExchangeCredentials(BaseModel):
    api_key: SecretStr
    api_secret: SecretStr

    model_config = {"extra": "forbid"}

    @field_validator("api_secret")
    @classmethod
    def _secret_is_base64(cls, value: SecretStr) -> SecretStr:
        try:
            decode_secret(value.get_secret_value())
        except InvalidCredentialsError as exc:
            raise ValueError(str(exc)) from exc
        return value


class ExchangeSettings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = Field(default=None, gt=0)
    credentials: ExchangeCredentials | None = None

    model_config = {"extra": "forbid"}


class LiquidationSettings(BaseModel):
    asset: str = "USDC"
    pair: str = "USDCUSD"

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    env: str = "dev"
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    exchange: ExchangeSettings = Field(default_factory=ExchangeSettings)
    liquidation: LiquidationSettings = Field(default_factory=LiquidationSettings)

    model_config = {"extra": "forbid"}

    def secret_values(self) -> list[str]:
        """Raw credential values, for masking in log output."""
        values: list[str] = []
        creds = self.exchange.credentials
        if creds is not None:
            values.append(creds.api_key.get_secret_value())
            values.append(creds.api_secret.get_secret_value())
        if self.proxy.password is not None:
            values.append(self.proxy.password.get_secret_value())
        return values

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        creds = data.get("exchange", {}).get("credentials")
        if isinstance(creds, dict):
            if "api_key" in creds:
                creds["api_key"] = "***"
            if "api_secret" in creds:
                creds["api_secret"] = "***"
        proxy = data.get("proxy")
        if isinstance(proxy, dict) and proxy.get("password") is not None:
            proxy["password"] = "***"
        return data
