"""Settings for building a client from the environment."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fiatconnect_client.domain.models import ClientConfig
from fiatconnect_client.domain.schemas import Network


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    base_url: str = Field(..., validation_alias="FIATCONNECT_BASE_URL")
    network: Network = Field(Network.Alfajores, validation_alias="FIATCONNECT_NETWORK")
    account_address: str = Field(..., validation_alias="FIATCONNECT_ACCOUNT_ADDRESS")
    api_key: str | None = Field(None, validation_alias="FIATCONNECT_API_KEY")
    timeout_seconds: float | None = Field(None, validation_alias="FIATCONNECT_TIMEOUT_SECONDS")

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            base_url=self.base_url,
            network=self.network,
            account_address=self.account_address,
            api_key=self.api_key or None,
            timeout_seconds=self.timeout_seconds,
        )
