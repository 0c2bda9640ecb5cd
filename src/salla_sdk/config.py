from pydantic_settings import BaseSettings, SettingsConfigDict

from salla_sdk.oauth.models import OAuthConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SALLA_",
        extra="ignore",
    )

    # OAuth
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = "http://localhost:8000/oauth/callback"
    scopes: list[str] = []
    authorization_url: str = "https://accounts.salla.sa/oauth2/auth"
    token_url: str = "https://accounts.salla.sa/oauth2/token"

    # Webhooks (empty secret disables signature verification)
    webhook_secret: str = ""

    # API
    api_base_url: str = "https://api.salla.dev/admin/v2"
    user_agent: str = "salla-sdk-python/0.1.0"
    http_timeout: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    def oauth_config(self) -> OAuthConfig:
        return OAuthConfig(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            scopes=tuple(self.scopes),
        )
