from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PINSIGHT_"}

    # "development" or "production"; selects which OneMap token is sent
    environment: str = "development"

    # OneMap (Singapore Land Authority)
    # Tokens expire after ~3 days (dev) / 30 days (prod). Expiry is treated as an
    # ordinary reverse-geocode failure.
    onemap_base_url: str = "https://www.onemap.gov.sg"
    onemap_dev_token: str = ""
    onemap_prod_token: str = ""

    # SingStat Table Builder
    singstat_base_url: str = "https://tablebuilder.singstat.gov.sg/api"

    # HTTP
    http_timeout: float = 15.0

    # Resolution pipeline
    reverse_geocode_radius_m: int = 300
    reverse_geocode_wider_radius_m: int = 500

    # App
    cors_origins: str = "*"
    debug: bool = False
    log_level: str = "INFO"

    @property
    def onemap_token(self) -> str:
        if self.environment.lower() == "production":
            return self.onemap_prod_token
        return self.onemap_dev_token


settings = Settings()
