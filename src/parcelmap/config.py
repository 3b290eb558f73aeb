"""parcelmap configuration: external service endpoints and settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Geocoding (Nominatim-compatible search endpoint)
    geocoder_url: str = "https://nominatim.openstreetmap.org/search"

    # Parcel lookup: answers GET ?lat=&lon= with {"parcels": [...]}
    parcel_lookup_url: str = "http://localhost:8000/regrid/parcels"

    # HTTP
    http_timeout: float = 15.0
    user_agent: str = "parcelmap/0.1"

    @model_validator(mode="after")
    def _strip_urls(self) -> "Settings":
        """Strip whitespace/newlines from URLs: common paste error in .env files."""
        for field in ("geocoder_url", "parcel_lookup_url", "user_agent"):
            val = getattr(self, field)
            if val and val != val.strip():
                setattr(self, field, val.strip())
        return self

    # Initial map view (New York City)
    default_latitude: float = 40.7128
    default_longitude: float = -74.006
    default_zoom: int = 15

    @model_validator(mode="after")
    def _check_default_focus(self) -> "Settings":
        if not -90.0 <= self.default_latitude <= 90.0:
            raise ValueError(f"default_latitude out of range: {self.default_latitude}")
        if not -180.0 <= self.default_longitude <= 180.0:
            raise ValueError(f"default_longitude out of range: {self.default_longitude}")
        return self

    # MLflow: local SQLite store unless MLFLOW_TRACKING_URI is set
    mlflow_tracking_uri: str = "sqlite:///mlruns/mlflow.db"
    mlflow_experiment_name: str = "parcelmap"

    # Logging
    log_json: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
