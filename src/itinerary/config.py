from os import environ

import boto3
from pydantic import BaseModel, ConfigDict

_cached_maps_key: str | None = None


def _resolve_maps_key() -> str:
    """Fetch the Google Maps API key at runtime, with caching."""
    global _cached_maps_key
    if _cached_maps_key is not None:
        return _cached_maps_key

    # Local dev: use env var directly
    direct = environ.get("GOOGLE_MAPS_API_KEY", "")
    if direct:
        _cached_maps_key = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get("GOOGLE_MAPS_SECRET_ARN", "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager")
    _cached_maps_key = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_maps_key


def _optional_float(name: str) -> float | None:
    raw = environ.get(name, "")
    return float(raw) if raw else None


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    aurora_host: str
    aurora_port: int
    aurora_database: str
    aurora_user: str
    aurora_password: str
    aurora_secret_arn: str | None = None
    dynamodb_endpoint: str | None = None
    cache_backend: str = "file"
    cache_table: str
    cache_prefix: str
    cache_ttl_seconds: float
    travel_times_ttl_seconds: float
    cache_file: str
    api_base_url: str
    http_timeout_seconds: float | None = None
    google_maps_api_key: str = ""
    alembic_config: str
    environment: str


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config (tests only)."""
    global _cached_config, _cached_maps_key
    _cached_config = None
    _cached_maps_key = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        aurora_host=environ.get("AURORA_HOST", "localhost"),
        aurora_port=int(environ.get("AURORA_PORT", "5432")),
        aurora_database=environ.get("AURORA_DATABASE", "itinerary"),
        aurora_user=environ.get("AURORA_USER", "itinerary"),
        aurora_password=environ.get("AURORA_PASSWORD", "localdev"),
        aurora_secret_arn=environ.get("AURORA_SECRET_ARN"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        cache_backend=environ.get("CACHE_BACKEND", "file").lower(),
        cache_table=environ.get("CACHE_TABLE", "ItineraryCache"),
        cache_prefix=environ.get("CACHE_PREFIX", "mallorca_cache_"),
        cache_ttl_seconds=float(environ.get("CACHE_TTL_SECONDS", "300")),
        travel_times_ttl_seconds=float(environ.get("TRAVEL_TIMES_TTL_SECONDS", "1800")),
        cache_file=environ.get("CACHE_FILE", ".itinerary_cache.json"),
        api_base_url=environ.get("API_BASE_URL", "http://localhost:3000/api"),
        http_timeout_seconds=_optional_float("HTTP_TIMEOUT_SECONDS"),
        google_maps_api_key=_resolve_maps_key(),
        alembic_config=environ.get("ALEMBIC_CONFIG", "/var/task/alembic.ini"),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
