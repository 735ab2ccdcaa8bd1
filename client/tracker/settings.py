"""Settings for the tracker78 client data layer."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	# Application backend; the only target the facades talk to.
	api_base_url: str = _env_field("https://tracker78.example.com/api", "TRACKER_API_BASE_URL", "API_BASE_URL")
	# Identity provider, only used for the "get current account" lookup.
	identity_base_url: str = _env_field("https://fra.cloud.appwrite.io/v1", "TRACKER_IDENTITY_BASE_URL")
	project_id: str = _env_field("683f5658000ba43c36cd", "TRACKER_PROJECT_ID", "APPWRITE_PROJECT_ID")
	request_timeout_seconds: Optional[float] = _env_field(10.0, "TRACKER_REQUEST_TIMEOUT_SECONDS")

	# Device-local key-value store
	redis_url: str = _env_field("redis://localhost:6379/0", "TRACKER_REDIS_URL", "REDIS_URL")

	# Local mirror defaults
	default_base_lat: float = 5.6037
	default_base_lng: float = -0.1870
	nearby_radius_deg: float = 0.02
	notification_ttl_seconds: float = 5.0
	notification_limit: int = 5

	# Polling cadence for "check for updates" loops
	poll_requests_seconds: float = 3.0
	poll_locations_seconds: float = 30.0

	environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
	log_level: str = _env_field("INFO", "LOG_LEVEL")
	log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")
	service_name: str = _env_field("tracker78-client", "SERVICE_NAME")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		extra="ignore",
	)

	@field_validator("api_base_url", "identity_base_url")
	@classmethod
	def _strip_trailing_slash(cls, value: str) -> str:
		return value.rstrip("/")

	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development", "test")


settings = Settings()
