"""
Configuration settings for GOV.UK API access.

This module defines configuration settings for the API endpoints, rate
limiting, retries, pagination and logging. Values can be overridden from
environment variables (or a `.env` file in the working directory).
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

from .errors import ConfigError


# Load a local .env file if present; real environment variables take precedence
load_dotenv()

# Endpoint configuration
API = {
    # Base host for both APIs
    "BASE_URL": "https://www.gov.uk",
    # https://content-api.publishing.service.gov.uk/
    "CONTENT_PATH": "/api/content/",
    # https://docs.publishing.service.gov.uk/repos/search-api/using-the-search-api.html
    "SEARCH_PATH": "/api/search.json",
    # Request timeout in seconds
    "TIMEOUT": 30,
    "USER_AGENT": "govuk-python",
}

# Rate limiting configuration
# https://content-api.publishing.service.gov.uk/#rate-limiting
# The Content API allows 10 requests per second. The Search API documents no
# limit, so it shares the same budget.
RATE_LIMIT = {
    # Maximum admissions per window, counted across every client in the process
    "MAX_CALLS": 10,
    # Window length in seconds
    "WINDOW_SIZE": 1.0,
}

# Retry configuration
# GOV.UK APIs can be flakey when they're cold, so failed fetches are retried.
RETRY = {
    # Total attempts per request (first call plus ten retries)
    "MAX_ATTEMPTS": 11,
    # Delay before the first retry in seconds, doubled on each further retry
    "BASE_DELAY": 1.0,
    # Upper bound for a single backoff delay in seconds
    "MAX_DELAY": 30.0,
    # Random spread applied to each delay (0.25 = +/-25%)
    "JITTER_FACTOR": 0.25,
}

# Pagination configuration
PAGINATION = {
    # Largest page the Search API returns, also the default page size for get_all
    "MAX_PAGE_SIZE": 1000,
    # Number of facet options requested by SearchClient.facets
    "FACET_OPTION_LIMIT": 10000,
}

# Logging configuration
LOGGING = {
    "LEVEL": "INFO",
    # Log file used when the package configures logging on import
    "FILE": None,
}


def _env_number(name: str, cast: Any) -> Any:
    raw = os.environ[name]
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_env_config() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Returns:
        Dictionary mapping "SECTION.SETTING" keys to overridden values

    Raises:
        ConfigError: If a numeric variable cannot be parsed
    """
    config: Dict[str, Any] = {}

    # API settings
    if os.environ.get("GOVUK_BASE_URL"):
        config["API.BASE_URL"] = os.environ["GOVUK_BASE_URL"].rstrip("/")
    if "GOVUK_API_TIMEOUT" in os.environ:
        config["API.TIMEOUT"] = _env_number("GOVUK_API_TIMEOUT", float)

    # Rate limit settings
    if "GOVUK_MAX_CALLS" in os.environ:
        config["RATE_LIMIT.MAX_CALLS"] = _env_number("GOVUK_MAX_CALLS", int)
    if "GOVUK_WINDOW_SIZE" in os.environ:
        config["RATE_LIMIT.WINDOW_SIZE"] = _env_number("GOVUK_WINDOW_SIZE", float)

    # Retry settings
    if "GOVUK_MAX_ATTEMPTS" in os.environ:
        config["RETRY.MAX_ATTEMPTS"] = _env_number("GOVUK_MAX_ATTEMPTS", int)

    # Logging settings
    if os.environ.get("GOVUK_LOG_LEVEL"):
        config["LOGGING.LEVEL"] = os.environ["GOVUK_LOG_LEVEL"].upper()
    if os.environ.get("GOVUK_LOG_FILE"):
        config["LOGGING.FILE"] = os.environ["GOVUK_LOG_FILE"]

    return config


def apply_env_config(env_config: Dict[str, Any]) -> None:
    """
    Apply environment variable configuration.

    Args:
        env_config: Dictionary returned by load_env_config
    """
    for key, value in env_config.items():
        parts = key.split(".")
        if len(parts) == 2:
            module_name, setting_name = parts
            if module_name in globals() and setting_name in globals()[module_name]:
                globals()[module_name][setting_name] = value


# Apply environment configuration
ENV_CONFIG = load_env_config()
apply_env_config(ENV_CONFIG)
