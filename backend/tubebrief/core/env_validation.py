"""
Environment variable validation and security checks.

This module validates that all required environment variables are properly
configured before the application starts.
"""

import sys
from typing import List, Optional, Tuple

from tubebrief.core.config import settings
from tubebrief.core.logging import get_logger

logger = get_logger(__name__)


ASYNC_DRIVER_PREFIXES = (
    "postgresql+asyncpg://",
    "sqlite+aiosqlite://",
)


def validate_secret_key(key_name: str, key_value: Optional[str], min_length: int = 32) -> List[str]:
    """
    Validate that a secret key meets security requirements.

    Args:
        key_name: Name of the key (for error messages)
        key_value: The key value to validate
        min_length: Minimum required length

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not key_value:
        errors.append(f"{key_name} is not set")
        return errors

    if len(key_value) < min_length:
        errors.append(
            f"{key_name} is too short (must be at least {min_length} characters)"
        )

    lowered = key_value.lower()
    if "change" in lowered or "your-" in lowered or "example" in lowered:
        errors.append(
            f"{key_name} appears to be a placeholder value - update with a real secret key"
        )

    return errors


def validate_database_url() -> List[str]:
    """
    Validate database URL configuration.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")
        return errors

    if not settings.DATABASE_URL.startswith(ASYNC_DRIVER_PREFIXES):
        errors.append(
            "DATABASE_URL must use an async driver "
            "(format: postgresql+asyncpg://... or sqlite+aiosqlite://...)"
        )

    if settings.is_production and settings.DATABASE_URL.startswith("sqlite"):
        errors.append("DATABASE_URL must point at PostgreSQL in production")

    return errors


def validate_optional_services() -> List[str]:
    """
    Report optional integrations that are switched off.

    Nothing here is fatal; missing keys only disable features.
    """
    if not settings.youtube_enabled:
        logger.warning(
            "environment_validation_warning",
            message="YOUTUBE_API_KEY not set - channel metadata will not be fetched",
        )
    return []


def validate_production_settings() -> List[str]:
    """
    Validate production-specific settings.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not settings.is_production:
        return errors

    if settings.DEBUG:
        errors.append("DEBUG must be false in production")

    if "localhost" in ",".join(settings.ALLOWED_ORIGINS):
        logger.warning(
            "localhost_in_allowed_origins",
            message="ALLOWED_ORIGINS includes localhost in production - may be insecure"
        )

    if settings.LOG_FORMAT != "json":
        logger.warning(
            "log_format_not_json",
            message="LOG_FORMAT should be 'json' in production for better log aggregation"
        )

    return errors


def validate_environment() -> Tuple[bool, List[str]]:
    """
    Validate all environment variables.

    Returns:
        (is_valid, list_of_errors)
    """
    all_errors = []

    logger.info(
        "validating_environment",
        app_env=settings.APP_ENV,
        app_name=settings.APP_NAME
    )

    all_errors.extend(validate_secret_key("SECRET_KEY", settings.SECRET_KEY))
    all_errors.extend(validate_database_url())
    all_errors.extend(validate_optional_services())
    all_errors.extend(validate_production_settings())

    if all_errors:
        logger.error(
            "environment_validation_failed",
            errors=all_errors,
            error_count=len(all_errors)
        )
        return False, all_errors

    logger.info(
        "environment_validation_successful",
        app_env=settings.APP_ENV,
        features_enabled={"youtube_metadata": settings.youtube_enabled},
    )
    return True, []


def validate_or_exit():
    """
    Validate environment and exit if validation fails.

    Called during application startup. Development keeps running with a
    logged error so a half-configured laptop can still serve requests.
    """
    is_valid, errors = validate_environment()

    if is_valid:
        logger.info("environment_validation_passed")
        return

    if settings.is_development or settings.is_testing:
        logger.warning("environment_validation_ignored", app_env=settings.APP_ENV)
        return

    logger.critical(
        "startup_aborted_invalid_environment",
        errors=errors
    )
    print("\nENVIRONMENT VALIDATION FAILED\n")
    print("The following configuration errors were found:\n")
    for i, error in enumerate(errors, 1):
        print(f"  {i}. {error}")
    print("\nPlease fix these errors and restart the application.\n")
    sys.exit(1)
