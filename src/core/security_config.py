"""Redaction rules and error-field allow lists for the API."""

# Substrings marking a log field or header as secret. Provider credentials
# (OpenRouter, OpenAI, Gemini, Azure, Brave) all travel under these names.
SENSITIVE_KEYS: set[str] = {
    "password",
    "secret",
    "access_token",
    "refresh_token",
    "auth_token",
    "authorization",
    "api_key",
    "apikey",
    "api-key",
    "bearer",
    "credential",
    "cookie",
    "session_id",
    "x-subscription-token",
    "email",
    "phone",
}

# Production error bodies only carry these fields
PRODUCTION_ERROR_FIELDS: set[str] = {
    "correlation_id",
    "type",
}

DEVELOPMENT_ERROR_FIELDS: set[str] = PRODUCTION_ERROR_FIELDS | {
    "details",
    "traceback",
    "exception_type",
    "validation_errors",
}


def get_allowed_error_fields(environment: str) -> set[str]:
    """Fields an error body may expose in `environment`."""
    if environment == "production":
        return PRODUCTION_ERROR_FIELDS.copy()
    return DEVELOPMENT_ERROR_FIELDS.copy()


def is_sensitive_key(key: str) -> bool:
    """True if `key` (case-insensitive) contains any sensitive marker."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)
