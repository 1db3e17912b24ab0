"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"

# Security headers
DEFAULT_HSTS_MAX_AGE = 31536000  # 1 year in seconds
