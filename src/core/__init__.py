"""Cross-cutting building blocks shared by every layer.

- **config**: pydantic-settings configuration
- **context**: Correlation ID storage
- **exceptions**: Exception hierarchy with error codes and severities
- **error_context**: Redaction of sensitive values before logging
- **logging**: Loguru sinks and stdlib interception
- **observability**: OpenTelemetry tracing
"""
