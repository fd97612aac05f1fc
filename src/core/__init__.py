"""Cross-cutting building blocks shared by every layer.

- **config**: pydantic-settings configuration
- **context**: correlation ID storage
- **exceptions**: error hierarchy with codes and severities
- **error_context**: redaction of sensitive values before logging
- **logging**: Loguru setup with console and JSON output
- **observability**: OpenTelemetry tracing
- **security**: access token issuing and verification
- **types**: shared type aliases
"""
