"""Cross-cutting concerns: logging setup."""
