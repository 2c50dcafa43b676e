"""
Shared utilities for the parameter cache.

This package aggregates the cross-cutting building blocks used by
``parameter_cache``:

- config: Environment-backed settings via pydantic-settings
- logging: Structured logging with structlog
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- test_helpers: Test doubles for the parameter store and the clock

Do not import from parameter_cache into shared/.
"""
