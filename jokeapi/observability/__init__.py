"""Observability helpers.

Request IDs + structlog contextvars for logs, and a Prometheus registry per
application instance for request counts and latencies.
"""
