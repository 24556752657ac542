"""Upstream clients and aggregation services."""
