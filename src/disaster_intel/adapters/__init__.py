"""Adapters for upstream services and report feeds."""
