"""Shared utilities for schema-bridge."""
