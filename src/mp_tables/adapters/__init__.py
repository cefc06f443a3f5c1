"""Adapters – concrete integrations with third-party libraries."""
