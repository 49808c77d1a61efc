"""Suites used by the discovery and end-to-end tests."""
