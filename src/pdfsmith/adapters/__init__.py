"""Integrations with the host: executable lookup and process execution."""
