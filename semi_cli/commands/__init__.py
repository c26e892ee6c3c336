"""Handlers bound to the semi-cli command tree."""
