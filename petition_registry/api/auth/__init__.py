"""Caller identification for the registry API."""
