"""Composition root for wiring dependencies.

API and application code depend on ports. This package is the only
place that chooses concrete adapters for them.
"""
