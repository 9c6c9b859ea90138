"""HTTP API for the petition registry."""
