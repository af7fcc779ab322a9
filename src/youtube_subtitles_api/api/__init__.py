"""API package for routers and models."""
