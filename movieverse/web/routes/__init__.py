"""Routers JSON de l'API."""
