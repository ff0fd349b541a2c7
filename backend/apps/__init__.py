"""API apps, one package per domain with its routes and handlers."""
