"""HTTP API layer: routers, dependency wiring and the application factory."""
