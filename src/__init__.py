"""
Open data gateway source root.

Layers:
- Domain: entities, broker gateway interface, cache and aggregation services
- Application: dataset services, query use cases and DTOs
- Infrastructure: httpx context broker gateway and health checks
- Presentation: FastAPI routers serving JSON, GeoJSON and CSV
- Shared: logging, environment helpers and constants
- Main: settings, dependency container and app factory
"""
