"""Domain core: scoring, ports, services and cross-cutting concerns."""
