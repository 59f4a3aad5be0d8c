"""Infraestructura: adaptadores de persistencia (Postgres / in-memory)."""
