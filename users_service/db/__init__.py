"""Persistence layer: engine construction, ORM models, schemas and the record store."""
