"""Database package: declarative Base for the ORM models."""
