"""Auditable item graph REST client."""

from .client import BASE_PATH, AuditableItemGraphClient

__all__ = ["BASE_PATH", "AuditableItemGraphClient"]
