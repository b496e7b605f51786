"""
Modèles - Multi-tenant

IMPORTANT: les modèles métier héritent de TenantMixin, qui ajoute tenant_id
et garantit l'isolation des données entre entreprises
"""

from app.models.base import Base, TenantMixin, TimestampMixin
from app.models.entreprise import Entreprise
from app.models.client import Client
from app.models.document import (
    Document,
    LigneDocument,
    TypeDocument,
    StatutDocument,
    CODES_TYPE_DOCUMENT,
)
from app.models.sequence_document import SequenceDocument

__all__ = [
    "Base",
    "TenantMixin",
    "TimestampMixin",
    "Entreprise",
    "Client",
    "Document",
    "LigneDocument",
    "TypeDocument",
    "StatutDocument",
    "CODES_TYPE_DOCUMENT",
    "SequenceDocument",
]
