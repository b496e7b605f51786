from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.ext.declarative import declared_attr
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class TenantMixin:
    """
    Mixin ajoutant tenant_id aux tables métier
    CRITIQUE pour l'isolation multi-tenant

    Toute table qui hérite de ce mixin reçoit :
    - tenant_id (clé étrangère vers entreprises.id)
    - la relation vers Entreprise
    """

    @declared_attr
    def tenant_id(cls):
        return Column(Integer, ForeignKey('entreprises.id'), nullable=False, index=True)

    @declared_attr
    def tenant(cls):
        return relationship("Entreprise", foreign_keys=[cls.tenant_id])


class TimestampMixin:
    """
    Mixin pour les champs d'audit temporel
    """
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


# Base est définie dans database.py
# Ré-exportée ici pour simplifier les imports des modèles
__all__ = ['Base', 'TenantMixin', 'TimestampMixin']
