from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.models.base import Base, TenantMixin, TimestampMixin
import enum


class TypeDocument(str, enum.Enum):
    FACTURE = "FACTURE"
    DEVIS = "DEVIS"
    AVOIR = "AVOIR"

    @property
    def code(self) -> str:
        """Code à deux lettres utilisé dans le numéro (FA, DV, AV)"""
        return CODES_TYPE_DOCUMENT[self]


CODES_TYPE_DOCUMENT = {
    TypeDocument.FACTURE: "FA",
    TypeDocument.DEVIS: "DV",
    TypeDocument.AVOIR: "AV",
}


class StatutDocument(str, enum.Enum):
    EN_ATTENTE = "EN_ATTENTE"
    PAYEE = "PAYEE"
    ANNULEE = "ANNULEE"


class Document(Base, TenantMixin, TimestampMixin):
    """
    Facture, devis ou avoir

    Flux:
    EN_ATTENTE -> PAYEE
    EN_ATTENTE -> ANNULEE

    Jamais supprimé : un numéro attribué reste consommé, même annulé.
    """
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)

    # Identification
    type_document = Column(SQLEnum(TypeDocument), nullable=False, index=True)
    prefixe = Column(String(20), nullable=False, index=True)  # FA-2026-
    numero = Column(Integer, nullable=False)  # 1
    numero_complet = Column(String(30), nullable=False, index=True)  # FA-2026-0001

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    statut = Column(SQLEnum(StatutDocument), default=StatutDocument.EN_ATTENTE, nullable=False)

    # Montants
    sous_total = Column(Numeric(15, 2), nullable=False, default=0)
    reduction = Column(Numeric(15, 2), nullable=False, default=0)
    montant_ht = Column(Numeric(15, 2), nullable=False, default=0)
    taux_tva = Column(Numeric(5, 2), nullable=False, default=20)
    montant_tva = Column(Numeric(15, 2), nullable=False, default=0)
    montant_ttc = Column(Numeric(15, 2), nullable=False, default=0)

    created_by = Column(Integer, nullable=True)  # user_id du token

    client = relationship("Client", backref="documents")
    lignes = relationship(
        "LigneDocument",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="LigneDocument.id"
    )

    __table_args__ = (
        UniqueConstraint('tenant_id', 'numero_complet', name='uq_document_tenant_numero_complet'),
    )

    def __repr__(self):
        return f"<Document {self.numero_complet}>"


class LigneDocument(Base):
    """
    Ligne de détail d'un document
    """
    __tablename__ = "lignes_documents"

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False, index=True)

    description = Column(String(500), nullable=False)
    quantite = Column(Numeric(15, 4), nullable=False, default=1)
    prix_unitaire = Column(Numeric(15, 2), nullable=False, default=0)
    montant = Column(Numeric(15, 2), nullable=False, default=0)

    document = relationship("Document", back_populates="lignes")
