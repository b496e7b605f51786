from sqlalchemy import Column, Integer, String, UniqueConstraint
from app.models.base import Base, TenantMixin, TimestampMixin


class Client(Base, TenantMixin, TimestampMixin):
    """
    Dossier client d'une entreprise

    num_dossier est l'identifiant métier (ex: "AM0028"), unique par tenant.
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)

    num_dossier = Column(String(50), nullable=False, index=True)
    raison_sociale = Column(String(200), nullable=False)
    adresse = Column(String(500), nullable=True)
    siret = Column(String(14), nullable=True)
    siren = Column(String(9), nullable=True)
    email = Column(String(200), nullable=True)
    telephone = Column(String(20), nullable=True)

    __table_args__ = (
        UniqueConstraint('tenant_id', 'num_dossier', name='uq_client_tenant_num_dossier'),
    )

    def __repr__(self):
        return f"<Client {self.num_dossier} {self.raison_sociale}>"
