from sqlalchemy import Column, Integer, String, Boolean, Numeric
from app.models.base import Base, TimestampMixin


class Entreprise(Base, TimestampMixin):
    """
    Cabinet ou entreprise cliente du SaaS (le tenant)

    Chaque entreprise a ses propres clients, documents et séquences
    de numérotation.
    """
    __tablename__ = "entreprises"

    id = Column(Integer, primary_key=True, index=True)

    # Identification
    nom = Column(String(200), nullable=False)
    raison_sociale = Column(String(200), nullable=True)
    siret = Column(String(14), unique=True, nullable=True, index=True)
    adresse = Column(String(500), nullable=True)

    # Statut du compte
    actif = Column(Boolean, default=True, nullable=False)

    # Facturation
    taux_tva_defaut = Column(Numeric(5, 2), nullable=True)  # None = taux de la configuration

    # Contact
    email_contact = Column(String(200), nullable=False)
    telephone = Column(String(20), nullable=True)

    def __repr__(self):
        return f"<Entreprise {self.nom} (ID: {self.id})>"
