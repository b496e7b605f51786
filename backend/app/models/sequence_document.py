"""
Compteur de numérotation des documents
Un enregistrement par périmètre (tenant + type de document + année)
"""
from sqlalchemy import Column, Integer, String
from app.models.base import Base


class SequenceDocument(Base):
    """
    Dernier numéro attribué pour un périmètre de numérotation.

    Écrit UNIQUEMENT par le service de numérotation. Jamais supprimé ni
    remis à zéro : une nouvelle année crée un nouveau compteur.
    """
    __tablename__ = "sequences_documents"

    id = Column(Integer, primary_key=True, index=True)
    cle = Column(String(100), unique=True, nullable=False)  # "<tenant|GLOBAL>_<TYPE>_<annee>"
    tenant_id = Column(Integer, nullable=True, index=True)
    type_document = Column(String(20), nullable=False)
    annee = Column(Integer, nullable=False)
    dernier_numero = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<SequenceDocument {self.cle} {self.annee}:{self.dernier_numero}>"
