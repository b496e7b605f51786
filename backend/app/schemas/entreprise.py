from pydantic import BaseModel, Field, EmailStr
from typing import Optional
from datetime import datetime
from decimal import Decimal


class EntrepriseResponse(BaseModel):
    id: int
    nom: str
    raison_sociale: Optional[str] = None
    siret: Optional[str] = None
    adresse: Optional[str] = None
    actif: bool
    taux_tva_defaut: Optional[Decimal] = None
    email_contact: str
    telephone: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EntrepriseUpdate(BaseModel):
    """Profil modifiable par l'entreprise elle-même (pas le statut du compte)"""
    nom: Optional[str] = Field(None, min_length=1, max_length=200)
    raison_sociale: Optional[str] = Field(None, max_length=200)
    siret: Optional[str] = Field(None, min_length=14, max_length=14, pattern=r'^\d{14}$')
    adresse: Optional[str] = Field(None, max_length=500)
    taux_tva_defaut: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2, description="Taux de TVA par défaut (%)")
    email_contact: Optional[EmailStr] = None
    telephone: Optional[str] = Field(None, max_length=20)
