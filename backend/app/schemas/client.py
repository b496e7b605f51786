from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, List
from datetime import datetime
import re


class ClientBase(BaseModel):
    """Schéma de base d'un dossier client"""
    num_dossier: str = Field(..., min_length=1, max_length=50, description="Numéro de dossier (ex: AM0028)")
    raison_sociale: str = Field(..., min_length=1, max_length=200)
    adresse: Optional[str] = Field(None, max_length=500)
    siret: Optional[str] = Field(None, min_length=14, max_length=14, description="SIRET (chiffres uniquement)")
    siren: Optional[str] = Field(None, min_length=9, max_length=9, description="SIREN (chiffres uniquement)")
    email: Optional[EmailStr] = None
    telephone: Optional[str] = Field(None, max_length=20)

    @field_validator('num_dossier')
    @classmethod
    def normaliser_num_dossier(cls, v):
        return v.strip().upper()

    @field_validator('siret', 'siren')
    @classmethod
    def valider_chiffres(cls, v):
        """SIRET / SIREN : chiffres uniquement"""
        if v and not re.match(r'^\d+$', v):
            raise ValueError('Doit contenir uniquement des chiffres')
        return v


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    """Tous les champs optionnels"""
    num_dossier: Optional[str] = Field(None, min_length=1, max_length=50)
    raison_sociale: Optional[str] = Field(None, min_length=1, max_length=200)
    adresse: Optional[str] = Field(None, max_length=500)
    siret: Optional[str] = Field(None, min_length=14, max_length=14)
    siren: Optional[str] = Field(None, min_length=9, max_length=9)
    email: Optional[EmailStr] = None
    telephone: Optional[str] = Field(None, max_length=20)

    @field_validator('num_dossier')
    @classmethod
    def normaliser_num_dossier(cls, v):
        return v.strip().upper() if v else v


class ClientResponse(ClientBase):
    id: int
    tenant_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientListResponse(BaseModel):
    items: List[ClientResponse]
    total: int
    page: int
    page_size: int
