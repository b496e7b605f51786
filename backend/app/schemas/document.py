from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from app.models.document import TypeDocument, StatutDocument


# ============ VALEURS CALCULÉES ============

class MontantsDocument(BaseModel):
    """Ventilation HT / TVA / TTC (valeurs arrondies au centime)"""
    sous_total: Decimal
    reduction: Decimal
    montant_ht: Decimal
    taux_tva: Decimal
    montant_tva: Decimal
    montant_ttc: Decimal

    class Config:
        frozen = True


class NumeroDocument(BaseModel):
    """Numéro attribué par la séquence : FA-2026- + 0001"""
    numero_sequentiel: int
    prefixe: str
    numero_complet: str

    class Config:
        frozen = True


# ============ LIGNES ============

class LigneDocumentBase(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    quantite: Decimal = Field(default=Decimal(1), gt=0, decimal_places=4)
    prix_unitaire: Decimal = Field(default=Decimal(0), ge=0, decimal_places=2)


class LigneDocumentCreate(LigneDocumentBase):
    montant: Optional[Decimal] = Field(None, ge=0, decimal_places=2)  # None = quantite x prix_unitaire


class LigneDocumentResponse(LigneDocumentBase):
    id: int
    montant: Decimal

    class Config:
        from_attributes = True


# ============ DOCUMENT ============

class DocumentCreate(BaseModel):
    type_document: TypeDocument
    client_id: int
    lignes: List[LigneDocumentCreate] = Field(..., min_length=1)
    reduction: Decimal = Field(default=Decimal(0), ge=0, decimal_places=2)
    taux_tva: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)  # None = taux de l'entreprise


class CalculRequest(BaseModel):
    """Aperçu des montants, sans attribution de numéro"""
    lignes: List[LigneDocumentCreate] = Field(..., min_length=1)
    reduction: Decimal = Field(default=Decimal(0), ge=0, decimal_places=2)
    taux_tva: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)


class StatutUpdate(BaseModel):
    statut: StatutDocument


class DocumentResponse(BaseModel):
    id: int
    type_document: TypeDocument
    prefixe: str
    numero: int
    numero_complet: str
    client_id: int
    statut: StatutDocument
    sous_total: Decimal
    reduction: Decimal
    montant_ht: Decimal
    taux_tva: Decimal
    montant_tva: Decimal
    montant_ttc: Decimal
    created_by: Optional[int] = None
    tenant_id: int
    created_at: datetime
    updated_at: datetime
    lignes: List[LigneDocumentResponse] = []
    client_num_dossier: Optional[str] = None
    client_raison_sociale: Optional[str] = None

    class Config:
        from_attributes = True


class DocumentListResponse(BaseModel):
    items: List[DocumentResponse]
    total: int
    page: int
    page_size: int


# ============ RÉSUMÉ ============

class ResumeLigne(BaseModel):
    type_document: TypeDocument
    statut: StatutDocument
    nombre: int
    total_ttc: Decimal


class ResumeDocumentsResponse(BaseModel):
    total_documents: int
    total_ttc: Decimal
    par_type_et_statut: List[ResumeLigne]
