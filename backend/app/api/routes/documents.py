"""
Routes des documents (factures, devis, avoirs)

Un document reçoit son numéro à la création et n'est jamais supprimé :
l'annulation passe par le statut ANNULEE et le numéro reste consommé.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, sessionmaker, joinedload, selectinload
from sqlalchemy import func
from typing import Optional
from decimal import Decimal
from app.api.deps import get_db, get_current_tenant_id, get_current_user_id, get_session_factory
from app.api.utils import (
    get_by_id, validate_fk, paginate_response,
    apply_search_filter, apply_filters, transition_status
)
from app.config import settings
from app.models.client import Client
from app.models.entreprise import Entreprise
from app.models.document import Document, LigneDocument, TypeDocument, StatutDocument
from app.schemas.document import (
    DocumentCreate, DocumentResponse, DocumentListResponse,
    CalculRequest, MontantsDocument, StatutUpdate, ResumeDocumentsResponse
)
from app.services.montants_service import arrondir, calculer_montants, calculer_montant_ligne, somme_lignes
from app.services.numerotation_service import allocate_document_number

logger = logging.getLogger(__name__)

router = APIRouter()

TRANSITIONS = {
    StatutDocument.EN_ATTENTE: [StatutDocument.PAYEE, StatutDocument.ANNULEE],
}


# ============ FONCTIONS AUXILIAIRES ============

def _taux_tva(db: Session, tenant_id: int, taux_demande: Optional[Decimal]) -> Decimal:
    """Taux de la requête, sinon celui de l'entreprise, sinon celui de la configuration"""
    if taux_demande is not None:
        return taux_demande
    taux_entreprise = db.query(Entreprise.taux_tva_defaut).filter(Entreprise.id == tenant_id).scalar()
    if taux_entreprise is not None:
        return taux_entreprise
    return Decimal(str(settings.TVA_TAUX_DEFAUT))


def _montants_lignes(lignes) -> list:
    """
    Montant de chaque ligne : celui fourni, sinon quantité x prix unitaire

    Arrondi au centime avant la somme, comme il sera stocké.
    """
    return [
        arrondir(ligne.montant) if ligne.montant is not None
        else calculer_montant_ligne(ligne.quantite, ligne.prix_unitaire)
        for ligne in lignes
    ]


def _enrich_document_response(document: Document) -> dict:
    """Réponse du document avec le dossier client"""
    response = {
        "id": document.id,
        "type_document": document.type_document,
        "prefixe": document.prefixe,
        "numero": document.numero,
        "numero_complet": document.numero_complet,
        "client_id": document.client_id,
        "statut": document.statut,
        "sous_total": document.sous_total,
        "reduction": document.reduction,
        "montant_ht": document.montant_ht,
        "taux_tva": document.taux_tva,
        "montant_tva": document.montant_tva,
        "montant_ttc": document.montant_ttc,
        "created_by": document.created_by,
        "tenant_id": document.tenant_id,
        "created_at": document.created_at,
        "updated_at": document.updated_at,
        "lignes": [],
        "client_num_dossier": None,
        "client_raison_sociale": None,
    }

    if document.client:
        response["client_num_dossier"] = document.client.num_dossier
        response["client_raison_sociale"] = document.client.raison_sociale

    for ligne in document.lignes:
        response["lignes"].append({
            "id": ligne.id,
            "description": ligne.description,
            "quantite": ligne.quantite,
            "prix_unitaire": ligne.prix_unitaire,
            "montant": ligne.montant,
        })

    return response


def _options_document():
    return [joinedload(Document.client), selectinload(Document.lignes)]


# ============ ROUTES ============

@router.post("/", response_model=DocumentResponse, status_code=201)
def creer_document(
    data: DocumentCreate,
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    tenant_id: int = Depends(get_current_tenant_id),
    user_id: int = Depends(get_current_user_id)
):
    """
    Créer une facture, un devis ou un avoir

    Le numéro est attribué dans sa propre transaction : si l'enregistrement
    du document échoue ensuite, le numéro est perdu (trou dans la séquence).
    """
    validate_fk(db, Client, data.client_id, tenant_id, "Client")

    montants_lignes = _montants_lignes(data.lignes)
    montants = calculer_montants(
        somme_lignes(montants_lignes),
        data.reduction,
        _taux_tva(db, tenant_id, data.taux_tva)
    )

    # Fin de la transaction de lecture avant l'attribution du numéro
    db.commit()

    numero = allocate_document_number(
        session_factory,
        data.type_document,
        tenant_id=tenant_id if settings.NUMEROTATION_PAR_TENANT else None
    )

    try:
        document = Document(
            type_document=data.type_document,
            prefixe=numero.prefixe,
            numero=numero.numero_sequentiel,
            numero_complet=numero.numero_complet,
            client_id=data.client_id,
            statut=StatutDocument.EN_ATTENTE,
            sous_total=montants.sous_total,
            reduction=montants.reduction,
            montant_ht=montants.montant_ht,
            taux_tva=montants.taux_tva,
            montant_tva=montants.montant_tva,
            montant_ttc=montants.montant_ttc,
            created_by=user_id,
            tenant_id=tenant_id
        )
        for ligne, montant in zip(data.lignes, montants_lignes):
            document.lignes.append(LigneDocument(
                description=ligne.description,
                quantite=ligne.quantite,
                prix_unitaire=ligne.prix_unitaire,
                montant=montant
            ))
        db.add(document)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Numéro %s consommé sans document (échec de l'enregistrement)", numero.numero_complet)
        raise

    db.refresh(document)
    logger.info("Document %s créé (client %s, TTC %s)", document.numero_complet, document.client_id, document.montant_ttc)
    return _enrich_document_response(document)


@router.post("/calcul", response_model=MontantsDocument)
def calculer_document(
    data: CalculRequest,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Aperçu HT / TVA / TTC d'un ensemble de lignes, sans attribuer de numéro"""
    return calculer_montants(
        somme_lignes(_montants_lignes(data.lignes)),
        data.reduction,
        _taux_tva(db, tenant_id, data.taux_tva)
    )


@router.get("/", response_model=DocumentListResponse)
def lister_documents(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    type_document: Optional[TypeDocument] = None,
    statut: Optional[StatutDocument] = None,
    client_id: Optional[int] = None,
    busca: Optional[str] = Query(None, description="Recherche sur le numéro (ex: FA-2026-00)"),
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Lister les documents, les plus récents d'abord"""
    query = db.query(Document).filter(
        Document.tenant_id == tenant_id
    ).options(*_options_document())

    query = apply_filters(query, [
        (Document.type_document, type_document),
        (Document.statut, statut),
        (Document.client_id, client_id),
    ])
    query = apply_search_filter(query, busca, Document.numero_complet)

    return paginate_response(
        query, page, page_size,
        order_by=(Document.created_at.desc(), Document.id.desc()),
        transform_fn=_enrich_document_response
    )


@router.get("/resume", response_model=ResumeDocumentsResponse)
def resume_documents(
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """
    Nombre de documents et total TTC par type et statut

    total_ttc global exclut les documents annulés.
    """
    lignes = db.query(
        Document.type_document,
        Document.statut,
        func.count(Document.id),
        func.coalesce(func.sum(Document.montant_ttc), 0)
    ).filter(
        Document.tenant_id == tenant_id
    ).group_by(
        Document.type_document, Document.statut
    ).order_by(
        Document.type_document, Document.statut
    ).all()

    par_type_et_statut = []
    total_documents = 0
    total_ttc = Decimal(0)
    for type_document, statut, nombre, total in lignes:
        total = Decimal(str(total))
        par_type_et_statut.append({
            "type_document": type_document,
            "statut": statut,
            "nombre": nombre,
            "total_ttc": total,
        })
        total_documents += nombre
        if statut != StatutDocument.ANNULEE:
            total_ttc += total

    return {
        "total_documents": total_documents,
        "total_ttc": total_ttc,
        "par_type_et_statut": par_type_et_statut,
    }


@router.get("/{document_id}", response_model=DocumentResponse)
def obtenir_document(
    document_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    document = get_by_id(
        db, Document, document_id, tenant_id,
        error_message="Document introuvable",
        options=_options_document()
    )
    return _enrich_document_response(document)


@router.patch("/{document_id}/statut", response_model=DocumentResponse)
def modifier_statut(
    document_id: int,
    data: StatutUpdate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """EN_ATTENTE -> PAYEE ou EN_ATTENTE -> ANNULEE"""
    document = get_by_id(db, Document, document_id, tenant_id, error_message="Document introuvable")
    transition_status(document, data.statut, TRANSITIONS)
    db.commit()
    db.refresh(document)

    logger.info("Document %s: statut %s", document.numero_complet, document.statut.value)
    return _enrich_document_response(document)


@router.post("/{document_id}/annuler", response_model=DocumentResponse)
def annuler_document(
    document_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Annuler un document (le numéro reste consommé)"""
    document = get_by_id(db, Document, document_id, tenant_id, error_message="Document introuvable")
    transition_status(document, StatutDocument.ANNULEE, TRANSITIONS)
    db.commit()
    db.refresh(document)

    logger.info("Document %s annulé", document.numero_complet)
    return _enrich_document_response(document)
