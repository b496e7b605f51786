"""
Routes des dossiers clients
"""
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from app.api.deps import get_db, get_current_tenant_id
from app.models.client import Client
from app.models.document import Document
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse
)
from app.api.utils import (
    get_by_id, validate_unique,
    paginate_query, apply_search_filter, update_entity
)

router = APIRouter()


@router.post("/", response_model=ClientResponse, status_code=201)
def creer_client(
    client: ClientCreate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Créer un dossier client"""
    validate_unique(db, Client, "num_dossier", client.num_dossier, tenant_id, display_name="Numéro de dossier")

    db_client = Client(**client.model_dump(), tenant_id=tenant_id)
    db.add(db_client)
    db.commit()
    db.refresh(db_client)
    return db_client


@router.get("/", response_model=ClientListResponse)
def lister_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    busca: Optional[str] = Query(None, description="Recherche sur numéro de dossier ou raison sociale"),
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Lister les clients avec pagination"""
    query = db.query(Client).filter(Client.tenant_id == tenant_id)
    query = apply_search_filter(query, busca, Client.num_dossier, Client.raison_sociale)

    items, total = paginate_query(query, page, page_size, Client.num_dossier)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{client_id}", response_model=ClientResponse)
def obtenir_client(
    client_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    return get_by_id(db, Client, client_id, tenant_id, error_message="Client introuvable")


@router.put("/{client_id}", response_model=ClientResponse)
def modifier_client(
    client_id: int,
    client_update: ClientUpdate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Modifier un dossier client"""
    client = get_by_id(db, Client, client_id, tenant_id, error_message="Client introuvable")

    if client_update.num_dossier and client_update.num_dossier != client.num_dossier:
        validate_unique(
            db, Client, "num_dossier", client_update.num_dossier, tenant_id,
            exclude_id=client_id, display_name="Numéro de dossier"
        )

    return update_entity(db, client, client_update)


@router.delete("/{client_id}", status_code=204)
def supprimer_client(
    client_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Supprimer un client sans document"""
    client = get_by_id(db, Client, client_id, tenant_id, error_message="Client introuvable")

    # Les documents ne sont jamais supprimés, le client doit donc rester
    nb_documents = db.query(Document).filter(
        Document.client_id == client_id,
        Document.tenant_id == tenant_id
    ).count()
    if nb_documents:
        raise HTTPException(
            status_code=400,
            detail=f"Client lié à {nb_documents} document(s), suppression impossible"
        )

    db.delete(client)
    db.commit()
    return None
