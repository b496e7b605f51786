"""
Helpers base de données - accès aux entités d'un tenant
"""
from typing import Type, TypeVar, Optional, Any
from sqlalchemy.orm import Session
from fastapi import HTTPException

T = TypeVar('T')


def get_by_id(
    db: Session,
    model: Type[T],
    entity_id: int,
    tenant_id: int,
    raise_not_found: bool = True,
    error_message: str = None,
    options: list = None
) -> Optional[T]:
    """
    Cherche une entité par ID dans le tenant courant.

    Args:
        db: Session
        model: Modèle SQLAlchemy (doit avoir id et tenant_id)
        entity_id: ID recherché
        tenant_id: Tenant courant (isolation)
        raise_not_found: Lève HTTPException 404 si absent
        error_message: Message d'erreur personnalisé
        options: Options de chargement (joinedload, selectinload)

    Usage:
        client = get_by_id(db, Client, client_id, tenant_id)
        document = get_by_id(db, Document, id, tenant_id, options=[selectinload(Document.lignes)])
    """
    query = db.query(model).filter(
        model.id == entity_id,
        model.tenant_id == tenant_id
    )

    if options:
        query = query.options(*options)

    entity = query.first()

    if not entity and raise_not_found:
        raise HTTPException(status_code=404, detail=error_message or f"{model.__name__} introuvable")

    return entity


def validate_fk(
    db: Session,
    model: Type[T],
    fk_id: int,
    tenant_id: int,
    field_name: str = None
) -> T:
    """
    Vérifie qu'une clé étrangère existe dans le tenant.

    Raises:
        HTTPException 404 si absente

    Usage:
        client = validate_fk(db, Client, data.client_id, tenant_id, "Client")
    """
    entity = db.query(model).filter(
        model.id == fk_id,
        model.tenant_id == tenant_id
    ).first()

    if not entity:
        name = field_name or model.__name__
        raise HTTPException(status_code=404, detail=f"{name} introuvable")

    return entity


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    tenant_id: int,
    exclude_id: int = None,
    display_name: str = None
) -> None:
    """
    Vérifie l'unicité d'un champ dans le tenant.

    Raises:
        HTTPException 400 si la valeur existe déjà

    Usage:
        validate_unique(db, Client, "num_dossier", num_dossier, tenant_id)
        validate_unique(db, Client, "num_dossier", num_dossier, tenant_id, exclude_id=client.id)
    """
    field = getattr(model, field_name)
    query = db.query(model).filter(
        field == field_value,
        model.tenant_id == tenant_id
    )

    if exclude_id:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise HTTPException(status_code=400, detail=f"{name} existe déjà")
