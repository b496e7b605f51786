"""
Helpers de mise à jour d'entités
"""
from typing import TypeVar, List, Union
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar('T')


def update_entity(
    db: Session,
    entity: T,
    update_data: Union[BaseModel, dict],
    exclude_fields: List[str] = None,
    commit: bool = True
) -> T:
    """
    Applique sur l'entité les champs d'un schéma Pydantic ou d'un dict.

    Pour un schéma, seuls les champs explicitement envoyés (exclude_unset)
    sont modifiés.

    Usage:
        client = update_entity(db, client, client_update)
        document = update_entity(db, document, {"statut": StatutDocument.PAYEE})
    """
    if isinstance(update_data, BaseModel):
        data = update_data.model_dump(exclude_unset=True)
    else:
        data = dict(update_data)

    if exclude_fields:
        data = {k: v for k, v in data.items() if k not in exclude_fields}

    for field, value in data.items():
        if hasattr(entity, field):
            setattr(entity, field, value)

    if commit:
        db.commit()
        db.refresh(entity)

    return entity
