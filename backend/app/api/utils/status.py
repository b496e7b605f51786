"""
Helpers de statut - transitions autorisées
"""
from typing import TypeVar, Dict, List
from enum import Enum
from fastapi import HTTPException

T = TypeVar('T')


def transition_status(
    entity: T,
    new_status: Enum,
    allowed_transitions: Dict[Enum, List[Enum]]
) -> T:
    """
    Change le statut si la transition est autorisée.

    Args:
        entity: Entité avec un champ 'status' ou 'statut'
        new_status: Nouveau statut
        allowed_transitions: {statut_actuel: [statuts_autorisés]}

    Raises:
        HTTPException 400 si la transition n'est pas autorisée

    Usage:
        TRANSITIONS = {StatutDocument.EN_ATTENTE: [StatutDocument.PAYEE, StatutDocument.ANNULEE]}
        document = transition_status(document, StatutDocument.PAYEE, TRANSITIONS)
    """
    champ = "statut" if hasattr(entity, "statut") else "status"
    current = getattr(entity, champ)

    if new_status not in allowed_transitions.get(current, []):
        raise HTTPException(
            status_code=400,
            detail=f"Transition de {current.value} vers {new_status.value} non autorisée"
        )

    setattr(entity, champ, new_status)
    return entity
