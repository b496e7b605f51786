from fastapi import Depends, Request, HTTPException
from sqlalchemy.orm import Session, sessionmaker
from app.database import get_db
from app.models.entreprise import Entreprise


def get_current_tenant_id(request: Request) -> int:
    """
    Extrait le tenant_id du contexte de la requête (posé par le middleware)
    """
    if not hasattr(request.state, 'tenant_id'):
        raise HTTPException(status_code=400, detail="Entreprise non identifiée")
    return request.state.tenant_id


def get_current_user_id(request: Request) -> int:
    """
    Extrait le user_id du contexte de la requête
    """
    if not hasattr(request.state, 'user_id'):
        raise HTTPException(status_code=400, detail="Utilisateur non identifié")
    return request.state.user_id


def get_current_tenant(
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db)
) -> Entreprise:
    """
    Retourne l'Entreprise du tenant courant
    Vérifie qu'elle est active
    """
    entreprise = db.query(Entreprise).filter_by(id=tenant_id, actif=True).first()
    if not entreprise:
        raise HTTPException(
            status_code=404,
            detail="Entreprise introuvable ou inactive"
        )
    return entreprise


def get_session_factory(db: Session = Depends(get_db)) -> sessionmaker:
    """
    Fabrique de sessions liée au même engine que la requête

    La numérotation ouvre ses propres transactions, séparées de celle de la route.
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=db.get_bind())
