"""
Profil de l'entreprise courante
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_tenant
from app.models.entreprise import Entreprise
from app.schemas.entreprise import EntrepriseResponse, EntrepriseUpdate
from app.api.utils import update_entity

router = APIRouter()


@router.get("/", response_model=EntrepriseResponse)
def obtenir_entreprise(entreprise: Entreprise = Depends(get_current_tenant)):
    return entreprise


@router.put("/", response_model=EntrepriseResponse)
def modifier_entreprise(
    entreprise_update: EntrepriseUpdate,
    entreprise: Entreprise = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """
    Modifier le profil (nom, SIRET, contact, taux de TVA par défaut)

    Le taux par défaut s'applique aux documents créés sans taux explicite.
    """
    if entreprise_update.siret and entreprise_update.siret != entreprise.siret:
        existe = db.query(Entreprise).filter(
            Entreprise.siret == entreprise_update.siret,
            Entreprise.id != entreprise.id
        ).first()
        if existe:
            raise HTTPException(status_code=400, detail="SIRET déjà utilisé")

    return update_entity(db, entreprise, entreprise_update)
