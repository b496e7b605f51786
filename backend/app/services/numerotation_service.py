"""
Numérotation séquentielle des documents (factures, devis, avoirs)

Format: FA-AAAA-NNNN

IMPORTANT: un numéro attribué est définitivement consommé, même si la création
du document échoue ensuite. Chaque année a son propre compteur, qui part de 1 et
n'est jamais réinitialisé (ni au redémarrage, ni par une action manuelle).

Garanties:
- un même numéro n'est jamais attribué deux fois dans un périmètre, même avec
  des appels concurrents (transaction dédiée + verrou sur le compteur)
- si le compteur est en retard sur les documents existants (données modifiées
  à la main, migration), il est recalé sur le plus grand numéro utilisé + 1
"""
import logging
import time
from datetime import datetime
from typing import Callable, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import AllocationConflict
from app.models.document import Document, TypeDocument
from app.models.sequence_document import SequenceDocument
from app.schemas.document import NumeroDocument

logger = logging.getLogger(__name__)

CHIFFRES_NUMERO = 4
PAUSE_ENTRE_TENTATIVES = 0.05  # secondes, multipliée par le numéro de tentative


def cle_sequence(type_document: TypeDocument, annee: int, tenant_id: Optional[int] = None) -> str:
    """Clé du compteur : "<tenant>_<TYPE>_<annee>", GLOBAL si numérotation commune"""
    proprietaire = "GLOBAL" if tenant_id is None else str(tenant_id)
    return f"{proprietaire}_{TypeDocument(type_document).value}_{annee}"


def prefixe_document(type_document: TypeDocument, annee: int) -> str:
    """Ex: FA-2026-"""
    return f"{TypeDocument(type_document).code}-{annee}-"


def formater_numero(prefixe: str, numero: int) -> str:
    """Ex: FA-2026- + 1 -> FA-2026-0001"""
    return f"{prefixe}{numero:0{CHIFFRES_NUMERO}d}"


class CounterStore:
    """
    Accès au compteur d'un périmètre dans la transaction de l'allocation.

    Seul ce store écrit dans sequences_documents.
    """

    def __init__(self, db: Session):
        self.db = db

    def read_and_increment(
        self,
        type_document: TypeDocument,
        annee: int,
        tenant_id: Optional[int] = None
    ) -> Tuple[SequenceDocument, int]:
        """
        Verrouille le compteur de l'année (créé à 0 si absent) et l'incrémente.

        Returns:
            Tuple (compteur, numéro candidat)

        Raises:
            IntegrityError: si un autre appel a créé le compteur en parallèle
        """
        cle = cle_sequence(type_document, annee, tenant_id)

        sequence = self.db.query(SequenceDocument).filter(
            SequenceDocument.cle == cle
        ).with_for_update().first()

        if not sequence:
            sequence = SequenceDocument(
                cle=cle,
                tenant_id=tenant_id,
                type_document=TypeDocument(type_document).value,
                annee=annee,
                dernier_numero=0
            )
            self.db.add(sequence)
            # Conflit de clé unique ici si un appel concurrent vient de le créer
            self.db.flush()

        sequence.dernier_numero += 1
        self.db.flush()
        return sequence, sequence.dernier_numero

    def plus_haut_numero(
        self,
        type_document: TypeDocument,
        prefixe: str,
        tenant_id: Optional[int] = None
    ) -> int:
        """Plus grand numéro déjà porté par un document du périmètre (0 si aucun)"""
        query = self.db.query(func.max(Document.numero)).filter(
            Document.type_document == TypeDocument(type_document),
            Document.prefixe == prefixe
        )
        if tenant_id is not None:
            query = query.filter(Document.tenant_id == tenant_id)
        return query.scalar() or 0

    def forcer_dernier_numero(self, sequence: SequenceDocument, numero: int) -> None:
        sequence.dernier_numero = numero
        self.db.flush()


def _allouer(
    db: Session,
    type_document: TypeDocument,
    annee: int,
    tenant_id: Optional[int]
) -> NumeroDocument:
    """Une tentative d'allocation, dans la transaction de db (sans commit)"""
    if db.get_bind().dialect.name != "sqlite":
        # SQLite sérialise déjà les écritures (BEGIN IMMEDIATE, voir database.py)
        db.connection(execution_options={"isolation_level": settings.NUMEROTATION_ISOLATION})

    store = CounterStore(db)
    prefixe = prefixe_document(type_document, annee)

    sequence, candidat = store.read_and_increment(type_document, annee, tenant_id)

    # Compteur en retard sur les documents existants : on se recale
    plus_haut = store.plus_haut_numero(type_document, prefixe, tenant_id)
    if plus_haut >= candidat:
        logger.warning(
            "Compteur %s désynchronisé: candidat %s mais %s déjà utilisé, recalage à %s",
            sequence.cle, candidat, formater_numero(prefixe, plus_haut), plus_haut + 1
        )
        candidat = plus_haut + 1
        store.forcer_dernier_numero(sequence, candidat)

    return NumeroDocument(
        numero_sequentiel=candidat,
        prefixe=prefixe,
        numero_complet=formater_numero(prefixe, candidat)
    )


def allocate_document_number(
    session_factory: Callable[[], Session],
    type_document: TypeDocument,
    annee: Optional[int] = None,
    tenant_id: Optional[int] = None,
    max_tentatives: Optional[int] = None
) -> NumeroDocument:
    """
    Réserve le prochain numéro d'un périmètre (type + année [+ tenant]).

    Chaque tentative ouvre sa propre session et committe avant de retourner :
    le numéro est consommé dès le retour de cette fonction, indépendamment de
    la transaction de l'appelant.

    Args:
        session_factory: Fabrique de sessions (ex: SessionLocal)
        type_document: FACTURE, DEVIS ou AVOIR
        annee: Année de numérotation (défaut: année courante)
        tenant_id: Entreprise propriétaire, None = séquence globale
        max_tentatives: Défaut: settings.NUMEROTATION_MAX_TENTATIVES

    Returns:
        NumeroDocument (ex: numero_complet="FA-2026-0001")

    Raises:
        AllocationConflict: contention persistante après toutes les tentatives

    Usage:
        numero = allocate_document_number(SessionLocal, TypeDocument.FACTURE, tenant_id=tenant_id)
        # numero.numero_complet == "FA-2026-0001"
    """
    type_document = TypeDocument(type_document)
    annee = annee or datetime.now().year
    max_tentatives = max_tentatives or settings.NUMEROTATION_MAX_TENTATIVES
    cle = cle_sequence(type_document, annee, tenant_id)

    derniere_erreur = None
    for tentative in range(1, max_tentatives + 1):
        db = session_factory()
        try:
            numero = _allouer(db, type_document, annee, tenant_id)
            db.commit()
        except (OperationalError, IntegrityError) as e:
            db.rollback()
            derniere_erreur = e
            logger.warning(
                "Allocation %s/%s en conflit (tentative %s/%s): %s",
                cle, annee, tentative, max_tentatives, e.orig if e.orig is not None else e
            )
            if tentative < max_tentatives:
                time.sleep(PAUSE_ENTRE_TENTATIVES * tentative)
            continue
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        logger.info("Numéro %s attribué (%s)", numero.numero_complet, cle)
        return numero

    logger.error("Allocation %s/%s abandonnée après %s tentatives", cle, annee, max_tentatives)
    raise AllocationConflict(cle, max_tentatives) from derniere_erreur
