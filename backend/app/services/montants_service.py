"""
Calcul des montants d'un document (HT, TVA, TTC)

Fonctions pures : aucune I/O, même entrée -> même sortie.
Les entrées invalides (négatives, non numériques) sont ramenées à 0
au lieu d'être rejetées ; la validation métier reste à l'appelant.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from app.schemas.document import MontantsDocument

CENTIME = Decimal("0.01")
TAUX_TVA_DEFAUT = Decimal("20")


def _vers_decimal(valeur: Any) -> Decimal:
    """Convertit en Decimal positif ; tout ce qui n'est pas un nombre fini vaut 0."""
    if valeur is None or isinstance(valeur, bool):
        return Decimal(0)
    try:
        # str() pour que 10.005 reste exactement 10.005 et non 10.00499...
        montant = valeur if isinstance(valeur, Decimal) else Decimal(str(valeur).strip())
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)
    if not montant.is_finite() or montant < 0:
        return Decimal(0)
    return montant


def arrondir(montant: Decimal) -> Decimal:
    """Arrondi au centime, demi supérieur"""
    return montant.quantize(CENTIME, rounding=ROUND_HALF_UP)


def calculer_montants(
    sous_total: Any,
    reduction: Any = 0,
    taux_tva: Any = TAUX_TVA_DEFAUT
) -> MontantsDocument:
    """
    Calcule la ventilation HT / TVA / TTC d'un document.

    Chaque montant est arrondi indépendamment au centime ; la TVA est calculée
    sur le HT non arrondi et le TTC sur HT non arrondi + TVA arrondie. Ce mode
    de calcul doit rester identique pour reproduire les documents existants.

    Args:
        sous_total: Somme des lignes
        reduction: Remise globale (plafonnée de fait : le HT ne descend pas sous 0)
        taux_tva: Taux en pourcentage (None = 20)

    Returns:
        MontantsDocument

    Usage:
        calculer_montants(150, 50, 20)
        # sous_total=150.00 reduction=50.00 montant_ht=100.00 montant_tva=20.00 montant_ttc=120.00
    """
    sous_total = _vers_decimal(sous_total)
    reduction = _vers_decimal(reduction)
    taux = TAUX_TVA_DEFAUT if taux_tva is None else _vers_decimal(taux_tva)

    montant_ht = max(Decimal(0), sous_total - reduction)
    montant_tva = arrondir(montant_ht * taux / 100)
    montant_ttc = arrondir(montant_ht + montant_tva)

    return MontantsDocument(
        sous_total=arrondir(sous_total),
        reduction=arrondir(reduction),
        montant_ht=arrondir(montant_ht),
        taux_tva=taux,
        montant_tva=montant_tva,
        montant_ttc=montant_ttc,
    )


def calculer_montant_ligne(quantite: Any, prix_unitaire: Any) -> Decimal:
    """Montant d'une ligne : quantité x prix unitaire, arrondi au centime"""
    return arrondir(_vers_decimal(quantite) * _vers_decimal(prix_unitaire))


def somme_lignes(montants: Iterable[Any]) -> Decimal:
    """Sous-total d'un document à partir des montants de ses lignes"""
    return sum((_vers_decimal(m) for m in montants), Decimal(0))
