from abc import ABC
from typing import Optional


class UserError(ABC, Exception):
    """Base des erreurs dont le message peut être renvoyé au client.

    Les sous-classes ne doivent contenir aucune information sensible.
    """


class AllocationConflict(UserError):
    """Aucun numéro n'a pu être réservé après toutes les tentatives.

    L'appelant doit relancer toute la création du document (nouvel appel
    d'allocation), jamais réutiliser un numéro précédent.
    """

    def __init__(self, cle: str, tentatives: int, message: Optional[str] = None) -> None:
        self.cle = cle
        self.tentatives = tentatives
        super().__init__(
            message or f"Numérotation indisponible pour {cle} après {tentatives} tentatives, réessayez"
        )
