from contextvars import ContextVar
from typing import Optional

# Tenant de la requête en cours, accessible sans passer de paramètre
# (utilisé notamment par le filtre de logs)
_tenant_id_ctx_var: ContextVar[Optional[int]] = ContextVar('tenant_id', default=None)


def get_current_tenant_id() -> Optional[int]:
    """
    Retourne le tenant_id du contexte de la requête en cours
    """
    return _tenant_id_ctx_var.get()


def set_current_tenant_id(tenant_id: int) -> None:
    """
    Définit le tenant_id dans le contexte de la requête en cours
    """
    _tenant_id_ctx_var.set(tenant_id)


def clear_current_tenant_id() -> None:
    """
    Vide le tenant_id du contexte
    """
    _tenant_id_ctx_var.set(None)
