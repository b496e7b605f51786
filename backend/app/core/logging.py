import logging

from app.core.tenant_context import get_current_tenant_id

FORMAT_LOG = "%(asctime)s %(levelname)s [%(name)s] [tenant=%(tenant_id)s] %(message)s"


class TenantContextFilter(logging.Filter):
    """Ajoute le tenant de la requête en cours à chaque enregistrement."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tenant_id = get_current_tenant_id() or "-"
        return True


def configurer_logging(niveau: str = "INFO") -> None:
    logging.basicConfig(level=niveau.upper(), format=FORMAT_LOG)

    tenant_filter = TenantContextFilter()
    for handler in logging.getLogger().handlers:
        handler.addFilter(tenant_filter)
