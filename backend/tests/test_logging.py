"""Tests du filtre de logs par tenant."""

import logging

from app.core.logging import TenantContextFilter
from app.core.tenant_context import clear_current_tenant_id, set_current_tenant_id


def _record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)


def test_tenant_courant_ajoute():
    set_current_tenant_id(42)
    try:
        record = _record()
        assert TenantContextFilter().filter(record) is True
        assert record.tenant_id == 42
    finally:
        clear_current_tenant_id()


def test_hors_requete():
    record = _record()
    TenantContextFilter().filter(record)
    assert record.tenant_id == "-"
