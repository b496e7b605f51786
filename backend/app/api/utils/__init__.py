# Utilitaires API
from app.api.utils.db_helpers import get_by_id, validate_fk, validate_unique
from app.api.utils.pagination import paginate_query, paginate_response, apply_search_filter, apply_filters
from app.api.utils.updates import update_entity
from app.api.utils.status import transition_status

__all__ = [
    # db_helpers
    "get_by_id",
    "validate_fk",
    "validate_unique",
    # pagination
    "paginate_query",
    "paginate_response",
    "apply_search_filter",
    "apply_filters",
    # updates
    "update_entity",
    # status
    "transition_status",
]
