"""
Helpers de pagination et de filtres
"""
from typing import TypeVar, Any, Optional, Tuple, List, Callable
from sqlalchemy.orm import Query
from sqlalchemy import or_

T = TypeVar('T')


def paginate_query(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None
) -> Tuple[List[T], int]:
    """
    Pagine une query et retourne (éléments, total).

    order_by accepte une colonne ou un tuple de colonnes.

    Usage:
        items, total = paginate_query(query, page, page_size, Client.raison_sociale)
    """
    total = query.count()

    if order_by is not None:
        if isinstance(order_by, tuple):
            query = query.order_by(*order_by)
        else:
            query = query.order_by(order_by)

    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return items, total


def paginate_response(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None,
    transform_fn: Optional[Callable] = None
) -> dict:
    """
    Pagine et retourne le dict de réponse {items, total, page, page_size}.

    Usage:
        return paginate_response(query, page, page_size, Document.created_at.desc(), _document_response)
    """
    items, total = paginate_query(query, page, page_size, order_by)

    if transform_fn:
        items = [transform_fn(item) for item in items]

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size
    }


def apply_search_filter(
    query: Query,
    search_term: Optional[str],
    *fields
) -> Query:
    """
    Filtre ILIKE sur plusieurs champs (OU).

    Usage:
        query = apply_search_filter(query, busca, Client.num_dossier, Client.raison_sociale)
    """
    if not search_term or not fields:
        return query

    conditions = [field.ilike(f"%{search_term}%") for field in fields]
    return query.filter(or_(*conditions))


def apply_filters(
    query: Query,
    filters: List[Tuple[Any, Any]]
) -> Query:
    """
    Applique des filtres d'égalité, en ignorant les valeurs None.

    Usage:
        query = apply_filters(query, [
            (Document.type_document, type_document),
            (Document.statut, statut),
        ])
    """
    for field, value in filters:
        if value is not None:
            query = query.filter(field == value)
    return query
