# utils/filters.py
"""
Query-string filters for the list pages.

Each page declares a mapping of recognized query keys to handlers. A handler
turns the raw string value into a SQLAlchemy clause. Keys without a handler
are ignored, as are blank values.
"""
from extensions import db

PAGE_PARAM = 'page'


def split_query_params(args):
    """Separate the page parameter from the filter parameters."""
    params = args.to_dict() if hasattr(args, 'to_dict') else dict(args)
    page = params.pop(PAGE_PARAM, None)
    return page, params


def build_filters(args, handlers):
    """
    Build the list of filter clauses for ``args``.

    ``handlers`` maps a query key to a callable taking the value and
    returning a clause.
    """
    _, params = split_query_params(args)

    clauses = []
    for key, value in params.items():
        handler = handlers.get(key)
        if handler is None:
            continue
        if value is None or not value.strip():
            continue
        clauses.append(handler(value.strip()))
    return clauses


def name_contains(*columns):
    """Case-insensitive substring match on any of ``columns``."""
    def handler(value):
        matches = [column.icontains(value, autoescape=True) for column in columns]
        if len(matches) == 1:
            return matches[0]
        return db.or_(*matches)
    return handler


def equals(column):
    """Exact match on ``column``."""
    def handler(value):
        return column == value
    return handler


def related_to(relationship, column):
    """Match rows whose ``relationship`` contains a row with ``column == value``."""
    def handler(value):
        return relationship.any(column == value)
    return handler
