# utils/pagination.py
"""
Offset pagination for the dashboard list pages.

A list page asks for one page of rows plus the total number of rows that
match its filters. Both statements run on the request's session, so they
share one database transaction.
"""
import math

from flask import current_app, request, url_for

DEFAULT_ITEMS_PER_PAGE = 10


def parse_page(args):
    """
    Read the 1-based page number from the query string.

    Missing, empty or non-numeric values give page 1, as do values below 1.
    """
    page = args.get('page', 1, type=int)
    if page is None or page < 1:
        return 1
    return page


def page_offset(page, per_page):
    """Number of rows to skip for ``page``."""
    return per_page * (page - 1)


def items_per_page():
    return current_app.config.get('ITEMS_PER_PAGE', DEFAULT_ITEMS_PER_PAGE)


class ListPage:
    """One page of rows together with the total match count."""

    def __init__(self, items, total, page, per_page):
        self.items = items
        self.total = total
        self.page = page
        self.per_page = per_page

    @property
    def offset(self):
        return page_offset(self.page, self.per_page)

    @property
    def pages(self):
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_prev(self):
        return self.offset > 0

    @property
    def has_next(self):
        return self.offset + self.per_page < self.total

    @property
    def page_numbers(self):
        return range(1, self.pages + 1)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __repr__(self):
        return f'<ListPage page={self.page} items={len(self.items)} total={self.total}>'


def fetch_page(query, page, per_page=None):
    """
    Fetch one page of ``query`` and the total number of matching rows.

    ``query`` is a filtered, ordered ``Model.query``. The count ignores the
    ordering and the page slice. A page past the end has no rows but keeps
    the real total.
    """
    per_page = per_page or items_per_page()

    total = query.order_by(None).count()
    offset = page_offset(page, per_page)

    # the offset of a page past the end may not fit a database integer
    items = query.offset(offset).limit(per_page).all() if offset < total else []

    return ListPage(items=items, total=total, page=page, per_page=per_page)


def page_url(page):
    """Current list URL pointing at ``page``, keeping every other parameter."""
    args = request.args.to_dict()
    args['page'] = page
    return url_for(request.endpoint, **(request.view_args or {}), **args)
