"""
Page slicing with the payload shape the web client already consumes:

    {docs, totalDocs, limit, page, totalPages, pagingCounter,
     hasPrevPage, hasNextPage, prevPage, nextPage}
"""
from django.core.paginator import EmptyPage, Paginator

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def parse_page_params(params):
    """Read ``page`` and ``limit`` from query params, falling back to defaults."""
    try:
        page = int(params.get('page', DEFAULT_PAGE))
    except (TypeError, ValueError):
        page = DEFAULT_PAGE
    try:
        limit = int(params.get('limit', DEFAULT_LIMIT))
    except (TypeError, ValueError):
        limit = DEFAULT_LIMIT
    return max(page, 1), min(max(limit, 1), MAX_LIMIT)


class Page:
    """One page of a queryset plus its counters."""

    def __init__(self, queryset, page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
        paginator = Paginator(queryset, limit)
        self.page = page
        self.limit = limit
        self.total_docs = paginator.count
        self.total_pages = paginator.num_pages if self.total_docs else 0
        try:
            self.items = list(paginator.page(page).object_list)
        except EmptyPage:
            self.items = []

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def as_payload(self, serialize):
        """Render the page; ``serialize`` maps the item list to JSON-ready data."""
        has_prev = self.page > 1
        has_next = self.page < self.total_pages
        return {
            'docs': serialize(self.items),
            'totalDocs': self.total_docs,
            'limit': self.limit,
            'page': self.page,
            'totalPages': self.total_pages,
            'pagingCounter': (self.page - 1) * self.limit + 1,
            'hasPrevPage': has_prev,
            'hasNextPage': has_next,
            'prevPage': self.page - 1 if has_prev else None,
            'nextPage': self.page + 1 if has_next else None,
        }


def paginate(queryset, page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    return Page(queryset, page, limit)
