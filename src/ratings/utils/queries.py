"""Helpers for reading complete result sets through Protean query sets."""

# Protean query sets page results (100 rows by default); aggregations need every row.
BATCH_SIZE = 500


def fetch_all(queryset, batch_size=BATCH_SIZE):
    """Return every item matched by ``queryset``, reading it in batches."""
    items = []
    offset = 0
    while True:
        page = queryset.limit(batch_size).offset(offset).all()
        items.extend(page.items)
        if not page.has_next:
            return items
        offset += batch_size


def paginate(queryset, page, limit):
    """Return ``(items, total)`` for a 1-based page of ``queryset``."""
    result = queryset.limit(limit).offset((page - 1) * limit).all()
    return result.items, result.total
