"""Helpers for reading complete result sets from repositories."""

BATCH_SIZE = 100


def fetch_all(queryset, batch_size: int = BATCH_SIZE) -> list:
    """Read every record matched by `queryset`, one page at a time."""
    records = []
    offset = 0
    while True:
        batch = queryset.offset(offset).limit(batch_size).all().items
        records.extend(batch)
        if len(batch) < batch_size:
            return records
        offset += batch_size
