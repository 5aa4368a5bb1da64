"""Helpers for reading complete result sets through Protean querysets."""

BATCH_SIZE = 500


def fetch_all(queryset, batch_size=BATCH_SIZE):
    """Return every record matched by ``queryset``.

    Querysets apply a default page size, so records are pulled in batches
    until a short page comes back.
    """
    records = []
    offset = 0
    while True:
        page = queryset.offset(offset).limit(batch_size).all().items
        records.extend(page)
        if len(page) < batch_size:
            return records
        offset += batch_size
