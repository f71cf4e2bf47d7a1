from core.pagination import PagePagination


class EstablishmentPagination(PagePagination):
    """Page/limit pagination that lists results under `establishments`."""
    results_key = 'establishments'
