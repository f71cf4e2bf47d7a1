from core.pagination import PagePagination


class ReviewPagination(PagePagination):
    """Page/limit pagination that lists results under `reviews`."""
    results_key = 'reviews'
