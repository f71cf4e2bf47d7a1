from core.pagination import PagePagination


class UserPagination(PagePagination):
    """Page/limit pagination that lists results under `users`."""
    results_key = 'users'
