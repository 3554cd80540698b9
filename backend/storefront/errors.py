class CatalogError(Exception):
    """Base for failures scoped to one catalog request."""

    status_code = 500


class InvalidInput(CatalogError):
    status_code = 400


class NotFound(CatalogError):
    status_code = 404


class Conflict(CatalogError):
    status_code = 409


class StoreFailure(CatalogError):
    status_code = 500
