# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: errors.py
# -----------------------------------------------------------------------------


class CatalogError(Exception):
    """Base class for catalog store failures."""


class ProductNotFound(CatalogError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class DuplicateSku(CatalogError):
    def __init__(self, sku: str):
        super().__init__(f"A product with SKU '{sku}' already exists")
        self.sku = sku


class JobNotFound(CatalogError):
    def __init__(self, job_id: str):
        super().__init__(f"Embedding job not found: {job_id}")
        self.job_id = job_id


class InvalidJobTransition(CatalogError):
    def __init__(self, job_id: str, from_status: str, to_status: str):
        super().__init__(
            f"Embedding job {job_id}: cannot transition {from_status} -> {to_status}"
        )
        self.job_id = job_id
        self.from_status = from_status
        self.to_status = to_status
