"""Customer domain exceptions."""

from __future__ import annotations


class CustomerNotFound(Exception):
    """The customer link does not exist for this reseller."""
