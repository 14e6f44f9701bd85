"""Reseller domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class ResellerNotFound(Exception):
    """The authenticated user has no reseller record.

    Every reseller workflow aborts with this error before touching any data.
    """


class InvalidShippingFee(Exception):
    """The shipping fee is negative or not a number."""
