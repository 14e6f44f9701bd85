"""Inventory stock status.

A row's status is either the label stored on it or, when that label is
blank, derived from its quantity.  Both paths produce a
``StockStatusView`` with the text to display and a severity used for
badge colouring.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from django.conf import settings

from modules.products.constants import StockLabel


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


@dataclass(frozen=True)
class Stored:
    """A non-empty label saved on the inventory row."""

    label: str


@dataclass(frozen=True)
class Derived:
    """No label saved; status follows the quantity."""

    quantity: int


StockSource = Union[Stored, Derived]


@dataclass(frozen=True)
class StockStatusView:
    display: str
    severity: Severity


def low_stock_threshold() -> int:
    return getattr(settings, "LOW_STOCK_THRESHOLD", 20)


def label_for_quantity(quantity: int) -> str:
    """Return the label matching ``quantity``.

    ``<= 0`` is out of stock, up to the low-stock threshold (inclusive)
    is low stock, anything above is in stock.
    """
    if quantity <= 0:
        return StockLabel.OUT_OF_STOCK.value
    if quantity <= low_stock_threshold():
        return StockLabel.LOW_STOCK.value
    return StockLabel.IN_STOCK.value


def source_for(label: Optional[str], quantity: int) -> StockSource:
    if label and label.strip():
        return Stored(label=label)
    return Derived(quantity=quantity)


def describe(source: StockSource) -> StockStatusView:
    if isinstance(source, Stored):
        return StockStatusView(
            display=source.label, severity=_severity_for_label(source.label)
        )
    if source.quantity <= 0:
        severity = Severity.CRITICAL
    elif source.quantity <= low_stock_threshold():
        severity = Severity.WARNING
    else:
        severity = Severity.NORMAL
    return StockStatusView(
        display=label_for_quantity(source.quantity), severity=severity
    )


def stock_status(label: Optional[str], quantity: int) -> StockStatusView:
    """Display text and severity for an inventory row.

    A stored label always wins for the display text; its severity comes
    from a case-insensitive substring match ("sem" is critical, "baixo"
    is a warning).
    """
    return describe(source_for(label, quantity))


def _severity_for_label(label: str) -> Severity:
    lowered = label.lower()
    if "sem" in lowered:
        return Severity.CRITICAL
    if "baixo" in lowered:
        return Severity.WARNING
    return Severity.NORMAL
