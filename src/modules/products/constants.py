"""Inventory constants.

Stock labels are stored verbatim in ``revendedor_estoque.status``; the
quantity thresholds deciding between them live in settings
(``LOW_STOCK_THRESHOLD``).
"""

from django.db import models


class StockLabel(models.TextChoices):
    OUT_OF_STOCK = "Sem estoque", "Sem estoque"
    LOW_STOCK = "Estoque baixo", "Estoque baixo"
    IN_STOCK = "Em estoque", "Em estoque"


DEFAULT_PACKAGE_COLOR = "#000000"
