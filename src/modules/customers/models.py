"""Customer link model.

A ``Customer`` (clientes) records that a platform user has bought from a
reseller.  Links are created when the reseller accepts the user's first
order; the ``name`` is a snapshot of the user's full name at that time.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    reseller = models.ForeignKey(
        "resellers.Reseller",
        on_delete=models.CASCADE,
        related_name="customers",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="customer_links",
    )
    name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "clientes"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["reseller", "user"],
                name="clientes_reseller_user_uniq",
            ),
        ]

    @staticmethod
    def full_name_of(user) -> str:
        return f"{user.first_name} {user.last_name}".strip()

    def __str__(self) -> str:
        return self.name or str(self.user_id)
