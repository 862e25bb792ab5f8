"""Category and Product models (the Catalog Store).

Business rules implemented:
- Price is a fixed-point decimal greater than zero.
- Stock is a non-negative integer; a database check constraint backs the
  checkout algorithm so no code path can persist a negative count.
- A product optionally belongs to a category; deleting a category keeps
  its products (the reference is cleared).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Category(BaseModel):
    name = models.CharField(max_length=100)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """Sellable catalog entry.

    ``price`` is the server-authoritative unit price read by checkout.
    ``stock`` is only decremented inside the checkout transaction, under a
    row lock (see ``ProductDjangoRepository.get_for_update``).
    """

    name = models.CharField(max_length=256)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)
    image_url = models.CharField(max_length=512, blank=True, default="")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    class Meta:
        db_table = "products"
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.pk} {self.name}"
