"""Order domain constants."""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"


# PostgreSQL SQLSTATEs for serialization failure and deadlock.
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})

RETRYABLE_MESSAGES = (
    "deadlock detected",
    "could not serialize access",
    "database is locked",
)
