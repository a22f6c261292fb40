from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models, transaction
from decimal import Decimal


class Book(models.Model):
    title = models.CharField(max_length=255)
    author = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=8, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))]
    )
    # Copies on the shelf right now (available or reserved, not borrowed).
    quantity = models.PositiveIntegerField(default=0)
    # Copies the library owns, borrowed or not.
    total_copies = models.PositiveIntegerField(default=0)
    borrow_count = models.PositiveIntegerField(default=0)
    subscribers = models.ManyToManyField(
        settings.AUTH_USER_MODEL, blank=True, related_name="subscribed_books"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title", "author"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0), name="non_negative_quantity"
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__lte=models.F("total_copies")),
                name="quantity_within_total_copies",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0), name="non_negative_price"
            ),
        ]

    def __str__(self):
        return f"{self.title} by {self.author}"

    @property
    def is_available(self):
        return self.quantity > 0

    @transaction.atomic
    def take_copy(self):
        """Atomically take one copy off the shelf for a loan."""
        updated = Book.objects.filter(pk=self.pk, quantity__gt=0).update(
            quantity=models.F("quantity") - 1,
            borrow_count=models.F("borrow_count") + 1,
        )
        if updated:
            self.refresh_from_db()
            return True
        return False

    @transaction.atomic
    def put_back_copy(self):
        """Atomically return one copy to the shelf."""
        updated = Book.objects.filter(
            pk=self.pk, quantity__lt=models.F("total_copies")
        ).update(quantity=models.F("quantity") + 1)
        if updated:
            self.refresh_from_db()
            return True
        return False

    @transaction.atomic
    def adjust_copies(self, delta):
        """Add or remove owned copies; shelf and total move together."""
        updated = Book.objects.filter(pk=self.pk, quantity__gte=-delta).update(
            quantity=models.F("quantity") + delta,
            total_copies=models.F("total_copies") + delta,
        )
        if updated:
            self.refresh_from_db()
            return True
        return False
