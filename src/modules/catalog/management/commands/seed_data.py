from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.catalog.models import Category

DEFAULT_CATEGORIES = ("Food", "Drinks", "Clothing")


class Command(BaseCommand):
    help = "Seed the database with the admin account and default categories."

    def add_arguments(self, parser):
        parser.add_argument(
            "--admin-password",
            default="admin123",
            help="Password for the 'admin' account when it is created.",
        )

    def handle(self, *args, **options):
        self.stdout.write("Seeding storefront data...")

        users_created = self._seed_admin(options["admin_password"])
        categories_created = self._seed_categories()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"categories={categories_created}"
            )
        )

    def _seed_admin(self, password: str) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_user("admin", password=password, is_staff=True)
        return 1

    def _seed_categories(self) -> int:
        created = 0
        for name in DEFAULT_CATEGORIES:
            _, was_created = Category.objects.get_or_create(name=name)
            created += int(was_created)
        return created
