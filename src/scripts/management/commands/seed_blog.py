"""Seed demo identities (one per role) and sample posts."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from access_control.roles import Role
from authentication.managers import UserManager
from blogs.models import Blog, Category, Status
from blogs.services import BlogService

DEMO_PASSWORD_SUFFIX = "pass123"

DEMO_USERS = {
    Role.ADMIN: ("admin", "admin@example.com"),
    Role.EDITOR: ("editor", "editor@example.com"),
    Role.AUTHOR: ("author", "author@example.com"),
    Role.SUBSCRIBER: ("subscriber", "subscriber@example.com"),
}

DEMO_BLOGS = [
    {
        "title": "Sunrise Hike up Mount Batur",
        "excerpt": "A pre-dawn climb to watch the sun rise over Bali.",
        "content": "We left the guesthouse at three in the morning " * 40,
        "category": Category.MOUNTAIN,
        "tags": ["Bali", "Hiking", "Volcano"],
        "status": Status.PUBLISHED,
        "location": {"country": "Indonesia", "city": "Kintamani"},
    },
    {
        "title": "Street Food Crawl in Bangkok",
        "excerpt": "Twelve dishes, four markets, one very full stomach.",
        "content": "Our first stop was a noodle cart near the river " * 60,
        "category": Category.FOOD,
        "tags": ["thailand", "street food"],
        "status": Status.PUBLISHED,
        "featured": True,
    },
    {
        "title": "Lisbon Tram 28 Guide",
        "excerpt": "Riding the classic yellow tram through Alfama.",
        "content": "Catch the tram early before the queues form " * 30,
        "category": Category.CITY,
        "tags": ["portugal", "lisbon"],
        "status": Status.DRAFT,
    },
]


def demo_password(username: str) -> str:
    return f"{username}{DEMO_PASSWORD_SUFFIX}"


def create_seed_users() -> dict:
    """Create one demo identity per role if missing; return a role->User map."""
    User = get_user_model()
    users = {}
    for role, (username, email) in DEMO_USERS.items():
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={
                "username": username,
                "role": role,
                "first_name": username.capitalize(),
                "password_hash": UserManager.hash_password(demo_password(username)),
            },
        )
        users[role] = user
    return users


def create_seed_blogs(author) -> list:
    """Create the demo posts through the lifecycle service, skipping existing slugs."""
    created = []
    for payload in DEMO_BLOGS:
        if Blog.objects.filter(title=payload["title"]).exists():
            continue
        created.append(BlogService.create(author, dict(payload)))
    return created


class Command(BaseCommand):
    """Management command to seed demo identities and posts."""

    help = (
        "Seed one demo identity per role and a few sample blog posts. "
        "Use --reset to remove previously seeded demo data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo identities (and their posts) before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding demo identities...")
        users = create_seed_users()
        posts = create_seed_blogs(users[Role.EDITOR])
        self.stdout.write(self.style.SUCCESS(f"Seed completed: {len(users)} users, {len(posts)} new posts."))

    def _reset_seeded_data(self) -> None:
        """Remove demo identities; their posts cascade."""
        User = get_user_model()
        emails = [email for _, email in DEMO_USERS.values()]
        deleted, _ = User.objects.filter(email__in=emails).delete()
        self.stdout.write(self.style.WARNING(f"Removed {deleted} seeded row(s)."))
