"""User aggregate — a shopper who owns a cart and writes reviews."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from techmarket.domain import techmarket
from techmarket.utils.query import fetch_all

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


@techmarket.aggregate
class User:
    username = String(required=True, min_length=3, max_length=30)
    email = String(required=True, max_length=254)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    is_active = Boolean(default=True)
    created_at = DateTime()

    @invariant.post
    def username_must_be_alphanumeric(self):
        if self.username and not USERNAME_PATTERN.match(self.username):
            raise ValidationError(
                {"username": ["Username can only contain alphanumeric characters and underscores"]}
            )

    @classmethod
    def register(cls, username, email, first_name=None, last_name=None):
        return cls(
            username=username,
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            is_active=True,
            created_at=datetime.now(UTC),
        )


@techmarket.repository(part_of=User)
class UserRepository:
    def find_by_username(self, username):
        results = self._dao.query.filter(username=username).all().items
        return results[0] if results else None

    def find_by_email(self, email):
        results = self._dao.query.filter(email=email.lower()).all().items
        return results[0] if results else None

    def list_all(self):
        return sorted(fetch_all(self._dao.query), key=lambda u: u.username.lower())
