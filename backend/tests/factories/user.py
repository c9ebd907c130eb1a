"""Factory Boy definition for :class:`freightmarket.models.user.User`."""

from __future__ import annotations

import factory

from freightmarket.infra.crypto.credential_hasher import hash_password
from freightmarket.models.user import Role, User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`freightmarket.models.user.User` instances.

    Notes
    -----
    - Defaults to a cargo owner; use :class:`TransporterFactory` or
      :class:`AdminFactory` for the other roles.
    - The raw password is always :data:`DEFAULT_PASSWORD` unless passed.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    full_name = factory.Faker("name")
    company_name = factory.Faker("company")
    phone_number = None
    role = Role.CARGO_OWNER
    password_hash = factory.LazyAttribute(lambda o: hash_password(o.password))

    class Params:
        # Hashed before the flush so the row is never left dirty.
        password = DEFAULT_PASSWORD


class TransporterFactory(UserFactory):
    role = Role.TRANSPORTER
    email = factory.Sequence(lambda n: f"carrier{n}@example.com")


class AdminFactory(UserFactory):
    role = Role.ADMIN
    company_name = None
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
