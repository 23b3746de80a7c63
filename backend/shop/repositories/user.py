"""User repository for persistence and lookup utilities."""

from __future__ import annotations

from typing import cast

from shop.models.user import User, normalize_email
from shop.repositories.base import BaseRepository, paginate_select


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER issues tokens or checks roles; it only stores and finds users.
    """

    model = User
    default_order = "date_created"
    supports_slug = False

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        try:
            normalized = normalize_email(email)
        except ValueError:
            return None
        stmt = self._select().where(User.email == normalized)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def page(self, page: int, rows_per_page: int) -> list[User]:
        """Return one window of users ordered by creation time.

        :param page: 1-based page number (clamped to ``>= 1``).
        :param rows_per_page: Window size (clamped to ``>= 1``).
        """
        stmt = self._select().order_by(User.date_created.asc(), User.id.asc())
        items, _ = paginate_select(
            self.session, stmt, page=page, limit=rows_per_page, with_total=False
        )
        return cast(list[User], items)
