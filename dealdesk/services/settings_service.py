"""Settings surface: user directory roles and the global exchange-rate table."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dealdesk.core.exceptions import NotFoundError
from dealdesk.models.enums import UserRole
from dealdesk.schemas.users import User
from dealdesk.services.currency import ExchangeRateTable

logger = logging.getLogger(__name__)


class SettingsService:
    """Owns the user directory and edits the shared rate table."""

    def __init__(self, users: Iterable[User], rates: ExchangeRateTable) -> None:
        self._users: list[User] = list(users)
        self.rates = rates

    @property
    def users(self) -> list[User]:
        return list(self._users)

    def get_user(self, user_id: str) -> User:
        for user in self._users:
            if user.id == user_id:
                return user
        raise NotFoundError(f"User {user_id} not found.")

    def search_users(self, term: str = "") -> list[User]:
        needle = term.strip().lower()
        if not needle:
            return self.users
        return [u for u in self._users if needle in u.name.lower() or needle in u.email.lower()]

    def change_role(self, user_id: str, role: UserRole) -> User:
        updated = self.get_user(user_id).model_copy(update={"role": UserRole(role)})
        self._users = [updated if u.id == user_id else u for u in self._users]
        logger.info(
            "settings.user.role_changed",
            extra={"event": "settings.user.role_changed", "user_id": user_id, "status": updated.role.value},
        )
        return updated

    def add_users(self, users: Iterable[User]) -> list[User]:
        """Append directory-synced users, skipping ids already present."""
        known = {u.id for u in self._users}
        added = [u for u in users if u.id not in known]
        self._users.extend(added)
        return added

    def update_rate(self, currency: str, rate: object) -> float:
        value = self.rates.set(currency, rate)
        logger.info("settings.rate.updated", extra={"event": "settings.rate.updated", "currency": currency})
        return value
