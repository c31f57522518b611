"""Bulk migration of legacy plaintext credentials to bcrypt hashes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from usergate_auth import PasswordHashingService

if TYPE_CHECKING:
    from usergate.domain.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class PasswordMigrationReport:
    """Counts from one migration run."""

    total: int = 0
    already_hashed: int = 0
    migrated: int = 0
    skipped_empty: int = 0
    changed_concurrently: int = 0
    dry_run: bool = False
    migrated_ids: list[int] = field(default_factory=list)


class PasswordMigrationService:
    """Rehash every stored plaintext credential in place.

    Rows that already carry a bcrypt hash are left untouched. The stored
    plaintext is hashed as-is (no strength check), so existing users can
    keep logging in with the same password. A row is only written while it
    still holds the plaintext that was read, so a password changed during
    the run is never overwritten.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def migrate(self, dry_run: bool = False) -> PasswordMigrationReport:
        report = PasswordMigrationReport(dry_run=dry_run)
        credentials = await self._user_repo.list_credentials()
        report.total = len(credentials)

        for user_id, stored in credentials:
            if self._password_service.is_hashed(stored):
                report.already_hashed += 1
                continue

            plaintext = (stored or "").strip()
            if not plaintext:
                logger.warning("User id %s has an empty password, skipping", user_id)
                report.skipped_empty += 1
                continue

            if not dry_run:
                password_hash = await asyncio.to_thread(self._hash, plaintext)
                updated = await self._user_repo.update_credential_if_unchanged(
                    user_id,
                    stored,
                    password_hash,
                )
                if updated == 0:
                    logger.info(
                        "Password of user id %s changed during migration, skipping",
                        user_id,
                    )
                    report.changed_concurrently += 1
                    continue

            report.migrated += 1
            report.migrated_ids.append(user_id)

        logger.info(
            "Password migration %s: %d migrated, %d already hashed, %d skipped, "
            "%d changed concurrently",
            "dry run" if dry_run else "done",
            report.migrated,
            report.already_hashed,
            report.skipped_empty,
            report.changed_concurrently,
        )
        return report

    def _hash(self, plaintext: str) -> str:
        return self._password_service.hash(plaintext, validate=False)
