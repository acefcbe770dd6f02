"""
Login accounts: admin bootstrap and credential checks.
"""

import logging

import config
from repositories.user_repository import ROLE_ADMIN, UserRepository

logger = logging.getLogger("ttclub.services.auth")


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def ensure_admin_exists(self) -> bool:
        """Create the configured admin account if missing; True if one was created."""
        if self.user_repo.exists(config.ADMIN_USERNAME):
            logger.debug("Admin account already exists")
            return False
        logger.info("Admin account not found. Creating admin account...")
        self.user_repo.create(
            config.ADMIN_USERNAME,
            config.ADMIN_EMAIL,
            config.ADMIN_PASSWORD,
            role=ROLE_ADMIN,
        )
        return True

    def authenticate(self, username: str, password: str) -> dict | None:
        """
        Check a username/password pair.

        Returns:
            Session info (id, username, email, role, player_id) or None
        """
        user = self.user_repo.get(username)
        if user is None:
            logger.info(f"No user found with username: {username}")
            return None
        if user.get("password") != password:
            logger.info(f"Password mismatch for {username}")
            return None
        return {
            "id": user["id"],
            "username": user["username"],
            "email": user.get("email"),
            "role": user.get("role"),
            "player_id": user.get("player_id"),
        }
