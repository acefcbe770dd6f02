"""
Welcome emails for newly registered players.

Supports the EmailJS REST API and Formspree form endpoints. Delivery is
fire-and-forget: failures are logged and never reach the caller.
"""

import logging

import requests

import config

logger = logging.getLogger("ttclub.services.notification")

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class WelcomeEmailNotifier:
    """Sends the login details of a new player through the configured provider."""

    def __init__(
        self,
        provider: str | None = None,
        service_id: str | None = None,
        template_id: str | None = None,
        public_key: str | None = None,
        formspree_endpoint: str | None = None,
        club_name: str | None = None,
        login_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.provider = config.EMAIL_PROVIDER if provider is None else provider
        self.service_id = service_id or config.EMAILJS_SERVICE_ID
        self.template_id = template_id or config.EMAILJS_TEMPLATE_ID
        self.public_key = public_key or config.EMAILJS_PUBLIC_KEY
        self.formspree_endpoint = formspree_endpoint or config.FORMSPREE_ENDPOINT
        self.club_name = club_name or config.CLUB_NAME
        self.login_url = login_url or config.CLUB_LOGIN_URL
        self.timeout = timeout if timeout is not None else config.EMAIL_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        if self.provider == "emailjs":
            return bool(self.service_id and self.template_id and self.public_key)
        if self.provider == "formspree":
            return bool(self.formspree_endpoint)
        return False

    def _build_request(self, email: str, name: str, username: str | None, password: str | None):
        params = {
            "email": email,
            "to_name": name,
            "player_name": name,
            "username": username,
            "password": password,
            "club_name": self.club_name,
            "login_url": self.login_url,
        }
        if self.provider == "emailjs":
            return EMAILJS_SEND_URL, {
                "service_id": self.service_id,
                "template_id": self.template_id,
                "user_id": self.public_key,
                "template_params": params,
            }
        params["subject"] = f"Welcome to {self.club_name}!"
        return self.formspree_endpoint, params

    def notify_new_player(
        self, email: str | None, name: str, username: str | None, password: str | None
    ) -> bool:
        """
        Send the welcome email.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        if not email:
            logger.info(f"No email for {name}; skipping welcome email")
            return False
        if not self.is_configured:
            logger.info("Email service not configured; skipping welcome email")
            return False

        url, payload = self._build_request(email, name, username, password)
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Failed to send welcome email to {email}: {e}")
            return False

        logger.info(f"Welcome email sent to {email}")
        return True

    def on_player_created(self, player, email=None, username=None, password=None, **_):
        """EventBus subscriber for player_created."""
        self.notify_new_player(email, player.name, username, password)
