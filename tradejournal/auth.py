"""User identity for TradeJournal.

The journal only needs to know who the current user is so it can scope
store paths; verifying credentials is the identity provider's job.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from tradejournal.models import User

logger = logging.getLogger(__name__)

SESSION_FILE = "session.json"


class AuthProvider(ABC):
    """Abstract base class for identity providers."""

    @abstractmethod
    def current_user(self) -> Optional[User]:
        """The signed-in user, or None."""
        pass

    @abstractmethod
    def sign_in(self, user_id: str, email: Optional[str] = None) -> User:
        """Make the given user current.

        Raises:
            ValueError: If the user id is blank.
        """
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """Forget the current user. Signing out twice is harmless."""
        pass


class ProfileAuth(AuthProvider):
    """Keeps the signed-in profile in ``session.json``."""

    def __init__(self, config_dir: Path):
        """Initialize the provider.

        Args:
            config_dir: Directory holding the session file.
        """
        self.session_path = Path(config_dir) / SESSION_FILE

    def current_user(self) -> Optional[User]:
        if not self.session_path.exists():
            return None

        try:
            session_data = json.loads(self.session_path.read_text())
            return User(id=session_data["user_id"], email=session_data.get("email"))
        except (json.JSONDecodeError, KeyError, PydanticValidationError):
            logger.warning("Ignoring unreadable session file %s", self.session_path)
            return None

    def sign_in(self, user_id: str, email: Optional[str] = None) -> User:
        if not user_id or not user_id.strip():
            raise ValueError("User id must not be blank")

        user = User(id=user_id.strip(), email=email or None)
        self.session_path.parent.mkdir(parents=True, exist_ok=True)
        session_data = {
            "user_id": user.id,
            "email": user.email,
            "timestamp": datetime.now().isoformat(),
        }
        self.session_path.write_text(json.dumps(session_data))
        logger.info("Signed in as %s", user.id)
        return user

    def sign_out(self) -> None:
        if self.session_path.exists():
            self.session_path.unlink()
            logger.info("Signed out")
