"""Credential check run before any network activity."""

from ..logging import get_logger
from ..prompts import get_missing_credentials_notice
from ..settings import KeyService, SettingsService
from .models import AnnouncementMessage
from .store import ConversationStore

logger = get_logger(__name__)


class CredentialGate:
    """Blocks dispatch until both an API key and an endpoint are set.

    When the check fails, a fixed announcement is appended to the
    conversation so the user knows what to configure.
    """

    def __init__(
        self,
        settings: SettingsService,
        keys: KeyService,
        store: ConversationStore,
        notice: str | None = None,
    ) -> None:
        self.settings = settings
        self.keys = keys
        self.store = store
        self._notice = notice
        self.auth_headers: dict[str, str] = {}

    @property
    def notice(self) -> str:
        return self._notice if self._notice is not None else get_missing_credentials_notice()

    def check_ready(self) -> bool:
        """Return True when credentials are usable, announcing otherwise.

        Lookup failures count as "not ready"; nothing is raised.
        """
        try:
            key = self.keys.get_key()
            endpoint = self.settings.api_endpoint
        except Exception as e:
            logger.warning("Credential lookup failed: %s", e)
            key = endpoint = None

        if not key or not endpoint:
            logger.info("API key or endpoint is missing")
            self.auth_headers = {}
            self.store.append(AnnouncementMessage(text=self.notice))
            return False

        self.auth_headers = {"Authorization": f"Bearer {key}"}
        return True
