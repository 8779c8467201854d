import logging
from typing import TYPE_CHECKING

from src.rules.models import Rules

if TYPE_CHECKING:
    from src.api.deps import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def server_address(settings: "Settings", rules: Rules) -> tuple[str, int]:
    """
    Resolve the bind address.
    Environment overrides (TASKS_HOST / TASKS_PORT) win over rules.server.
    """
    host = settings.host_override or rules.server.host
    port = settings.port_override or rules.server.port
    return host, port
