import os
import time
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from superagent.config import COMPOSIO_AUTH_CONFIG_ID, INTEGRATIONS_CONFIG
from superagent.toolkits.platform import MULTIPLE_ACCOUNTS_ERRORS, ToolPlatform, is_multiple_accounts_error

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "ACTIVE"
FAILED_STATUS = "FAILED"

class UnknownIntegrationError(Exception):
    pass

class ConnectionFailedError(Exception):
    """The platform could not be reached or rejected the request (as opposed to 'not active yet')."""
    pass

@dataclass
class ConnectionInitiation:
    redirect_url: Optional[str] = None
    connection_id: Optional[str] = None
    already_connected: bool = False

@dataclass
class ConnectionStatus:
    status: str
    is_active: bool

class ConnectionGateway:
    """Starts and checks OAuth connections on the tool platform. It never polls on its own."""

    def __init__(self, platform: ToolPlatform, integrations_config: Optional[Dict[str, Dict[str, Any]]] = None,
                 callback_url: Optional[str] = None):
        self.platform = platform
        self.integrations_config = integrations_config if integrations_config is not None else INTEGRATIONS_CONFIG
        self.callback_url = callback_url

    def auth_config_id_for(self, integration_key: str) -> str:
        config = self.integrations_config.get(integration_key)
        if not config:
            raise UnknownIntegrationError(f"Unknown integration '{integration_key}'.")
        auth_config_id = config.get("auth_config_id") or os.getenv(config.get("auth_config_env", "")) or COMPOSIO_AUTH_CONFIG_ID
        if not auth_config_id:
            raise ConnectionFailedError(f"Auth Config ID for {integration_key} is not configured on the server.")
        return auth_config_id

    async def initiate(self, user_id: str, integration_key: str) -> ConnectionInitiation:
        auth_config_id = self.auth_config_id_for(integration_key)
        logger.info(f"Initiating {integration_key} connection for user {user_id} with auth_config_id={auth_config_id}")
        try:
            connection_request = await self.platform.initiate_connection(user_id, auth_config_id, self.callback_url)
        except MULTIPLE_ACCOUNTS_ERRORS:
            logger.info(f"User {user_id} already has connected accounts for {integration_key}.")
            return ConnectionInitiation(already_connected=True)
        except Exception as e:
            if is_multiple_accounts_error(e):
                logger.info(f"User {user_id} already has connected accounts for {integration_key} (matched by message).")
                return ConnectionInitiation(already_connected=True)
            logger.error(f"Error initiating {integration_key} connection for {user_id}: {e}", exc_info=True)
            raise ConnectionFailedError(str(e)) from e

        logger.info(f"Authorization URL for user {user_id}: {connection_request.redirect_url}")
        return ConnectionInitiation(
            redirect_url=connection_request.redirect_url,
            connection_id=connection_request.id,
        )

    async def check_status(self, connection_id: str) -> ConnectionStatus:
        try:
            connection = await self.platform.get_connection(connection_id)
        except Exception as e:
            logger.error(f"Failed to get status of connection {connection_id}: {e}", exc_info=True)
            raise ConnectionFailedError(str(e)) from e
        status = str(getattr(connection, "status", "") or "UNKNOWN")
        return ConnectionStatus(status=status, is_active=status == ACTIVE_STATUS)

class PollOutcome(str, Enum):
    CONNECTED = "connected"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    FAILED = "failed"

async def wait_for_active_connection(
    gateway: ConnectionGateway,
    connection_id: str,
    is_cancelled: Callable[[], bool],
    close_window: Optional[Callable[[], None]] = None,
    poll_interval: float = 2.0,
    timeout: float = 300.0,
) -> PollOutcome:
    """
    Sign-in polling loop: checks the connection every `poll_interval` seconds until it is active,
    the authorization window is closed (`is_cancelled`), or `timeout` seconds have passed.
    The window is closed for the user on every outcome except cancellation, where the user already closed it.

    The server itself never waits on a connection: browsers poll `check_status` through
    `/api/connecting-email`. This loop is the same contract for Python callers such as
    scripts and notebook clients that drive the sign-in flow.
    """
    start_time = time.monotonic()
    while True:
        if is_cancelled():
            logger.info(f"Authorization window closed; abandoning connection {connection_id}.")
            return PollOutcome.CANCELLED

        try:
            status = await gateway.check_status(connection_id)
            if status.is_active:
                if close_window:
                    close_window()
                return PollOutcome.CONNECTED
            if status.status == FAILED_STATUS:
                if close_window:
                    close_window()
                return PollOutcome.FAILED
        except ConnectionFailedError as e:
            logger.warning(f"Error polling connection {connection_id}: {e}")

        if time.monotonic() - start_time >= timeout:
            logger.warning(f"Connection {connection_id} did not become active within {timeout} seconds.")
            if close_window:
                close_window()
            return PollOutcome.TIMED_OUT

        await asyncio.sleep(poll_interval)
