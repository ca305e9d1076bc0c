import logging
from typing import Any

import httpx

from medreminder.domains.shared.application.ports.notification_dispatcher import (
    INotificationDispatcher,
    NotificationPayload,
)

logger = logging.getLogger(__name__)


class TelegramNotificationDispatcher(INotificationDispatcher):
    """
    Sends notifications through the Telegram Bot API `sendMessage` method.
    """

    def __init__(
        self,
        bot_token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._bot_token = bot_token
        self._client = client

        logger.info("Telegram dispatcher initialized:")
        logger.info(f"  Base URL: {self.api_base}")
        logger.info(f"  Token: ***{bot_token[-4:] if len(bot_token) > 4 else '***'}")

    def _get_message_url(self) -> str:
        return f"{self.api_base}/bot{self._bot_token}/sendMessage"

    async def send(self, channel_id: str, payload: NotificationPayload) -> bool:
        body: dict[str, Any] = {
            "chat_id": channel_id,
            "text": payload.text,
            "disable_web_page_preview": True,
        }
        result = await self._make_request(body)
        if not result["success"]:
            logger.warning(f"{payload.kind} not delivered to chat {channel_id}: {result['error']}")
        return result["success"]

    async def _make_request(self, body: dict[str, Any]) -> dict[str, Any]:
        url = self._get_message_url()
        try:
            if self._client is not None:
                response = await self._client.post(url, json=body, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=body)

            if response.status_code == 200:
                return {"success": True, "data": response.json()}

            try:
                error_message = response.json().get("description", response.text)
            except ValueError:
                error_message = response.text
            logger.error(f"Error {response.status_code} from Telegram API: {error_message}")
            return {"success": False, "error": f"HTTP {response.status_code}: {error_message}"}

        except httpx.TimeoutException:
            error_msg = "Timeout while contacting Telegram API"
            logger.error(error_msg)
            return {"success": False, "error": error_msg}
        except httpx.ConnectError:
            error_msg = "Connection error with Telegram API"
            logger.error(error_msg)
            return {"success": False, "error": error_msg}
        except Exception as e:
            error_msg = f"Unexpected error: {e!s}"
            logger.error(error_msg, exc_info=True)
            return {"success": False, "error": error_msg}
