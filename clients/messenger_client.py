"""
Messenger Send API client.

Posts text replies and sender actions (typing indicators) to the
Messenger Send API. Sends are fire-and-forget at this layer: failures
are logged and reported as a SendResult, never retried or raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)

MESSAGE_METADATA = "DEVELOPER_DEFINED_METADATA"


@dataclass(frozen=True)
class SendResult:
    """
    Outcome of one Send API call.

    Attributes:
        ok: Whether the API accepted the message
        status_code: HTTP status (None for network errors and timeouts)
        message: Error description when not ok
        message_id: Id assigned by the platform when ok
    """
    ok: bool
    status_code: Optional[int] = None
    message: Optional[str] = None
    message_id: Optional[str] = None


class MessengerClient:
    """
    Async Send API client.

    Args:
        page_access_token: Page token passed as the access_token query param
        api_url: Send API endpoint
        timeout: Bound on one request (seconds)
    """

    def __init__(self, page_access_token: str, api_url: str, timeout: float = 10.0):
        if not page_access_token:
            raise ValueError("A page access token is required to call the Send API")
        self.page_access_token = page_access_token
        self.api_url = api_url
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _post(self, payload: Dict[str, Any]) -> SendResult:
        session = await self._ensure_session()
        try:
            async with session.post(
                self.api_url,
                params={"access_token": self.page_access_token},
                json=payload,
            ) as resp:
                body = await resp.json(content_type=None)
                body = body if isinstance(body, dict) else {}

                if resp.status != 200:
                    error = body.get("error", {})
                    message = error.get("message") if isinstance(error, dict) else str(error)
                    return SendResult(ok=False, status_code=resp.status, message=message or resp.reason)

                return SendResult(ok=True, status_code=resp.status, message_id=body.get("message_id"))

        except asyncio.TimeoutError:
            return SendResult(ok=False, message=f"Send API timed out after {self.timeout}s")
        except (aiohttp.ClientError, ValueError) as e:
            return SendResult(ok=False, message=str(e))

    async def send_text(self, recipient_id: str, text: str) -> SendResult:
        """Send a text message to a user."""
        result = await self._post({
            "recipient": {"id": recipient_id},
            "message": {"text": text, "metadata": MESSAGE_METADATA},
        })

        if result.ok:
            if result.message_id:
                logger.info(f"📤 Sent message {result.message_id} to {recipient_id}")
            else:
                logger.info(f"📤 Called Send API for {recipient_id}")
        else:
            logger.error(
                f"❌ Failed calling Send API for {recipient_id}: "
                f"{result.status_code} {result.message}"
            )
        return result

    async def send_sender_action(self, recipient_id: str, action: str) -> SendResult:
        """Send a sender action such as "typing_on" or "typing_off"."""
        result = await self._post({
            "recipient": {"id": recipient_id},
            "sender_action": action,
        })
        if not result.ok:
            logger.warning(f"⚠️  Sender action {action} failed for {recipient_id}: {result.message}")
        return result
