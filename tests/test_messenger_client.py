"""
Unit Tests for Messenger Client

The aiohttp session is mocked; no network calls are made.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from clients.messenger_client import MESSAGE_METADATA, MessengerClient


def _response(status, body):
    response = MagicMock()
    response.status = status
    response.reason = "Bad Request" if status != 200 else "OK"
    response.json = AsyncMock(return_value=body)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=False)
    return response


@pytest.fixture
def client():
    return MessengerClient("page-token", "https://graph.example.com/me/messages", timeout=2.0)


@pytest.fixture
def mock_session():
    with patch("aiohttp.ClientSession") as mock_session_class:
        session = MagicMock()
        session.closed = False
        session.close = AsyncMock()
        mock_session_class.return_value = session
        yield session


class TestMessengerClient:
    """Tests for MessengerClient."""

    def test_token_required(self):
        with pytest.raises(ValueError):
            MessengerClient("", "https://graph.example.com/me/messages")

    @pytest.mark.asyncio
    async def test_send_text_payload(self, client, mock_session):
        mock_session.post = MagicMock(
            return_value=_response(200, {"recipient_id": "u1", "message_id": "mid.1"})
        )

        result = await client.send_text("u1", "Fail to add class")

        assert result.ok is True
        assert result.message_id == "mid.1"

        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://graph.example.com/me/messages"
        assert kwargs["params"] == {"access_token": "page-token"}
        assert kwargs["json"] == {
            "recipient": {"id": "u1"},
            "message": {"text": "Fail to add class", "metadata": MESSAGE_METADATA},
        }

    @pytest.mark.asyncio
    async def test_sender_action_payload(self, client, mock_session):
        mock_session.post = MagicMock(return_value=_response(200, {"recipient_id": "u1"}))

        result = await client.send_sender_action("u1", "typing_on")

        assert result.ok is True
        assert mock_session.post.call_args.kwargs["json"] == {
            "recipient": {"id": "u1"},
            "sender_action": "typing_on",
        }

    @pytest.mark.asyncio
    async def test_api_error(self, client, mock_session):
        mock_session.post = MagicMock(
            return_value=_response(400, {"error": {"message": "Invalid OAuth access token."}})
        )

        result = await client.send_text("u1", "hi")

        assert result.ok is False
        assert result.status_code == 400
        assert result.message == "Invalid OAuth access token."

    @pytest.mark.asyncio
    async def test_timeout(self, client, mock_session):
        mock_session.post = MagicMock(side_effect=asyncio.TimeoutError())

        result = await client.send_text("u1", "hi")

        assert result.ok is False
        assert result.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error(self, client, mock_session):
        mock_session.post = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

        result = await client.send_text("u1", "hi")

        assert result.ok is False
        assert "refused" in result.message

    @pytest.mark.asyncio
    async def test_session_reused_and_closed(self, client, mock_session):
        mock_session.post = MagicMock(return_value=_response(200, {}))

        await client.send_text("u1", "one")
        await client.send_text("u1", "two")
        await client.close()

        assert mock_session.post.call_count == 2
        mock_session.close.assert_awaited_once()
