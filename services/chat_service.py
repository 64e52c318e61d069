"""
Chat Service - Main Coordinator

Runs the whole pipeline for one inbound message:
1. Validates the messaging event
2. Classifies the text into an intent
3. Dispatches the intent (route -> course operation -> reply text)
4. Sends the reply through the Send API
5. Returns a ChatResponse describing what happened

This is the entry point consumed by the transport layer and by the
Streamlit chat console.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from clients import MessengerClient, SendResult
from config import ATTACHMENT_REPLY, QUICK_REPLY_REPLY, Settings
from core import ClassifiedIntent, Dispatcher, MessageEvent, build_classifier
from .course_catalog import JsonCourseCatalog
from .course_list_service import CourseListService
from .reply_formatter import ReplyFormatter
from .user_store import InMemoryBackend, JsonFileBackend, UserStore

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class ChatResponse:
    """
    Response from the chat service.

    Attributes:
        message: The reply text (None when the event needs no reply)
        success: Whether the reply was produced and, if sent, accepted
        metadata: Additional metadata about the response
        send_result: Send API outcome, when a messenger is configured
    """
    message: Optional[str]
    success: bool
    metadata: Dict[str, Any] = field(default_factory=dict)
    send_result: Optional[SendResult] = None


# ============================================================================
# CHAT SERVICE
# ============================================================================

class ChatService:
    """
    Main chat service coordinator.

    Args:
        classifier: Object with an async classify(text, session_id) method
        dispatcher: Dispatcher producing reply text
        messenger: Send API client; replies are only returned when None
    """

    def __init__(
        self,
        classifier: Any,
        dispatcher: Dispatcher,
        messenger: Optional[MessengerClient] = None,
    ):
        self.classifier = classifier
        self.dispatcher = dispatcher
        self.messenger = messenger
        logger.info("✅ ChatService initialized")

    async def handle_payload(self, payload: Dict[str, Any]) -> ChatResponse:
        """Validate a raw messaging event and handle it."""
        try:
            event = MessageEvent.from_payload(payload)
        except ValueError as e:
            logger.warning(f"⚠️  Rejected malformed messaging event: {e}")
            return ChatResponse(message=None, success=False, metadata={"error": str(e)})

        return await self.handle_event(event)

    async def process_message(self, user_id: str, text: str) -> ChatResponse:
        """Convenience wrapper for a plain text message."""
        return await self.handle_event(MessageEvent(sender_id=user_id, text=text.strip()))

    async def handle_event(self, event: MessageEvent) -> ChatResponse:
        """
        Produce (and send) the reply for one message.

        Args:
            event: Validated inbound message

        Returns:
            ChatResponse with the reply text and metadata
        """
        user_id = event.sender_id
        metadata: Dict[str, Any] = {"user_id": user_id}

        if event.is_echo:
            logger.debug(f"🔁 Ignoring echo for {user_id}")
            return ChatResponse(message=None, success=True, metadata={**metadata, "ignored": "echo"})

        if event.quick_reply_payload:
            logger.info(f"👆 Quick reply from {user_id}: {event.quick_reply_payload}")
            reply = QUICK_REPLY_REPLY
            metadata["kind"] = "quick_reply"

        elif event.text:
            logger.info(f"💬 Message from {user_id}: {event.text[:50]}")
            await self._typing_on(user_id)
            intent = await self._classify(event.text, user_id)
            reply = await self.dispatcher.dispatch(user_id, intent)
            metadata.update({
                "kind": "text",
                "intent": intent.function.value,
                "department": intent.department,
                "course_number": intent.course_number,
            })

        elif event.has_attachments:
            logger.info(f"📎 Attachment from {user_id}")
            reply = ATTACHMENT_REPLY
            metadata["kind"] = "attachment"

        else:
            return ChatResponse(message=None, success=True, metadata={**metadata, "ignored": "empty"})

        send_result = await self._send(user_id, reply)
        return ChatResponse(
            message=reply,
            success=send_result is None or send_result.ok,
            metadata=metadata,
            send_result=send_result,
        )

    async def _classify(self, text: str, user_id: str) -> ClassifiedIntent:
        try:
            return await self.classifier.classify(text, session_id=user_id)
        except Exception as e:
            logger.error(f"❌ Classifier raised for {user_id}: {e}", exc_info=True)
            return ClassifiedIntent.unknown()

    async def _typing_on(self, user_id: str) -> None:
        if self.messenger is None:
            return
        await self.messenger.send_sender_action(user_id, "typing_on")

    async def _send(self, user_id: str, reply: str) -> Optional[SendResult]:
        if self.messenger is None:
            return None
        return await self.messenger.send_text(user_id, reply)

    async def close(self) -> None:
        if self.messenger is not None:
            await self.messenger.close()


# ============================================================================
# FACTORY
# ============================================================================

def build_chat_service(settings: Settings, send_replies: bool = True) -> ChatService:
    """
    Wire every component from settings.

    Args:
        settings: Application settings
        send_replies: Create a Send API client (requires a page token)

    Returns:
        Ready-to-use ChatService
    """
    if settings.user_store_backend == "memory":
        backend = InMemoryBackend()
    else:
        backend = JsonFileBackend(settings.user_store_file)

    store = UserStore(backend, timeout=settings.store_timeout)
    catalog = JsonCourseCatalog(settings.courses_file)
    course_service = CourseListService(
        store,
        catalog,
        catalog_timeout=settings.catalog_timeout,
        max_list_results=settings.max_list_results,
    )
    dispatcher = Dispatcher(course_service, ReplyFormatter())

    messenger = None
    if send_replies:
        missing = settings.missing_messenger_values()
        if missing:
            raise ValueError(f"Missing config values: {', '.join(missing)}")
        messenger = MessengerClient(
            settings.page_access_token,
            settings.send_api_url,
            timeout=settings.send_timeout,
        )

    return ChatService(build_classifier(settings), dispatcher, messenger)
