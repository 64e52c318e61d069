"""
External Clients Module

Low-level clients for external services. These contain no business
logic.

Clients:
- Messenger Client: Send text replies and typing indicators via the Send API
"""

from .messenger_client import (
    MessengerClient,
    SendResult,
)

__all__ = [
    "MessengerClient",
    "SendResult",
]
