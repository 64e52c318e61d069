"""
Course Finder Bot - Local Chat Console
Streamlit Web Application

Drives the same ChatService the Messenger webhook uses, without sending
anything to the Send API. Useful for trying intents against the course
catalog and a user's saved list.

Run with: streamlit run app.py
"""

import logging
import time
from typing import Any, Dict

import streamlit as st

from config import load_settings
from services.chat_service import ChatResponse, ChatService, build_chat_service
from utils import BackgroundEventLoop

settings = load_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================

st.set_page_config(
    page_title="Course Finder Bot",
    page_icon="📚",
    layout="centered",
)

EXAMPLE_MESSAGES = [
    ("🔍 Find a class", "find cse 142"),
    ("➕ Add a class", "add cse 344"),
    ("📋 My plan", "my plan"),
]


# ============================================================================
# SESSION STATE
# ============================================================================

@st.cache_resource
def get_event_loop() -> BackgroundEventLoop:
    """One loop thread per console process; every session submits to it."""
    return BackgroundEventLoop("chat-console-loop")


@st.cache_resource
def get_chat_service() -> ChatService:
    """One ChatService per console process, without outbound sends."""
    return build_chat_service(settings, send_replies=False)


def initialize_session_state():
    """Initialize Streamlit session state variables."""
    if "messages" not in st.session_state:
        st.session_state.messages = []

    if "user_id" not in st.session_state:
        st.session_state.user_id = f"console_{int(time.time())}"


def add_message(role: str, content: str, metadata: Dict[str, Any] = None):
    st.session_state.messages.append({
        "role": role,
        "content": content,
        "metadata": metadata or {},
    })


def render_chat_message(message: Dict[str, Any]):
    avatar = "👤" if message["role"] == "user" else "📚"
    with st.chat_message(message["role"], avatar=avatar):
        st.text(message["content"])
        intent = message["metadata"].get("intent")
        if intent:
            st.caption(f"intent: {intent}")


def handle_user_input(user_message: str):
    """Run one message through the pipeline and record the reply."""
    add_message("user", user_message)

    service = get_chat_service()
    with st.spinner("Looking that up..."):
        response: ChatResponse = get_event_loop().run(
            service.process_message(st.session_state.user_id, user_message)
        )

    if response.message:
        add_message("assistant", response.message, response.metadata)


# ============================================================================
# SIDEBAR
# ============================================================================

def render_sidebar():
    with st.sidebar:
        st.header("⚙️ Session")
        st.session_state.user_id = st.text_input(
            "User id",
            value=st.session_state.user_id,
            help="Saved course lists are kept per user id.",
        )
        classifier = "Gemini" if settings.use_gemini else "Keyword rules"
        st.caption(f"**Classifier:** {classifier}")
        st.caption(f"**Catalog:** {settings.courses_file.name}")
        st.caption(f"**Store backend:** {settings.user_store_backend}")

        if st.button("🗑️ Clear conversation", use_container_width=True):
            st.session_state.messages = []
            st.rerun()


# ============================================================================
# MAIN APPLICATION
# ============================================================================

def main():
    initialize_session_state()
    render_sidebar()

    st.title("📚 Course Finder Bot")
    st.markdown("Search the catalog and keep a list of the classes you want.")

    for message in st.session_state.messages:
        render_chat_message(message)

    user_input = st.chat_input("Try \"add cse 344\" or \"my plan\"...")
    if user_input:
        handle_user_input(user_input)
        st.rerun()

    if len(st.session_state.messages) == 0:
        st.markdown("---")
        columns = st.columns(len(EXAMPLE_MESSAGES))
        for column, (label, text) in zip(columns, EXAMPLE_MESSAGES):
            with column:
                if st.button(label, use_container_width=True):
                    handle_user_input(text)
                    st.rerun()


# ============================================================================
# ERROR HANDLING & ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        st.error(f"❌ **Application Error**\n\nAn unexpected error occurred: {str(e)}")
