"""
Unit Tests for the Background Event Loop

Several threads drive one shared ChatService, the way Streamlit
sessions do in the chat console.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from config import FAILURE_REPLY, Settings
from services import build_chat_service
from tests import SAMPLE_COURSES_PATH
from utils import BackgroundEventLoop


@pytest.fixture
def background_loop():
    runner = BackgroundEventLoop("test-loop")
    yield runner
    runner.close()


class TestBackgroundEventLoop:
    """Test BackgroundEventLoop."""

    def test_run_returns_result(self, background_loop):
        async def answer():
            await asyncio.sleep(0)
            return 42

        assert background_loop.run(answer(), timeout=5) == 42

    def test_run_propagates_errors(self, background_loop):
        async def fail():
            raise ValueError("bad input")

        with pytest.raises(ValueError, match="bad input"):
            background_loop.run(fail(), timeout=5)

    def test_shared_service_across_threads(self, background_loop, tmp_path):
        settings = Settings(
            courses_file=SAMPLE_COURSES_PATH,
            user_store_file=tmp_path / "user_courses.json",
        )
        service = build_chat_service(settings, send_replies=False)

        def send_many(_):
            return [
                background_loop.run(service.process_message("shared", "add cse 344"), timeout=10)
                for _ in range(25)
            ]

        with ThreadPoolExecutor(max_workers=4) as pool:
            responses = [r for batch in pool.map(send_many, range(4)) for r in batch]

        assert len(responses) == 100
        assert all(r.message != FAILURE_REPLY for r in responses)
        assert sum(r.message.startswith("Added class") for r in responses) == 1

        plan = background_loop.run(service.process_message("shared", "my plan"), timeout=10)
        assert plan.message == "These are the classes I saved for you:\n 12688"

    def test_close_is_idempotent(self):
        runner = BackgroundEventLoop("closing-loop")
        runner.close()
        runner.close()

        assert runner.loop.is_closed()
