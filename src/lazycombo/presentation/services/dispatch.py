"""
TextualDispatcher - hop from lookup workers back onto a Textual app's thread.
"""

import threading
from typing import Callable

from textual.message import Message
from textual.message_pump import MessagePump

from lazycombo.logger import get_logger

logger = get_logger("textual_dispatch")


class DispatchedCallback(Message):
    """Carries a worker callback to the UI thread."""

    def __init__(self, callback: Callable[[], None]) -> None:
        super().__init__()
        self.callback = callback


class TextualDispatcher:
    """
    Dispatcher backed by Textual's thread-safe ``post_message``.

    Must be created on the app thread (e.g. in ``on_mount``). Posts made from
    that thread run inline. Posts from worker threads are wrapped in a
    DispatchedCallback message sent to ``target``, which must handle it with
    ``on_dispatched_callback`` (see ``run_dispatched``). Workers never block on
    the UI, so shutting the app down cannot strand them.
    """

    def __init__(self, target: MessagePump):
        self._target = target
        self._ui_thread_id = threading.get_ident()

    def post(self, callback: Callable[[], None]) -> None:
        if threading.get_ident() == self._ui_thread_id:
            callback()
            return
        if not self._target.post_message(DispatchedCallback(callback)):
            logger.debug("Dispatch target is closed, dropping posted callback")


def run_dispatched(message: DispatchedCallback) -> None:
    """Run a dispatched callback; call from the target's message handler."""
    message.stop()
    message.callback()
