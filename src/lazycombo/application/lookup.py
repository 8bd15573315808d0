"""
LookupCoordinator - owns the cancellation lifecycle of the lookup callback.

Every invocation gets a fresh LookupContext with its own cancellation token.
Issuing a new invocation cancels the previous token first, so at most one
lookup is "live" at a time. Lookups run on a worker thread (async) or inline
on the UI thread (sync).

Ordering guarantees:
    - The newest context is retained synchronously at the call site, before
      the worker is scheduled. ``retained_tag`` reads that context's tag, so
      the continuation tag always belongs to the invocation issued last, no
      matter which callback finishes first.
    - Results posted through ``LookupContext.post()`` go through a single-slot
      mailbox (LatestSlot) and are applied on the UI context only if their
      invocation is still the newest one.

Cancellation is cooperative. A callback that ignores its token and mutates
shared state directly is outside the coordinator's control.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Generic, TypeVar

from lazycombo.domain.events import EventBus, LookupCompleted, LookupStarted
from lazycombo.domain.exceptions import DispatcherClosedError, LookupCancelledError
from lazycombo.domain.protocols import Dispatcher
from lazycombo.domain.types import CancellationToken, LookupAction, LookupContext
from lazycombo.application.dispatch import QueueDispatcher
from lazycombo.logger import get_logger

logger = get_logger("lookup")

T = TypeVar("T")


class LatestSlot(Generic[T]):
    """
    Single-slot mailbox that keeps only the newest generation.

    ``offer()`` replaces the pending entry unless the pending entry is newer.
    ``take()`` empties the slot. Safe to use from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entry: tuple[int, T] | None = None

    def offer(self, generation: int, value: T) -> bool:
        with self._lock:
            if self._entry is not None and self._entry[0] > generation:
                return False
            self._entry = (generation, value)
            return True

    def take(self) -> tuple[int, T] | None:
        with self._lock:
            entry, self._entry = self._entry, None
            return entry

    def discard_older_than(self, generation: int) -> bool:
        """Drop the pending entry if it belongs to an older generation."""
        with self._lock:
            if self._entry is not None and self._entry[0] < generation:
                self._entry = None
                return True
            return False

    def __len__(self) -> int:
        with self._lock:
            return 0 if self._entry is None else 1


class LookupCoordinator:
    """
    Issues lookup invocations and keeps only the newest one effective.

    The coordinator is driven from the UI thread; ``invoke()``, ``cancel()``
    and the mailbox drain all run there. Worker threads only touch the
    mailbox and the dispatcher.
    Without an explicit dispatcher, results wait in a QueueDispatcher until
    the owning thread drains it.
    """

    def __init__(
        self,
        action_getter: Callable[[], LookupAction | None],
        *,
        dispatcher: Dispatcher | None = None,
        items_sink: Callable[[Any], None] | None = None,
        on_loading_changed: Callable[[bool], None] | None = None,
        event_bus: EventBus | None = None,
        max_workers: int = 4,
        thread_name_prefix: str = "lazycombo-lookup",
    ):
        """
        Initialize the coordinator.

        Args:
            action_getter: Returns the current lookup callback (or None)
            dispatcher: Hop back to the UI context (default: a QueueDispatcher
                the owning thread drains)
            items_sink: Receives items passed to ``LookupContext.set_items()``
            on_loading_changed: Called with True/False around each invocation
            event_bus: Receives LookupStarted/LookupCompleted events
            max_workers: Size of the worker pool for async lookups
            thread_name_prefix: Name prefix for worker threads
        """
        self._action_getter = action_getter
        self.dispatcher: Dispatcher = dispatcher or QueueDispatcher(thread_name_prefix)
        self._items_sink = items_sink
        self._on_loading_changed = on_loading_changed
        self._event_bus = event_bus
        self._max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix

        self._lock = threading.Lock()
        self._executor: ThreadPoolExecutor | None = None
        self._generation = 0
        self._token: CancellationToken | None = None
        self._context: LookupContext | None = None
        self._slot: LatestSlot[Callable[[], None]] = LatestSlot()
        self._is_loading = False
        self._depth = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        """Number of invocations issued so far."""
        return self._generation

    @property
    def latest_context(self) -> LookupContext | None:
        """Context of the invocation issued last."""
        return self._context

    @property
    def current_token(self) -> CancellationToken | None:
        return self._token

    @property
    def retained_tag(self) -> Any:
        """Continuation tag of the invocation issued last."""
        context = self._context
        return None if context is None else context.tag

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def _set_loading(self, value: bool) -> None:
        if self._is_loading == value:
            return
        self._is_loading = value
        if self._on_loading_changed is not None:
            self._on_loading_changed(value)

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def invoke(self, input_text: str | None, async_: bool = True) -> Future | None:
        """
        Issue a lookup for ``input_text``.

        Args:
            input_text: Text the lookup is for
            async_: Run on a worker thread (True) or inline (False)

        Returns:
            The worker Future for async invocations, None otherwise (or when
            no lookup action is configured)

        Raises:
            Exception: Whatever a synchronous callback raises, after the
                loading flag has been cleared
        """
        action = self._action_getter()
        if action is None:
            logger.debug("No lookup action configured, skipping lookup")
            return None

        self._depth += 1
        try:
            self._set_loading(True)
            context = self._issue(input_text or "", async_)
            logger.debug(
                f"Lookup #{context.generation} issued for {context.input_text!r} "
                f"({'async' if async_ else 'sync'})"
            )
            self._publish(LookupStarted(generation=context.generation, input_text=context.input_text, asynchronous=async_))
            if async_:
                return self._get_executor().submit(self._run_worker, action, context)
            self._run_inline(action, context)
            return None
        finally:
            self._depth -= 1
            # Nested invocations (a sync callback writing the selection) keep
            # the flag up until the outermost call returns.
            if self._depth == 0:
                self._set_loading(False)

    def _issue(self, input_text: str, async_: bool) -> LookupContext:
        with self._lock:
            previous = self._token
            if previous is not None and previous.cancel():
                logger.debug(f"Cancelled lookup #{previous.generation}")

            self._generation += 1
            token = CancellationToken(self._generation)
            tag = None if self._context is None else self._context.tag
            context = LookupContext(
                input_text=input_text,
                cancellation_token=token,
                tag=tag,
                _poster=self._post_from_worker if async_ else self._apply_now,
                _items_sink=self._items_sink,
            )
            self._token = token
            self._context = context
            self._slot.discard_older_than(token.generation)
        return context

    def _run_inline(self, action: LookupAction, context: LookupContext) -> None:
        error: BaseException | None = None
        try:
            action(context)
        except LookupCancelledError:
            logger.debug(f"Lookup #{context.generation} stopped after cancellation")
        except Exception as e:
            error = e
            raise
        finally:
            self._publish(
                LookupCompleted(generation=context.generation, cancelled=context.is_cancelled, error=error)
            )

    def _run_worker(self, action: LookupAction, context: LookupContext) -> None:
        error: BaseException | None = None
        try:
            action(context)
        except LookupCancelledError:
            logger.debug(f"Lookup #{context.generation} stopped after cancellation")
        except Exception as e:
            error = e
            logger.opt(exception=e).error(f"Lookup #{context.generation} for {context.input_text!r} failed: {e}")
            raise
        finally:
            event = LookupCompleted(generation=context.generation, cancelled=context.is_cancelled, error=error)
            try:
                self.dispatcher.post(lambda: self._publish(event))
            except DispatcherClosedError:
                logger.debug(f"Dispatcher closed, LookupCompleted for lookup #{context.generation} not delivered")

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix=self._thread_name_prefix,
            )
            logger.info(f"Started lookup worker pool (max_workers={self._max_workers})")
        return self._executor

    # ------------------------------------------------------------------
    # Result marshaling
    # ------------------------------------------------------------------

    def _post_from_worker(self, generation: int, action: Callable[[], None]) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping result of superseded lookup #{generation}")
                return False
            if not self._slot.offer(generation, action):
                return False
        try:
            self.dispatcher.post(self._drain)
        except DispatcherClosedError:
            logger.debug(f"Dispatcher closed, dropping result of lookup #{generation}")
            return False
        return True

    def _apply_now(self, generation: int, action: Callable[[], None]) -> bool:
        if generation != self._generation:
            logger.debug(f"Dropping result of superseded lookup #{generation}")
            return False
        action()
        return True

    def _drain(self) -> None:
        entry = self._slot.take()
        if entry is None:
            return
        generation, action = entry
        with self._lock:
            current = self._generation
            token = self._token
        if generation != current or token is None or token.is_cancelled:
            logger.debug(f"Discarding stale result of lookup #{generation}")
            return
        action()

    def _publish(self, event: LookupStarted | LookupCompleted) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cancel(self) -> bool:
        """Cancel the outstanding invocation, if any."""
        with self._lock:
            token = self._token
        if token is not None and token.cancel():
            logger.debug(f"Cancelled lookup #{token.generation}")
            return True
        return False

    def shutdown(self, wait: bool = False) -> None:
        """Cancel the outstanding lookup and stop the worker pool."""
        self.cancel()
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=True)
            self._executor = None
            logger.info("Lookup worker pool stopped")
