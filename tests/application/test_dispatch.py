import asyncio
import threading

import pytest

from lazycombo.application.dispatch import AsyncioDispatcher, ImmediateDispatcher, QueueDispatcher
from lazycombo.domain.exceptions import DispatcherClosedError


def test_immediate_dispatcher_runs_inline():
    ran = []
    ImmediateDispatcher().post(lambda: ran.append(threading.get_ident()))
    assert ran == [threading.get_ident()]


def test_queue_dispatcher_runs_on_drain_in_order():
    dispatcher = QueueDispatcher()
    ran = []
    dispatcher.post(lambda: ran.append(1))
    dispatcher.post(lambda: ran.append(2))
    assert ran == []
    assert dispatcher.pending == 2

    assert dispatcher.drain() == 2
    assert ran == [1, 2]
    assert dispatcher.drain() == 0


def test_queue_dispatcher_drain_limit_and_nested_posts():
    dispatcher = QueueDispatcher()
    ran = []

    def first():
        ran.append("first")
        dispatcher.post(lambda: ran.append("nested"))

    dispatcher.post(first)
    dispatcher.post(lambda: ran.append("second"))

    assert dispatcher.drain(max_items=1) == 1
    assert ran == ["first"]
    assert dispatcher.drain() == 2
    assert ran == ["first", "second", "nested"]


def test_queue_dispatcher_accepts_posts_from_threads():
    dispatcher = QueueDispatcher()
    ran = []
    threads = [threading.Thread(target=dispatcher.post, args=(lambda i=i: ran.append(i),)) for i in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert dispatcher.drain() == 5
    assert sorted(ran) == [0, 1, 2, 3, 4]


def test_closed_queue_dispatcher_rejects_posts():
    dispatcher = QueueDispatcher("ui")
    dispatcher.post(lambda: None)
    dispatcher.close()
    with pytest.raises(DispatcherClosedError):
        dispatcher.post(lambda: None)
    assert dispatcher.drain() == 1


@pytest.mark.asyncio
async def test_asyncio_dispatcher_hops_onto_the_loop():
    dispatcher = AsyncioDispatcher()
    loop_thread = threading.get_ident()
    done = asyncio.Event()
    ran = []

    def callback():
        ran.append(threading.get_ident())
        done.set()

    worker = threading.Thread(target=dispatcher.post, args=(callback,))
    worker.start()
    worker.join()
    await asyncio.wait_for(done.wait(), timeout=5)

    assert ran == [loop_thread]
