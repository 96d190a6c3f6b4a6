# tests/test_busy_state.py
"""
Тесты для модуля sheetdesk/core/busy_state.py.
"""
import threading

import pytest

from sheetdesk.core.busy_state import BusyState


def test_overlapping_operations_keep_indicator_on():
    """Индикатор гаснет только после завершения последней операции."""
    state = BusyState()
    transitions = []
    state.add_listener(transitions.append)

    state.acquire()
    state.acquire()
    state.release()
    assert state.is_busy
    state.release()

    assert not state.is_busy
    assert transitions == [True, False]


def test_hold_releases_on_exception():
    state = BusyState()

    with pytest.raises(RuntimeError):
        with state.hold():
            assert state.count == 1
            raise RuntimeError("сбой запроса")

    assert state.count == 0


def test_release_without_acquire():
    with pytest.raises(RuntimeError):
        BusyState().release()


def test_failing_listener_does_not_break_counter():
    state = BusyState()
    seen = []

    def broken(busy):
        raise ValueError("listener")

    state.add_listener(broken)
    state.add_listener(seen.append)
    with state.hold():
        pass

    assert seen == [True, False]
    assert state.count == 0


def test_remove_listener():
    state = BusyState()
    seen = []
    state.add_listener(seen.append)
    state.remove_listener(seen.append)
    with state.hold():
        pass
    assert seen == []


def test_concurrent_holds():
    state = BusyState()
    transitions = []
    state.add_listener(transitions.append)
    barrier = threading.Barrier(4)

    def worker():
        with state.hold():
            barrier.wait(timeout=5)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert state.count == 0
    assert transitions == [True, False]
