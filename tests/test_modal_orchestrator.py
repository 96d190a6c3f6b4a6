# tests/test_modal_orchestrator.py
"""
Тесты для модуля sheetdesk/core/modal_orchestrator.py.
"""
from sheetdesk.core.modal_orchestrator import (
    ConfirmationOrchestrator,
    ModalOrchestrator,
    ModalState,
    OneShotAction,
)

from conftest import FakeModalView, ManualScheduler


def make_modal(reset_on_close=False):
    scheduler = ManualScheduler()
    modal = ModalOrchestrator("form", scheduler=scheduler, open_delay_ms=10,
                              close_delay_ms=300, reset_on_close=reset_on_close)
    view = FakeModalView()
    modal.attach_view(view)
    return modal, view, scheduler


def test_open_shows_then_reveals():
    modal, view, scheduler = make_modal()

    modal.open()
    assert modal.state == ModalState.OPENING
    assert view.displayed and not view.revealed
    assert scheduler.pending[0][0] == 10

    scheduler.run_all()
    assert modal.state == ModalState.OPEN
    assert view.calls == [("displayed", True), ("revealed", True)]


def test_close_hides_after_transition_and_resets():
    modal, view, scheduler = make_modal(reset_on_close=True)
    modal.open()
    scheduler.run_all()

    modal.close()
    assert modal.state == ModalState.CLOSING
    assert view.displayed and not view.revealed
    assert scheduler.pending[0][0] == 300

    scheduler.run_all()
    assert modal.state == ModalState.CLOSED
    assert not view.displayed
    assert view.calls[-1] == ("reset",)


def test_reopen_during_close_ignores_stale_timer():
    modal, view, scheduler = make_modal()
    modal.open()
    scheduler.run_all()

    modal.close()
    modal.open()
    scheduler.run_all()

    assert modal.state == ModalState.OPEN
    assert view.displayed and view.revealed


def test_repeated_open_and_close_are_ignored():
    modal, view, scheduler = make_modal()
    modal.close()
    assert view.calls == []

    modal.open()
    modal.open()
    assert len(scheduler.pending) == 1


def test_one_shot_action():
    calls = []
    action = OneShotAction()
    action.bind(lambda: calls.append("first"))
    action.bind(lambda: calls.append("second"))

    assert action.fire()
    assert not action.fire()
    assert calls == ["second"]


def test_confirmation_runs_latest_action_once():
    scheduler = ManualScheduler()
    confirm = ConfirmationOrchestrator(scheduler=scheduler)
    view = FakeModalView()
    confirm.attach_view(view)
    calls = []

    confirm.open_confirmation("Удалить строку 2?", lambda: calls.append(2))
    confirm.open_confirmation("Удалить строку 3?", lambda: calls.append(3))
    assert view.message == "Удалить строку 3?"

    assert confirm.confirm()
    assert not confirm.confirm()
    assert calls == [3]


def test_cancel_discards_pending_action():
    confirm = ConfirmationOrchestrator()
    calls = []
    confirm.open_confirmation("Удалить?", lambda: calls.append(1))

    confirm.close()

    assert not confirm.has_pending_action
    assert not confirm.confirm()
    assert calls == []
    assert confirm.state == ModalState.CLOSED
