"""Tests for wasuremono/controller.py — action wiring, persistence, re-render."""

from wasuremono.drag import PointerEvent
from wasuremono.models import STORAGE_KEY
from wasuremono.render import COMPLETE_MESSAGE, RowRegion
from wasuremono.storage import load
from wasuremono.store import DELETE_PROMPT, RESET_PROMPT


def test_start_renders_without_saving(controller, view, blob_store):
    assert [r.item_id for r in view.lists[-1].rows] == [1, 2, 3, 4]
    assert view.statuses[-1].text == "4 remaining"
    assert blob_store.writes == 0


def test_toggle_saves_and_rerenders(controller, view, blob_store):
    assert controller.tap_row(3, RowRegion.TOGGLE) is True
    assert blob_store.writes == 1
    assert load(blob_store)[2].checked is True
    assert view.lists[-1].rows[2].checked is True
    assert view.statuses[-1].text == "3 remaining"


def test_toggle_unknown_id_does_nothing(controller, view, blob_store):
    renders = len(view.lists)
    assert controller.toggle(12345) is False
    assert blob_store.writes == 0
    assert len(view.lists) == renders


def test_handle_tap_does_not_toggle(controller, blob_store):
    assert controller.tap_row(1, RowRegion.HANDLE) is False
    assert controller.store.find(1).checked is False
    assert blob_store.writes == 0


def test_delete_tap_deletes_without_toggling(controller, prompts):
    assert controller.tap_row(2, RowRegion.DELETE) is True
    assert prompts.asked == [DELETE_PROMPT]
    assert controller.store.ids() == [1, 3, 4]
    assert all(not it.checked for it in controller.store)


def test_delete_declined(controller, prompts, blob_store):
    prompts.answer = False
    assert controller.delete(1) is False
    assert controller.store.ids() == [1, 2, 3, 4]
    assert blob_store.writes == 0


def test_delete_with_explicit_confirm(controller, prompts):
    assert controller.delete(1, confirm=lambda _prompt: True) is True
    assert prompts.asked == []


def test_delete_only_item_shows_placeholder(controller, view, blob_store):
    for item_id in [1, 2, 3]:
        controller.delete(item_id)
    controller.delete(4)
    assert len(controller.store) == 0
    assert view.lists[-1].empty is True
    assert view.statuses[-1].text == "0 remaining"
    assert load(blob_store) == []


def test_check_all_shows_completion(controller, view):
    controller.check_all()
    assert controller.store.unchecked_count() == 0
    assert view.statuses[-1].text == COMPLETE_MESSAGE
    assert view.statuses[-1].complete is True


def test_reset_all_confirmed(controller, prompts, view):
    controller.check_all()
    assert controller.reset_all() is True
    assert prompts.asked == [RESET_PROMPT]
    assert all(not it.checked for it in controller.store)
    assert view.statuses[-1].text == "4 remaining"


def test_reset_all_declined(controller, prompts, blob_store):
    controller.check_all()
    prompts.answer = False
    writes = blob_store.writes
    assert controller.reset_all() is False
    assert all(it.checked for it in controller.store)
    assert blob_store.writes == writes


def test_open_add_shows_modal_and_focuses_later(controller, view, timers):
    controller.modal.input_text = "leftover"
    controller.open_add()
    assert view.modal_visible is True
    assert controller.modal.open is True
    assert controller.modal.input_text == ""
    assert view.focus_calls == 0
    assert timers.pending[0][0] == 0.1
    timers.fire()
    assert view.focus_calls == 1


def test_submit_add_appends_and_closes(controller, view, blob_store):
    controller.open_add()
    assert controller.submit_add("  umbrella  ") is True
    assert controller.store.items[-1].text == "umbrella"
    assert load(blob_store)[-1].text == "umbrella"
    assert view.modal_visible is False
    assert controller.modal.open is False
    assert view.statuses[-1].text == "5 remaining"


def test_submit_blank_keeps_modal_open(controller, view, blob_store):
    controller.open_add()
    assert controller.submit_add("   ") is False
    assert len(controller.store) == 4
    assert blob_store.writes == 0
    assert view.modal_visible is True
    assert controller.modal.open is True


def test_escape_closes_only_open_modal(controller, view):
    assert controller.key("escape") is False
    controller.open_add()
    assert controller.key("enter") is False
    assert controller.key("escape") is True
    assert view.modal_visible is False


def test_close_modal_clears_input(controller, view):
    controller.open_add()
    controller.modal.input_text = "typed"
    controller.close_modal()
    assert controller.modal.input_text == ""
    assert view.modal_visible is False


def test_drag_commit_persists_visual_order(controller, view, blob_store):
    drag = controller.drag
    drag.press(1, PointerEvent(5, view.top_of(1) + 20))
    drag.move(PointerEvent(5, view.top_of(3) + 39))
    drag.release()
    assert controller.store.ids() == [2, 3, 1, 4]
    assert [it.id for it in load(blob_store)] == [2, 3, 1, 4]
    assert [r.item_id for r in view.lists[-1].rows] == [2, 3, 1, 4]


def test_drag_tap_does_not_persist(controller, view, blob_store):
    drag = controller.drag
    drag.press(2, PointerEvent(5, view.top_of(2) + 20))
    drag.release()
    assert blob_store.writes == 0
    assert controller.store.ids() == [1, 2, 3, 4]


def test_uses_configured_storage_key(blob_store, view, prompts, timers):
    from wasuremono.controller import InteractionController
    from wasuremono.models import Settings, default_items
    from wasuremono.store import ItemStore

    ctl = InteractionController(
        ItemStore(default_items()),
        blob_store,
        view,
        confirm=prompts,
        schedule=timers,
        settings=Settings(storage_key="custom", drag_threshold=0),
    )
    ctl.check_all()
    assert "custom" in blob_store.data
    assert STORAGE_KEY not in blob_store.data
    assert ctl.drag.threshold == 0


def test_end_to_end_scenario(controller, view, prompts):
    assert len(controller.store) == 4
    assert all(not it.checked for it in controller.store)

    key_item = controller.store.find(3)
    assert key_item.text == "鍵"
    controller.tap_row(3, RowRegion.TOGGLE)
    assert view.statuses[-1].text == "3 remaining"

    prompts.answer = True
    assert controller.delete(1) is True
    assert controller.store.ids() == [2, 3, 4]
    assert controller.store.find(3).checked is True

    controller.check_all()
    assert view.statuses[-1].text == COMPLETE_MESSAGE
