"""Tests for the session reducer (state machine)."""

from __future__ import annotations

import pytest

from vanish.engine.session import (
    ContainerResized,
    HistoryOpened,
    ImageLoaded,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    PresetChosen,
    ProcessingFailed,
    ProcessingStarted,
    ProcessingSucceeded,
    Reset,
    TransitionError,
    TryAgain,
    UploadFailed,
    UploadStarted,
    can_process,
    initial_state,
    reduce,
)
from vanish.engine.state import Point, ProcessingStatus, Rect, SessionState, Size, View
from vanish.history.store import make_entry
from tests.conftest import ORIGINAL_URI, RESULT_URI


def _run(state: SessionState, *actions) -> SessionState:
    for action in actions:
        state = reduce(state, action)
    return state


def _editing() -> SessionState:
    return _run(
        initial_state(),
        UploadStarted(),
        ImageLoaded(image=ORIGINAL_URI),
        ContainerResized(size=Size(300, 300)),
    )


def _selected() -> SessionState:
    return _run(
        _editing(),
        PointerDown(point=Point(10, 10)),
        PointerMove(point=Point(60, 60)),
        PointerUp(),
    )


def _result() -> SessionState:
    entry = make_entry(ORIGINAL_URI, RESULT_URI, timestamp=1)
    return _run(_selected(), ProcessingStarted(), ProcessingSucceeded(entry=entry))


class TestUpload:
    def test_starts_with_no_image(self):
        state = initial_state()
        assert state.view == View.NO_IMAGE
        assert state.status == ProcessingStatus.IDLE

    def test_upload_marks_uploading(self):
        state = reduce(initial_state(), UploadStarted())
        assert state.status == ProcessingStatus.UPLOADING
        assert state.view == View.NO_IMAGE

    def test_loaded_enters_editing(self):
        state = _editing()
        assert state.view == View.EDITING
        assert state.status == ProcessingStatus.IDLE
        assert state.original_image == ORIGINAL_URI

    def test_failed_upload_is_not_stuck(self):
        state = _run(initial_state(), UploadStarted(), UploadFailed(message="unreadable"))
        assert state.status == ProcessingStatus.ERROR
        assert state.error == "unreadable"
        assert state.view == View.NO_IMAGE

    def test_upload_clears_previous_result(self):
        state = reduce(_result(), ImageLoaded(image="data:image/png;base64,AAAA"))
        assert state.view == View.EDITING
        assert state.processed_image is None
        assert state.selection is None


class TestGestures:
    def test_drag_commits_selection(self):
        state = _selected()
        assert state.selection == Rect(10, 10, 50, 50)
        assert not state.dragging

    def test_pointer_down_opens_zero_rect(self):
        state = reduce(_editing(), PointerDown(point=Point(40, 40)))
        assert state.selection == Rect(40, 40, 0, 0)
        assert state.dragging

    def test_move_without_drag_is_ignored(self):
        state = reduce(_selected(), PointerMove(point=Point(200, 200)))
        assert state.selection == Rect(10, 10, 50, 50)

    def test_leave_ends_drag(self):
        state = _run(
            _editing(),
            PointerDown(point=Point(100, 100)),
            PointerMove(point=Point(40, 70)),
            PointerLeave(),
        )
        assert not state.dragging
        assert state.selection == Rect(40, 70, 60, 30)

    def test_gestures_ignored_without_image(self):
        state = reduce(initial_state(), PointerDown(point=Point(1, 1)))
        assert state.selection is None

    def test_gestures_ignored_while_processing(self):
        busy = reduce(_selected(), ProcessingStarted())
        assert reduce(busy, PointerDown(point=Point(200, 200))) == busy

    def test_preset(self):
        state = reduce(_editing(), PresetChosen(corner="br"))
        assert state.selection == Rect(180, 180, 100, 100)

    def test_preset_needs_container(self):
        state = _run(initial_state(), ImageLoaded(image=ORIGINAL_URI))
        with pytest.raises(TransitionError):
            reduce(state, PresetChosen(corner="tl"))


class TestProcessing:
    def test_narrow_selection_cannot_process(self):
        state = _run(
            _editing(),
            PointerDown(point=Point(10, 10)),
            PointerMove(point=Point(14, 90)),
            PointerUp(),
        )
        assert not can_process(state)
        with pytest.raises(TransitionError):
            reduce(state, ProcessingStarted())

    def test_no_selection_cannot_process(self):
        assert not can_process(_editing())

    def test_started(self):
        state = reduce(_selected(), ProcessingStarted())
        assert state.view == View.PROCESSING
        assert state.busy
        assert not can_process(state)

    def test_second_request_rejected(self):
        busy = reduce(_selected(), ProcessingStarted())
        with pytest.raises(TransitionError):
            reduce(busy, ProcessingStarted())

    def test_success(self):
        state = _result()
        assert state.view == View.RESULT
        assert state.status == ProcessingStatus.COMPLETED
        assert state.original_image == ORIGINAL_URI
        assert state.processed_image == RESULT_URI
        assert len(state.history) == 1

    def test_failure_stays_editable(self):
        state = _run(_selected(), ProcessingStarted(), ProcessingFailed(message="boom"))
        assert state.view == View.EDITING
        assert state.status == ProcessingStatus.ERROR
        assert state.error == "boom"
        assert state.selection == Rect(10, 10, 50, 50)
        assert state.history == ()
        assert can_process(state)

    def test_retry_clears_error(self):
        failed = _run(_selected(), ProcessingStarted(), ProcessingFailed(message="boom"))
        assert reduce(failed, ProcessingStarted()).error is None

    def test_each_request_gets_a_new_number(self):
        first = _run(_selected(), ProcessingStarted(), ProcessingFailed(message="boom"))
        second = reduce(first, ProcessingStarted())
        assert second.request == first.request + 1

    def test_outcome_without_request_rejected(self):
        with pytest.raises(TransitionError):
            reduce(_selected(), ProcessingFailed(message="late"))


class TestAfterResult:
    def test_try_again_keeps_original(self):
        state = reduce(_result(), TryAgain())
        assert state.view == View.EDITING
        assert state.original_image == ORIGINAL_URI
        assert state.processed_image is None
        assert state.selection is None
        assert len(state.history) == 1

    def test_try_again_only_from_result(self):
        with pytest.raises(TransitionError):
            reduce(_editing(), TryAgain())

    @pytest.mark.parametrize("build", [_editing, _selected, _result])
    def test_reset_returns_home(self, build):
        state = reduce(build(), Reset())
        assert state.view == View.NO_IMAGE
        assert state.original_image is None
        assert state.processed_image is None

    def test_reset_keeps_history(self):
        assert len(reduce(_result(), Reset()).history) == 1

    def test_reset_leaves_processing(self):
        busy = reduce(_selected(), ProcessingStarted())
        state = reduce(busy, Reset())
        assert state.view == View.NO_IMAGE
        assert not state.busy
        assert state.request == busy.request

    def test_outcome_after_reset_rejected(self):
        state = _run(_selected(), ProcessingStarted(), Reset())
        with pytest.raises(TransitionError):
            reduce(state, ProcessingFailed(message="late"))

    def test_history_opened_goes_straight_to_result(self):
        entry = make_entry("data:image/png;base64,b3JpZw==", "data:image/png;base64,ZG9uZQ==", timestamp=5)
        state = reduce(initial_state((entry,)), HistoryOpened(entry=entry))
        assert state.view == View.RESULT
        assert state.original_image == entry.original_image
        assert state.processed_image == entry.processed_image
