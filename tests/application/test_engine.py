"""End-to-end tests for the combo box engine on a virtual clock."""

import pytest

from suggestbox.application.classifier import DOWN_KEYCODE as DOWN
from suggestbox.application.classifier import ENTER_KEYCODE as ENTER
from suggestbox.application.classifier import TAB_KEYCODE as TAB
from suggestbox.application.classifier import UP_KEYCODE as UP
from suggestbox.application.engine import ComboBoxEngine
from suggestbox.domain.events import FieldFocus, SuppressionSignal, TextInput
from suggestbox.domain.state import ComboPhase, ComboState
from suggestbox.infrastructure.transport import InMemoryTransport, prefix_lookup

ENDPOINT = "https://example.test/w/api.php?action=opensearch&format=json&search="


class TestTypingAndSelecting:
    """Tests for the typing, navigating and committing flow."""

    def test_type_navigate_and_commit_with_enter(self, harness):
        """Test the full keyboard flow from typing to a committed selection."""
        harness.focus()
        harness.type("l")
        harness.type("lo")
        harness.scheduler.advance_by(0.5)

        assert harness.transport.urls == [ENDPOINT + "lo"]

        harness.respond("lo", ["London", "Los Angeles"])
        assert harness.state == ComboState(suggestions=("London", "Los Angeles"))

        harness.press(DOWN)
        assert harness.state.highlighted == 0
        harness.press(DOWN)
        assert harness.state.highlighted == 1

        harness.log.clear()
        enter = harness.press(ENTER)

        assert harness.log == [
            ("signal", SuppressionSignal(enter)),
            ("state", ComboState(suggestions=(), highlighted=None, selected="Los Angeles")),
            ("selection", "Los Angeles"),
            ("state", ComboState()),
        ]

    def test_up_from_nothing_highlights_last(self, harness):
        harness.show("lo", ["London", "Los Angeles", "Louisville"])

        harness.press(UP)

        assert harness.state.highlighted == 2

    def test_tab_commits_highlight(self, harness):
        harness.show("pa", ["Paris"])
        harness.press(DOWN)

        tab = harness.press(TAB)

        assert harness.signals == [SuppressionSignal(tab)]
        assert harness.selections == ["Paris"]

    def test_tab_without_highlight_moves_focus_normally(self, harness):
        """Test Tab keeps its default when the list has no highlight."""
        harness.show("lo", ["London", "Los Angeles"])
        before = harness.state

        harness.press(TAB)

        assert harness.signals == []
        assert harness.selections == []
        assert harness.state == before

    def test_enter_without_highlight_is_not_suppressed(self, harness):
        """Test Enter keeps its default when nothing is highlighted."""
        harness.show("lo", ["London"])

        harness.press(ENTER)

        assert harness.signals == []
        assert harness.selections == []
        assert harness.state == ComboState.fresh(["London"])

    def test_enter_with_no_suggestions_is_not_suppressed(self, harness):
        harness.focus()
        harness.press(ENTER)

        assert harness.signals == []
        assert harness.state == ComboState()

    def test_clearing_field_closes_menu(self, harness):
        harness.show("lo", ["London"])
        harness.press(DOWN)

        harness.type("")

        assert harness.state == ComboState()
        harness.scheduler.advance_by(1.0)
        assert harness.transport.urls == [ENDPOINT + "lo"]


class TestLatestRequestWins:
    """Tests for response correlation through the engine."""

    def test_stale_response_never_applied(self, harness):
        """Test an older response arriving after a newer request is ignored."""
        harness.focus()
        harness.search("l")
        harness.search("lo")
        assert harness.transport.urls == [ENDPOINT + "l", ENDPOINT + "lo"]

        harness.respond("lo", ["London"])
        count = len(harness.states)
        harness.respond("l", ["Lisbon", "London", "Lyon"])

        assert len(harness.states) == count
        assert harness.state == ComboState.fresh(["London"])

    def test_stale_response_before_newer_one_also_ignored(self, harness):
        harness.focus()
        harness.search("l")
        harness.search("lo")

        harness.respond("l", ["Lisbon"])
        assert harness.state == ComboState()

        harness.respond("lo", ["London"])
        assert harness.state == ComboState.fresh(["London"])

    def test_query_is_url_encoded(self, harness):
        harness.focus()
        harness.search("new york")

        assert harness.transport.urls == [ENDPOINT + "new%20york"]


class TestEpochs:
    """Tests for epoch resets when new suggestions arrive."""

    def test_new_list_resets_highlight(self, harness):
        harness.show("l", ["Lisbon", "London", "Lyon"])
        harness.press(DOWN)
        harness.press(DOWN)
        assert harness.state.highlighted == 1

        harness.search("lo")
        harness.respond("lo", ["London", "Los Angeles"])

        assert harness.state == ComboState.fresh(["London", "Los Angeles"])

    def test_one_snapshot_per_action_after_many_epochs(self, harness):
        """Test earlier epochs no longer react to actions."""
        harness.focus()
        for query in ("l", "lo", "lon"):
            harness.search(query)
            harness.respond(query, ["London", "London Bridge"])

        count = len(harness.states)
        harness.press(DOWN)

        assert len(harness.states) == count + 1
        assert harness.engine.reducer.epoch == 3


class TestBlurAndMouse:
    """Tests for focus loss and pointer interaction."""

    def test_blur_elsewhere_closes_menu(self, harness):
        harness.show("lo", ["London", "Los Angeles"])
        harness.press(DOWN)

        harness.blur()

        assert harness.signals == []
        assert harness.state == ComboState()
        assert harness.engine.phase is ComboPhase.IDLE

    def test_response_after_blur_is_accepted_as_empty(self, harness):
        """Test a late answer does not reopen the menu of an unfocused field."""
        harness.focus()
        harness.search("lo")
        harness.blur()
        epoch = harness.engine.reducer.epoch

        harness.respond("lo", ["London"])

        assert harness.state == ComboState()
        assert harness.engine.reducer.epoch == epoch + 1

    def test_hover_highlights_row(self, harness):
        harness.show("lo", ["London", "Los Angeles"])

        harness.hover(1)

        assert harness.state.highlighted == 1

    def test_click_on_row_commits_it(self, harness):
        """Test the blur caused by a row click is suppressed and the row selected."""
        harness.show("l", ["Lisbon", "London", "Lyon"])
        harness.hover(2)

        harness.mouse_down(2)
        blur = harness.blur()
        assert harness.signals == [SuppressionSignal(blur)]
        assert harness.signals[0].refocus is True
        assert harness.state.suggestions == ("Lisbon", "London", "Lyon")

        harness.mouse_up(2)
        harness.focus()

        assert harness.selections == ["Lyon"]
        assert harness.state == ComboState()

    def test_drag_between_rows_selects_nothing(self, harness):
        harness.show("l", ["Lisbon", "London"])
        harness.hover(0)
        harness.mouse_down(0)
        harness.blur()
        harness.hover(1)
        harness.mouse_up(1)

        assert harness.selections == []
        assert harness.state.highlighted == 1


class TestLifecycle:
    """Tests for starting and stopping the engine."""

    def test_start_replays_current_state(self, scheduler, transport):
        engine = ComboBoxEngine(transport, scheduler, endpoint=ENDPOINT)
        states = []

        engine.start(on_state=states.append)

        assert states[-1] == ComboState()
        assert engine.is_running
        engine.stop()

    def test_second_start_is_ignored(self, harness):
        harness.engine.start(on_state=lambda state: None)
        harness.focus()
        harness.search("lo")

        assert harness.transport.urls == [ENDPOINT + "lo"]

    def test_stop_cancels_pending_debounce(self, harness):
        harness.focus()
        harness.type("lo")

        harness.engine.stop()
        harness.scheduler.advance_by(1.0)

        assert harness.transport.urls == []
        assert not harness.engine.is_running
        assert harness.scheduler.pending == 0

    def test_rejects_non_positive_debounce(self, scheduler, transport):
        with pytest.raises(ValueError):
            ComboBoxEngine(transport, scheduler, endpoint=ENDPOINT, debounce_seconds=-1)

    def test_latency_answers_after_delay(self, scheduler):
        """Test an automatically answering transport on the same virtual clock."""
        transport = InMemoryTransport(
            endpoint=ENDPOINT,
            lookup=prefix_lookup(["London", "Los Angeles", "Paris"]),
            scheduler=scheduler,
            latency=0.3,
        )
        engine = ComboBoxEngine(transport, scheduler, endpoint=ENDPOINT, debounce_seconds=0.5)
        engine.start()

        engine.publish(FieldFocus())
        engine.publish(TextInput(value="lo"))
        scheduler.advance_by(0.5)
        assert engine.state == ComboState()

        scheduler.advance_by(0.3)
        assert engine.state == ComboState.fresh(["London", "Los Angeles"])
        engine.stop()
