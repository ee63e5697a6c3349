"""Tests for the lifecycle adapters: transitions, payloads and hand-off."""

import pytest

from card_events.dispatch import Halt


class TestDocumentLoad:
    """HypeDocumentLoad handling."""

    def test_attaches_tracking_once(self, host, document):
        host.load_document()
        host.load_document()

        assert document.root.count("pointerdown") == 1
        assert document.root.count("pointerup") == 1

    def test_one_gesture_one_interaction_after_reload(self, host, recorder):
        host.load_document()
        host.load_document()

        host.gesture((0, 0), (10, 0), duration=50)

        assert recorder.types == ["HypeCardInteraction"]

    def test_reload_resets_scene_names(self, host, recorder, session):
        host.load_document()
        host.load("Intro")
        host.load_document()
        recorder.clear()

        host.load("Intro")

        assert recorder.types == ["HypeCardLoad"]
        assert recorder.events[0]["previous_card_name"] is None

    def test_installs_interaction_accessors(self, host, document, clock):
        host.load_document()

        assert document.get_last_interaction_time() is None
        assert document.get_last_interaction_age() is None

        host.gesture((0, 0), (1, 1), duration=10)
        up_time = clock.now
        clock.advance(250)

        assert document.get_last_interaction_time() == up_time
        assert document.get_last_interaction_age() == 250


class TestTransitions:
    """When derived events fire."""

    @pytest.fixture(autouse=True)
    def loaded(self, host):
        host.load_document()

    def test_end_to_end_scenario(self, host, recorder):
        host.load("Intro")
        assert recorder.events == [{
            "type": "HypeCardLoad",
            "target": host.document.root,
            "previous_card_name": None,
            "current_card_name": "Intro",
            "last_interaction_age": None,
        }]
        recorder.clear()

        host.prepare("Menu")
        assert recorder.types == ["HypeCardUnload", "HypeCardPrepare"]
        unload, prepare = recorder.events
        assert unload["previous_card_name"] is None
        assert unload["current_card_name"] == "Intro"
        assert unload["next_card_name"] == "Menu"
        assert prepare["previous_card_name"] == "Intro"
        assert prepare["current_card_name"] == "Menu"
        assert "next_card_name" not in prepare
        recorder.clear()

        host.load("Menu")
        assert recorder.types == ["HypeCardLoad"]
        assert recorder.events[0]["previous_card_name"] == "Intro"
        assert recorder.events[0]["current_card_name"] == "Menu"
        recorder.clear()

        host.prepare("Menu")
        assert recorder.events == []

    def test_first_prepare_has_no_unload(self, host, recorder):
        host.prepare("Intro")

        assert recorder.types == ["HypeCardPrepare"]
        assert recorder.events[0]["previous_card_name"] is None

    @pytest.mark.parametrize("names,expected", [
        (["A"], ["A"]),
        (["A", "A"], ["A"]),
        (["A", "B", "B", "A"], ["A", "B", "A"]),
        (["A", "A", "B", "C", "C", "C", "A"], ["A", "B", "C", "A"]),
    ])
    def test_load_fires_once_per_change(self, host, recorder, names, expected):
        for name in names:
            host.load(name)

        loads = recorder.of_type("HypeCardLoad")
        assert [event["current_card_name"] for event in loads] == expected

    def test_previous_names_follow_history(self, host, recorder, session):
        for name in ("Intro", "Menu", "End"):
            host.show(name)

        unloads = recorder.of_type("HypeCardUnload")
        assert [(u["previous_card_name"], u["current_card_name"], u["next_card_name"]) for u in unloads] == [
            (None, "Intro", "Menu"),
            ("Intro", "Menu", "End"),
        ]
        state = session.documents.get("doc1")
        assert state.prior_card_name == "Menu"
        assert state.current_card_name == "End"

    def test_documents_are_independent(self, host, recorder, session, listeners):
        from conftest import FakeDocument

        other = FakeDocument(doc_id="doc2", scene="Intro")
        listeners.notify("HypeDocumentLoad", other, other.root, None)
        host.load("Intro")
        listeners.notify("HypeSceneLoad", other, other.root, None)

        assert [e["current_card_name"] for e in recorder.of_type("HypeCardLoad")] == ["Intro", "Intro"]
        assert len(session.documents) == 2


class TestSceneNameAccessor:
    """scene_name_function default."""

    @pytest.fixture(autouse=True)
    def loaded(self, host):
        host.load_document()

    def test_configured_accessor_used(self, host, session, recorder, document):
        document.scene_label = lambda: "Label"
        session.set_default("scene_name_function", "scene_label")

        host.load("ignored")

        assert recorder.events[0]["current_card_name"] == "Label"

    @pytest.mark.parametrize("accessor", ["missing_method", None, 42])
    def test_unusable_accessor_falls_back(self, host, session, recorder, accessor):
        session.set_default("scene_name_function", accessor)

        host.load("Intro")

        assert recorder.events[0]["current_card_name"] == "Intro"

    def test_non_callable_attribute_falls_back(self, host, session, recorder, document):
        document.scene_label = "not callable"
        session.set_default("scene_name_function", "scene_label")

        host.load("Intro")

        assert recorder.events[0]["current_card_name"] == "Intro"


class TestInteractionHandOff:
    """Gesture telemetry is reported on exactly one unload."""

    @pytest.fixture(autouse=True)
    def loaded(self, host):
        host.load_document()
        host.show("Intro")
        host.show("Menu")

    def test_gesture_reported_once(self, host, recorder, clock):
        recorder.clear()
        host.gesture((200, 100), (100, 100), duration=300)
        clock.advance(400)

        host.show("End")

        unload = recorder.of_type("HypeCardUnload")[0]
        assert unload["current_card_name"] == "Menu"
        assert unload["next_card_name"] == "End"
        assert unload["distance"] == 100
        assert unload["duration"] == 300
        assert unload["is_swipe"] is True
        assert unload["swipe_direction"] == "left"
        assert unload["last_interaction_age"] == 400

        prepare = recorder.of_type("HypeCardPrepare")[0]
        assert prepare["last_interaction_age"] is None

        recorder.clear()
        host.show("Credits")

        unload = recorder.of_type("HypeCardUnload")[0]
        assert "distance" not in unload
        assert "is_swipe" not in unload
        assert unload["last_interaction_age"] is None

    def test_state_cleared_after_unload(self, host, session):
        host.pointer("pointerdown", 0, 0)
        host.pointer("pointerup", 50, 0)
        host.pointer("pointerdown", 5, 5)

        host.prepare("End")

        state = session.documents.get("doc1")
        assert state.last_pointer_interaction is None
        assert state.pending_pointer_down is None
        assert state.last_interaction_time is None

    def test_load_keeps_interaction(self, host, session):
        host.gesture((0, 0), (50, 0), duration=100)

        host.load("Other")

        assert session.documents.get("doc1").last_pointer_interaction is not None


class TestShortCircuit:
    """Listener halts propagate to the native caller."""

    @pytest.fixture(autouse=True)
    def loaded(self, host):
        host.load_document()

    def test_halt_stops_native_listeners(self, host, listeners, session):
        later = []
        listeners.register("HypeCardLoad", lambda *args: False)
        listeners.register("HypeSceneLoad", lambda *args: later.append(args))

        result = host.load("Intro")

        assert result == Halt(False)
        assert later == []
        assert session.documents.get("doc1").current_card_name == "Intro"

    def test_halted_unload_still_prepares(self, host, listeners, recorder):
        host.show("Intro")
        recorder.clear()
        listeners.register("HypeCardUnload", lambda *args: Halt("veto"))

        result = host.prepare("Menu")

        assert result == Halt("veto")
        assert recorder.types == ["HypeCardUnload", "HypeCardPrepare"]

    def test_handler_error_propagates(self, host, document):
        def broken(doc, element, event):
            raise ValueError("bad handler")

        document.functions()["HypeCardLoad"] = broken

        with pytest.raises(ValueError, match="bad handler"):
            host.load("Intro")
