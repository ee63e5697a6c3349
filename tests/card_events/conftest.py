"""Pytest fixtures for card event tests: fake host runtime and clock."""
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from card_events import CardEventsSession, ListenerRegistry
from card_events.logging import clear_sinks


DERIVED_TYPES = ("HypeCardPrepare", "HypeCardUnload", "HypeCardLoad", "HypeCardInteraction")


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeElement:
    """Element that records listener attachment and can fire events."""

    def __init__(self, element_id: str = "root"):
        self.id = element_id
        self.listeners: List[Tuple[str, Callable[[Any], Any], bool]] = []

    def add_event_listener(self, event_type, callback, passive=True):
        self.listeners.append((event_type, callback, passive))

    def count(self, event_type: str) -> int:
        return sum(1 for registered, _, _ in self.listeners if registered == event_type)

    def fire(self, event_type: str, event: Any) -> List[Any]:
        return [callback(event) for registered, callback, _ in self.listeners if registered == event_type]


class FakeDocument:
    """Host document with a settable current scene."""

    def __init__(self, doc_id: str = "doc1", scene: str = "Intro", functions: Optional[Dict] = None):
        self._id = doc_id
        self.scene = scene
        self._functions = functions if functions is not None else {}
        self.root = FakeElement(doc_id)

    def document_id(self) -> str:
        return self._id

    def current_scene_name(self) -> str:
        return self.scene

    def functions(self) -> Dict[str, Callable]:
        return self._functions

    def get_element_by_id(self, element_id: str):
        return self.root if element_id == self._id else None


class Recorder:
    """Listener that records every derived event it sees."""

    def __init__(self, result: Any = None):
        self.result = result
        self.events: List[Dict[str, Any]] = []

    def __call__(self, document, element, event):
        self.events.append(event.to_payload())
        return self.result

    @property
    def types(self) -> List[str]:
        return [event["type"] for event in self.events]

    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [event for event in self.events if event["type"] == event_type]

    def clear(self) -> None:
        self.events.clear()


class FakeHost:
    """Drives native lifecycle and pointer events the way the runtime would."""

    def __init__(self, listeners: ListenerRegistry, clock: FakeClock, document: FakeDocument):
        self.listeners = listeners
        self.clock = clock
        self.document = document

    def load_document(self):
        return self.listeners.notify("HypeDocumentLoad", self.document, self.document.root, None)

    def prepare(self, name: str):
        self.document.scene = name
        return self.listeners.notify("HypeScenePrepareForDisplay", self.document, self.document.root, None)

    def load(self, name: str):
        self.document.scene = name
        return self.listeners.notify("HypeSceneLoad", self.document, self.document.root, None)

    def show(self, name: str):
        """Full transition: prepare then load."""
        self.prepare(name)
        self.load(name)

    def pointer(self, event_type: str, x: float, y: float, target: Any = None):
        event = SimpleNamespace(type=event_type, client_x=x, client_y=y, target=target)
        return self.document.root.fire(event_type, event)

    def gesture(self, start: Tuple[float, float], end: Tuple[float, float], duration: float):
        self.pointer("pointerdown", *start)
        self.clock.advance(duration)
        return self.pointer("pointerup", *end)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def listeners():
    return ListenerRegistry()


@pytest.fixture
def session(listeners, clock):
    session = CardEventsSession(listeners=listeners, clock=clock)
    session.install()
    return session


@pytest.fixture
def document():
    return FakeDocument()


@pytest.fixture
def recorder(listeners):
    """Recorder registered for every derived event type."""
    recorder = Recorder()
    for event_type in DERIVED_TYPES:
        listeners.register(event_type, recorder)
    return recorder


@pytest.fixture
def host(session, listeners, clock, document):
    return FakeHost(listeners, clock, document)


@pytest.fixture(autouse=True)
def _close_sinks():
    yield
    clear_sinks()
