"""
Lifecycle adapters.

The three native entry points the host calls, each as
``callback(document, element, native_event)``:

- on_document_load: reset scene names, attach pointer tracking once,
  install the interaction time accessors on the document
- on_scene_prepare: fire HypeCardUnload (if a card was showing) and
  HypeCardPrepare when the incoming scene differs from the current one
- on_scene_load: fire HypeCardLoad when the loaded scene differs

Repeating the current scene name is a no-op. Prepare and load both shift
``prior_card_name``; after a full prepare+load cycle it holds the card that
was current before prepare began.
"""

from typing import Any, Callable, Optional

from models import CardEventType
from card_events.composer import CardEventComposer
from card_events.defaults import DefaultRegistry, SCENE_NAME_FUNCTION
from card_events.host import HostDocument
from card_events.dispatch import CardEventDispatcher, Halt
from card_events.logging import get_logger
from card_events.state import DocumentRegistry
from card_events.tracker import InteractionTracker

log = get_logger('lifecycle')

DEFAULT_SCENE_NAME_FUNCTION = 'current_scene_name'


class LifecycleAdapters:
    """Turns native scene lifecycle callbacks into card events."""

    def __init__(
        self,
        documents: DocumentRegistry,
        defaults: DefaultRegistry,
        composer: CardEventComposer,
        dispatcher: CardEventDispatcher,
        tracker: InteractionTracker,
        clock: Callable[[], float],
    ):
        self.documents = documents
        self.defaults = defaults
        self.composer = composer
        self.dispatcher = dispatcher
        self.tracker = tracker
        self.clock = clock

    def scene_name(self, document: HostDocument) -> str:
        """
        Name of the document's visible scene.

        Uses the accessor named by the ``scene_name_function`` default,
        falling back to ``current_scene_name`` when that is not callable.
        """
        name = self.defaults.get(SCENE_NAME_FUNCTION)
        accessor = getattr(document, name, None) if isinstance(name, str) else None
        if not callable(accessor):
            if name != DEFAULT_SCENE_NAME_FUNCTION:
                log.debug("Scene name accessor %r unavailable, using %s",
                          name, DEFAULT_SCENE_NAME_FUNCTION)
            accessor = getattr(document, DEFAULT_SCENE_NAME_FUNCTION)
        return accessor()

    def install_accessors(self, document: Any) -> None:
        """Give the document get_last_interaction_time/age methods."""
        document_id = document.document_id()

        def get_last_interaction_time() -> Optional[float]:
            state = self.documents.peek(document_id)
            return state.last_interaction_time if state else None

        def get_last_interaction_age() -> Optional[float]:
            state = self.documents.peek(document_id)
            return state.interaction_age(self.clock()) if state else None

        document.get_last_interaction_time = get_last_interaction_time
        document.get_last_interaction_age = get_last_interaction_age

    def on_document_load(self, document: HostDocument, element: Any, event: Any = None) -> None:
        state = self.documents.get(document.document_id())
        state.reset_transitions()
        self.tracker.attach(document)
        self.install_accessors(document)
        log.debug("Document %s loaded", state.document_id)

    def on_scene_prepare(self, document: HostDocument, element: Any, event: Any = None) -> Optional[Halt]:
        """
        Fire unload/prepare for an incoming scene.

        Returns:
            The first Halt a listener returned, else None
        """
        incoming = self.scene_name(document)
        state = self.documents.get(document.document_id())
        if not state.is_transition(incoming):
            log.trace("Prepare %s: already current, ignored", incoming)
            return None

        results = []
        if state.current_card_name is not None:
            unload = self.composer.compose(
                CardEventType.UNLOAD,
                document,
                previous_card_name=state.prior_card_name,
                current_card_name=state.current_card_name,
                next_card_name=incoming,
            )
            results.append(self.dispatcher.dispatch(CardEventType.UNLOAD, document, element, unload))

        prepare = self.composer.compose(
            CardEventType.PREPARE,
            document,
            previous_card_name=state.current_card_name,
            current_card_name=incoming,
        )
        results.append(self.dispatcher.dispatch(CardEventType.PREPARE, document, element, prepare))

        log.debug("Prepare %s -> %s", state.current_card_name, incoming)
        state.prior_card_name = state.current_card_name
        return _first_halt(results)

    def on_scene_load(self, document: HostDocument, element: Any, event: Any = None) -> Optional[Halt]:
        """
        Fire HypeCardLoad for a newly loaded scene.

        Returns:
            The Halt a listener returned, else None
        """
        loaded = self.scene_name(document)
        state = self.documents.get(document.document_id())
        if not state.is_transition(loaded):
            log.trace("Load %s: already current, ignored", loaded)
            return None

        load = self.composer.compose(
            CardEventType.LOAD,
            document,
            previous_card_name=state.current_card_name,
            current_card_name=loaded,
        )
        result = self.dispatcher.dispatch(CardEventType.LOAD, document, element, load)

        log.debug("Load %s -> %s", state.current_card_name, loaded)
        state.record_load(loaded)
        return _first_halt([result])


def _first_halt(results) -> Optional[Halt]:
    for result in results:
        if isinstance(result, Halt):
            return result
    return None
