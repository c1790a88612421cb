"""Extension registry for DirStreamLib.

Renderers let callers customise individual output events in two ways:

- handlers: SAX objects that write their own output for an event into the
  same downstream sink the renderer writes to
- callbacks: plain ``str -> str`` transforms

Handlers always take precedence over callbacks. Which event names accept
either kind is declared per filter class.
"""

import inspect
import warnings
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ContentSink(Protocol):
    """The SAX emission protocol shared by filters and their handlers."""

    def startElement(self, name: str, attrs: Any) -> None: ...

    def endElement(self, name: str) -> None: ...

    def characters(self, content: str) -> None: ...


@runtime_checkable
class UriHandler(ContentSink, Protocol):
    """A handler that turns a location into its own SAX output.

    ``parse_uri`` receives the path of the current node and a title/label and
    emits events against the shared sink, e.g.::

        class TitleHandler(XMLFilterBase):
            def parse_uri(self, path, title):
                self.startElement("me:woot", AttributesImpl({}))
                self.characters(read_title(path))
                self.endElement("me:woot")
    """

    def parse_uri(self, path: str, title: str) -> None: ...


class InvalidCallbackError(TypeError):
    """Raised when a callback batch contains something that is not a str transform."""
    pass


class HandlerRegistrationWarning(UserWarning):
    """Issued when a handler candidate is rejected."""
    pass


def _accepts_one_argument(func: Callable) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins carry no signature, trust them
        return True
    try:
        signature.bind("")
    except TypeError:
        return False
    return True


class ExtensionRegistry:
    """Precedence-ordered handler and callback maps keyed by event name.

    Populated once during setup, then read-only during traversal.
    """

    def __init__(self, handler_events: Iterable[str] = (), callback_events: Iterable[str] = ()):
        """
        Initialize the registry.

        Args:
            handler_events: Event names that accept handlers
            callback_events: Event names that accept callbacks
        """
        self.handler_events = tuple(handler_events)
        self.callback_events = tuple(callback_events)
        self._handlers: Dict[str, UriHandler] = {}
        self._callbacks: Dict[str, Callable[[str], str]] = {}

    def register_handlers(self, candidates: Mapping[str, Any]) -> List[str]:
        """
        Register handlers for the allowed events found in candidates.

        Invalid candidates are dropped with a HandlerRegistrationWarning,
        the rest of the batch is still registered.

        Args:
            candidates: Event name to handler object

        Returns:
            Event names that were registered

        Raises:
            TypeError: If candidates is not a mapping
        """
        if not isinstance(candidates, Mapping):
            raise TypeError(f"Handlers must be given as a mapping, got {type(candidates).__name__}")

        registered = []
        for event in self.handler_events:
            candidate = candidates.get(event)
            if not candidate:
                continue

            if not isinstance(candidate, ContentSink):
                warnings.warn(
                    f"Handler for '{event}' must implement the SAX content handler "
                    "methods (startElement, endElement, characters)",
                    HandlerRegistrationWarning,
                    stacklevel=3,
                )
                continue

            if not callable(getattr(candidate, "parse_uri", None)):
                warnings.warn(
                    f"Handler for '{event}' must define a 'parse_uri' method",
                    HandlerRegistrationWarning,
                    stacklevel=3,
                )
                continue

            self._handlers[event] = candidate
            registered.append(event)

        return registered

    def register_callbacks(self, candidates: Mapping[str, Any]) -> List[str]:
        """
        Register callbacks for the allowed events found in candidates.

        The batch is all or nothing: one bad entry means nothing is stored.

        Args:
            candidates: Event name to callable(str) -> str

        Returns:
            Event names that were registered

        Raises:
            TypeError: If candidates is not a mapping
            InvalidCallbackError: If an allowed entry is not a one-argument callable
        """
        if not isinstance(candidates, Mapping):
            raise TypeError(f"Callbacks must be given as a mapping, got {type(candidates).__name__}")

        accepted: Dict[str, Callable[[str], str]] = {}
        for event in self.callback_events:
            candidate = candidates.get(event)
            if not candidate:
                continue

            if not callable(candidate):
                raise InvalidCallbackError(
                    f"Callback for '{event}' is not callable: {candidate!r}"
                )
            if not _accepts_one_argument(candidate):
                raise InvalidCallbackError(
                    f"Callback for '{event}' must accept a single string argument"
                )
            accepted[event] = candidate

        self._callbacks.update(accepted)
        return list(accepted)

    def lookup_handler(self, event: str) -> Optional[UriHandler]:
        """Return the handler registered for event, if any."""
        return self._handlers.get(event)

    def lookup_callback(self, event: str) -> Optional[Callable[[str], str]]:
        """Return the callback registered for event, if any."""
        return self._callbacks.get(event)

    def dispatch(self, event: str, path: str, value: str) -> Optional[str]:
        """
        Apply whatever is registered for event, handlers first.

        Args:
            event: Event name, e.g. "title"
            path: Location handed to a handler's parse_uri
            value: Default text for the event

        Returns:
            None if a handler wrote the output itself, otherwise the text to
            emit (the callback's result, or value unchanged)
        """
        handler = self.lookup_handler(event)
        if handler is not None:
            handler.parse_uri(path, value)
            return None

        callback = self.lookup_callback(event)
        if callback is not None:
            return callback(value)

        return value

    def __repr__(self) -> str:
        return (f"ExtensionRegistry(handlers={sorted(self._handlers)}, "
                f"callbacks={sorted(self._callbacks)})")
