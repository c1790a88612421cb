"""Node events for DirStreamLib.

A NodeEvent is one decoded unit of a directory listing stream: an element
start, an element end, or a run of character data. Events are immutable and
short-lived; the core reads each one exactly once.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional

from xml.sax.xmlreader import AttributesImpl


class EventKind(Enum):
    """What a NodeEvent represents."""
    START = "start"
    END = "end"
    TEXT = "text"


class Attribute(NamedTuple):
    """A single attribute of a node, namespace-less."""
    name: str
    value: str
    prefix: str = ""
    local_name: str = ""
    namespace_uri: str = ""


def encode_attributes(attrs: Mapping[str, Any]) -> Dict[str, Attribute]:
    """Build a structured attribute map from name/value pairs.

    Keys are sorted before encoding so the result does not depend on the
    caller's mapping order.

    Args:
        attrs: Mapping of attribute name to scalar value

    Returns:
        Dict of attribute name to Attribute
    """
    encoded: Dict[str, Attribute] = {}
    for name in sorted(attrs):
        encoded[name] = Attribute(
            name=name,
            value=str(attrs[name]),
            prefix="",
            local_name=name,
            namespace_uri="",
        )
    return encoded


@dataclass(frozen=True)
class NodeEvent:
    """One structural or textual unit of the input stream.

    Attributes:
        kind: START, END or TEXT
        name: Tag name (empty for TEXT events)
        attributes: Attribute name to Attribute, sorted by name
        text: Character data for TEXT events
    """

    kind: EventKind
    name: str = ""
    attributes: Mapping[str, Attribute] = field(default_factory=dict)
    text: Optional[str] = None

    @classmethod
    def start(cls, tag: str, **attrs: Any) -> "NodeEvent":
        """Create an element start event."""
        return cls(EventKind.START, tag, encode_attributes(attrs))

    @classmethod
    def end(cls, name: str) -> "NodeEvent":
        """Create an element end event."""
        return cls(EventKind.END, name)

    @classmethod
    def characters(cls, text: str) -> "NodeEvent":
        """Create a character data event."""
        return cls(EventKind.TEXT, text=text)

    @classmethod
    def from_sax(cls, name: str, attrs: Any = None) -> "NodeEvent":
        """Create a start event from SAX ``startElement`` arguments.

        Args:
            name: Element name
            attrs: xml.sax Attributes object, a plain mapping, or None
        """
        if attrs is None:
            return cls(EventKind.START, name)
        if hasattr(attrs, "getNames"):
            values = {key: attrs.getValue(key) for key in attrs.getNames()}
        else:
            values = dict(attrs)
        return cls(EventKind.START, name, encode_attributes(values))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of an attribute, or default."""
        attribute = self.attributes.get(name)
        if attribute is None:
            return default
        return attribute.value

    @property
    def node_name(self) -> Optional[str]:
        """Value of the ``name`` attribute (the path segment)."""
        return self.get("name")

    def sax_attributes(self) -> AttributesImpl:
        """Attributes in the shape SAX content handlers expect."""
        return AttributesImpl({name: attr.value for name, attr in self.attributes.items()})
