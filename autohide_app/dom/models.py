"""
In-memory host document model.

A small DOM the engine runs against: elements with attributes, classes,
inline style, bounding geometry and a hover flag; capture/bubble event
dispatch; and synchronous mutation observation. Hosts that render a real
page adapt it onto these types.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from .selectors import compile_selector

Listener = Callable[["Event"], Any]


@dataclass(frozen=True)
class Rect:
    """Bounding client rectangle."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Event:
    """DOM event passed to listeners."""
    type: str
    bubbles: bool = False
    target: Optional["Element"] = None
    current_target: Optional["EventTarget"] = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass(frozen=True)
class MutationRecord:
    """A single observed change to the tree."""
    type: str                                        # "childList" or "attributes"
    target: "Element"
    added_nodes: tuple["Element", ...] = ()
    removed_nodes: tuple["Element", ...] = ()
    attribute_name: Optional[str] = None


class EventTarget:
    """Listener registry with DOM de-duplication semantics."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}

    def add_event_listener(self, event_type: str, listener: Listener, capture: bool = False) -> None:
        entries = self._listeners.setdefault(event_type, [])
        if (listener, capture) not in entries:
            entries.append((listener, capture))

    def remove_event_listener(self, event_type: str, listener: Listener, capture: bool = False) -> None:
        entries = self._listeners.get(event_type, [])
        if (listener, capture) in entries:
            entries.remove((listener, capture))

    def listener_count(self, event_type: Optional[str] = None) -> int:
        """Number of registered listeners, optionally for one event type."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(entries) for entries in self._listeners.values())

    def dispatch_event(self, event: Event) -> bool:
        event.target = self  # type: ignore[assignment]
        self._invoke(event, None)
        return True

    def _invoke(self, event: Event, capture: Optional[bool]) -> None:
        event.current_target = self
        for listener, is_capture in list(self._listeners.get(event.type, [])):
            if event.propagation_stopped:
                return
            if capture is None or is_capture == capture:
                listener(event)


class Element(EventTarget):
    """Element node."""

    def __init__(
        self,
        tag_name: str,
        attributes: Optional[dict[str, str]] = None,
        classes: Optional[list[str]] = None,
        rect: Optional[Rect] = None,
        style: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__()
        self.tag_name = tag_name.lower()
        self._attributes: dict[str, str] = {}
        self._classes: list[str] = []
        self.style: dict[str, str] = dict(style or {})
        self._rect = rect or Rect()
        self.hovered = False
        self.children: list["Element"] = []
        self.parent: Optional["Element"] = None
        self._owner: Optional["Document"] = None     # set only on a document root

        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)
        for name in classes or []:
            if name not in self._classes:
                self._classes.append(name)

    def __repr__(self) -> str:
        classes = "." + ".".join(self._classes) if self._classes else ""
        return f"<Element {self.tag_name}{classes}>"

    # Attributes and classes

    def get_attribute(self, name: str) -> Optional[str]:
        if name == "class":
            return " ".join(self._classes) if self._classes else None
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self._classes = [part for part in value.split() if part]
        else:
            self._attributes[name] = value
        self._record_attribute_change(name)

    def remove_attribute(self, name: str) -> None:
        if name == "class":
            self._classes = []
        else:
            self._attributes.pop(name, None)
        self._record_attribute_change(name)

    @property
    def id(self) -> Optional[str]:
        return self._attributes.get("id")

    @property
    def class_names(self) -> tuple[str, ...]:
        return tuple(self._classes)

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def add_class(self, *names: str) -> None:
        changed = False
        for name in names:
            if name not in self._classes:
                self._classes.append(name)
                changed = True
        if changed:
            self._record_attribute_change("class")

    def remove_class(self, *names: str) -> None:
        before = len(self._classes)
        self._classes = [name for name in self._classes if name not in names]
        if len(self._classes) != before:
            self._record_attribute_change("class")

    # Geometry

    def get_bounding_client_rect(self) -> Rect:
        return self._rect

    def set_rect(self, width: float, height: float, x: float = 0.0, y: float = 0.0) -> None:
        self._rect = Rect(x=x, y=y, width=width, height=height)

    # Tree

    @property
    def owner_document(self) -> Optional["Document"]:
        root = self
        while root.parent is not None:
            root = root.parent
        return root._owner

    @property
    def is_connected(self) -> bool:
        return self.owner_document is not None

    def contains(self, other: "Element") -> bool:
        node: Optional[Element] = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def append_child(self, child: "Element") -> "Element":
        if child.contains(self):
            raise ValueError("Cannot append an ancestor as a child")
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        self._record(MutationRecord(type="childList", target=self, added_nodes=(child,)))
        return child

    def remove(self) -> None:
        parent = self.parent
        if parent is None:
            return
        parent.children.remove(self)
        self.parent = None
        parent._record(MutationRecord(type="childList", target=parent, removed_nodes=(self,)))

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    # Selector lookups

    def matches(self, selector: str) -> bool:
        return compile_selector(selector).matches(self)

    def closest(self, selector: str) -> Optional["Element"]:
        compiled = compile_selector(selector)
        node: Optional[Element] = self
        while node is not None:
            if compiled.matches(node):
                return node
            node = node.parent
        return None

    def query_selector_all(self, selector: str) -> list["Element"]:
        compiled = compile_selector(selector)
        return [node for node in self.iter_descendants() if compiled.matches(node)]

    def query_selector(self, selector: str) -> Optional["Element"]:
        compiled = compile_selector(selector)
        for node in self.iter_descendants():
            if compiled.matches(node):
                return node
        return None

    # Events

    def dispatch_event(self, event: Event) -> bool:
        event.target = self

        path: list[EventTarget] = []
        node = self.parent
        while node is not None:
            path.append(node)
            node = node.parent
        path.reverse()
        document = self.owner_document
        if document is not None:
            path.insert(0, document)

        for target in path:
            if event.propagation_stopped:
                return True
            target._invoke(event, True)

        if not event.propagation_stopped:
            self._invoke(event, None)

        if event.bubbles:
            for target in reversed(path):
                if event.propagation_stopped:
                    break
                target._invoke(event, False)
        return True

    def click(self) -> None:
        """Dispatch a single bubbling click activation."""
        self.dispatch_event(Event(type="click", bubbles=True))

    # Mutation bookkeeping

    def _record_attribute_change(self, name: str) -> None:
        self._record(MutationRecord(type="attributes", target=self, attribute_name=name))

    def _record(self, record: MutationRecord) -> None:
        document = self.owner_document
        if document is not None:
            document._record_mutation(record)


class Document(EventTarget):
    """Document with an ``html`` root holding ``head`` and ``body``."""

    def __init__(self) -> None:
        super().__init__()
        self._observers: list["MutationObserver"] = []
        self.document_element = Element("html")
        self.document_element._owner = self
        self.head = self.document_element.append_child(Element("head"))
        self.body = self.document_element.append_child(Element("body"))

    def create_element(self, tag_name: str, **kwargs: Any) -> Element:
        return Element(tag_name, **kwargs)

    def query_selector_all(self, selector: str) -> list[Element]:
        compiled = compile_selector(selector)
        nodes = [self.document_element, *self.document_element.iter_descendants()]
        return [node for node in nodes if compiled.matches(node)]

    def query_selector(self, selector: str) -> Optional[Element]:
        found = self.query_selector_all(selector)
        return found[0] if found else None

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for node in self.document_element.iter_descendants():
            if node.id == element_id:
                return node
        return None

    def _record_mutation(self, record: MutationRecord) -> None:
        for observer in list(self._observers):
            observer._notify(record)


class Window(EventTarget):
    """Top-level browsing context: owns the document, emits resize and unload."""

    def __init__(self, document: Optional[Document] = None,
                 inner_width: int = 1280, inner_height: int = 800) -> None:
        super().__init__()
        self.document = document or Document()
        self.inner_width = inner_width
        self.inner_height = inner_height

    def resize(self, width: int, height: int) -> None:
        self.inner_width = width
        self.inner_height = height
        self.dispatch_event(Event(type="resize"))

    def unload(self) -> None:
        """Emit the page teardown signal."""
        self.dispatch_event(Event(type="beforeunload"))


@dataclass(frozen=True)
class _ObservationOptions:
    target: Element
    child_list: bool
    attributes: bool
    subtree: bool


class MutationObserver:
    """
    Observer notified of tree changes.

    Records are delivered synchronously, one per call, while the observed
    target is attached to a document.
    """

    def __init__(self, callback: Callable[[list[MutationRecord], "MutationObserver"], Any]) -> None:
        self._callback = callback
        self._options: list[_ObservationOptions] = []
        self._documents: list[Document] = []

    def observe(self, target: Element, child_list: bool = True,
                attributes: bool = False, subtree: bool = False) -> None:
        document = target.owner_document
        if document is None:
            raise ValueError("Observed element is not attached to a document")

        self._options = [option for option in self._options if option.target is not target]
        self._options.append(_ObservationOptions(
            target=target, child_list=child_list, attributes=attributes, subtree=subtree
        ))
        if self not in document._observers:
            document._observers.append(self)
            self._documents.append(document)

    def disconnect(self) -> None:
        for document in self._documents:
            if self in document._observers:
                document._observers.remove(self)
        self._documents = []
        self._options = []

    def _notify(self, record: MutationRecord) -> None:
        for option in self._options:
            if record.type == "childList" and not option.child_list:
                continue
            if record.type == "attributes" and not option.attributes:
                continue
            if record.target is option.target or (option.subtree and option.target.contains(record.target)):
                self._callback([record], self)
                return
