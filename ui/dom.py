#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document interface
A small in-memory element tree exposing the subset of the browser DOM the
plugin relies on: class-based selectors, inline styles with priorities,
class lists, click listeners and child-list mutation observers.

A live client backend only has to provide objects with the same methods.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

_COMPOUND_RE = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*|\*)?(?P<rest>(?:[.#][\w-]+)*)$")
_PART_RE = re.compile(r"([.#])([\w-]+)")


@dataclass(frozen=True)
class _Compound:
    tag: Optional[str]
    id: Optional[str]
    classes: Tuple[str, ...]

    def matches(self, element: "Element") -> bool:
        if self.tag and self.tag != "*" and element.tag != self.tag:
            return False
        if self.id and element.id != self.id:
            return False
        return all(element.class_list.contains(c) for c in self.classes)


def parse_selector(selector: str) -> List[_Compound]:
    """Parse a descendant-combinator selector such as '.a.b .c'"""
    compounds = []
    for token in selector.split():
        m = _COMPOUND_RE.match(token)
        if not m or not token:
            raise ValueError(f"Unsupported selector: {selector!r}")
        element_id = None
        classes = []
        for kind, name in _PART_RE.findall(m.group("rest")):
            if kind == "#":
                element_id = name
            else:
                classes.append(name)
        compounds.append(_Compound(m.group("tag"), element_id, tuple(classes)))
    if not compounds:
        raise ValueError("Empty selector")
    return compounds


class StyleDeclaration:
    """Inline style: property -> (value, priority)"""

    def __init__(self):
        self._props: Dict[str, Tuple[str, str]] = {}

    def set_property(self, name: str, value: str, priority: str = "") -> None:
        self._props[name] = (str(value), priority)

    def remove_property(self, name: str) -> str:
        value, _ = self._props.pop(name, ("", ""))
        return value

    def get_property_value(self, name: str) -> str:
        return self._props.get(name, ("", ""))[0]

    def get_property_priority(self, name: str) -> str:
        return self._props.get(name, ("", ""))[1]

    def snapshot(self) -> Dict[str, Tuple[str, str]]:
        return dict(self._props)

    @property
    def css_text(self) -> str:
        parts = []
        for name, (value, priority) in self._props.items():
            suffix = f" !{priority}" if priority else ""
            parts.append(f"{name}: {value}{suffix};")
        return " ".join(parts)

    def __contains__(self, name: str) -> bool:
        return name in self._props

    def __len__(self) -> int:
        return len(self._props)


class ClassList:
    """Ordered set of class names"""

    def __init__(self, classes=()):
        self._classes: List[str] = []
        self.add(*classes)

    def add(self, *names: str) -> None:
        for name in names:
            if name not in self._classes:
                self._classes.append(name)

    def remove(self, *names: str) -> None:
        for name in names:
            if name in self._classes:
                self._classes.remove(name)

    def contains(self, name: str) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._classes))

    def __len__(self) -> int:
        return len(self._classes)


@dataclass
class MutationRecord:
    target: "Element"
    added_nodes: List["Element"] = field(default_factory=list)
    removed_nodes: List["Element"] = field(default_factory=list)
    type: str = "childList"


class MutationObserver:
    """Child-list observer over a subtree"""

    def __init__(self, callback: Callable[[List[MutationRecord]], None]):
        self.callback = callback
        self.target: Optional["Element"] = None

    def observe(self, target: "Element") -> None:
        self.disconnect()
        document = target.owner_document
        if document is None:
            raise ValueError("Cannot observe an element outside a document")
        self.target = target
        document._observers.append(self)

    def disconnect(self) -> None:
        if self.target is not None and self.target.owner_document is not None:
            observers = self.target.owner_document._observers
            if self in observers:
                observers.remove(self)
        self.target = None


class Element:
    """One node of the element tree"""

    def __init__(self, tag: str = "div", classes=(), id: Optional[str] = None, text: str = ""):
        self.tag = tag
        self.id = id
        self.text = text
        self.class_list = ClassList(classes)
        self.style = StyleDeclaration()
        self.children: List["Element"] = []
        self.parent: Optional["Element"] = None
        self.owner_document: Optional["Document"] = None
        self._listeners: Dict[str, List[Callable[["Element"], None]]] = {}

    def __repr__(self) -> str:
        classes = "".join(f".{c}" for c in self.class_list)
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag}{ident}{classes}>"

    # ---------------------------------------------------------------- tree

    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        child._adopt(self.owner_document)
        self._notify(MutationRecord(self, added_nodes=[child]))
        return child

    def remove_child(self, child: "Element") -> "Element":
        self.children.remove(child)
        child.parent = None
        self._notify(MutationRecord(self, removed_nodes=[child]))
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)

    def _adopt(self, document: Optional["Document"]) -> None:
        self.owner_document = document
        for child in self.children:
            child._adopt(document)

    def _notify(self, record: MutationRecord) -> None:
        if self.owner_document is not None:
            self.owner_document._dispatch_mutation(record)

    def contains(self, other: Optional["Element"]) -> bool:
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    @property
    def is_connected(self) -> bool:
        document = self.owner_document
        return document is not None and document.document_element.contains(self)

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    # ----------------------------------------------------------- selectors

    def matches(self, selector: str) -> bool:
        return _matches_chain(self, parse_selector(selector))

    def query_selector(self, selector: str) -> Optional["Element"]:
        compounds = parse_selector(selector)
        for node in self.iter_descendants():
            if _matches_chain(node, compounds):
                return node
        return None

    def query_selector_all(self, selector: str) -> List["Element"]:
        compounds = parse_selector(selector)
        return [node for node in self.iter_descendants() if _matches_chain(node, compounds)]

    # -------------------------------------------------------------- events

    def add_event_listener(self, event_type: str, listener: Callable[["Element"], None]) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def dispatch_event(self, event_type: str) -> None:
        for listener in list(self._listeners.get(event_type, ())):
            listener(self)


def _matches_chain(element: Element, compounds: List[_Compound]) -> bool:
    if not compounds[-1].matches(element):
        return False
    node = element.parent
    for compound in reversed(compounds[:-1]):
        while node is not None and not compound.matches(node):
            node = node.parent
        if node is None:
            return False
        node = node.parent
    return True


class Document:
    """Root of an element tree"""

    def __init__(self):
        self._observers: List[MutationObserver] = []
        self.document_element = Element("html")
        self.document_element.owner_document = self
        self.head = self.document_element.append_child(Element("head"))
        self.body = self.document_element.append_child(Element("body"))

    def create_element(self, tag: str = "div", classes=(), id: Optional[str] = None, text: str = "") -> Element:
        element = Element(tag, classes, id, text)
        element.owner_document = self
        return element

    def query_selector(self, selector: str) -> Optional[Element]:
        if self.document_element.matches(selector):
            return self.document_element
        return self.document_element.query_selector(selector)

    def query_selector_all(self, selector: str) -> List[Element]:
        return self.document_element.query_selector_all(selector)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self.query_selector(f"#{element_id}")

    def _dispatch_mutation(self, record: MutationRecord) -> None:
        for observer in list(self._observers):
            if observer.target is not None and observer.target.contains(record.target):
                observer.callback([record])
