"""
Base class for remote objects.

A resource keeps its remote attributes in a plain dictionary. The set of
valid attribute names is defined by the server, so any name can be read
(unknown names read as None) or written locally; the server ignores the
ones it doesn't recognize on the next save.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List

from .exceptions import ArgumentError


class Symbol(str):
    """Enumerated token from a type="symbol" response element."""

    __slots__ = ()

    def __repr__(self):
        return f"Symbol({str.__repr__(self)})"


def _check_name(name) -> str:
    if not isinstance(name, str) or not name:
        raise ArgumentError(f"Attribute names must be non-empty strings, got {name!r}")
    return name


def element_text(element: ET.Element) -> str:
    """Stripped text of an element, falling back to its full literal content."""
    text = (element.text or '').strip()
    if not text:
        text = ''.join(element.itertext()).strip()
    return text


def child_text(element: ET.Element, path: str) -> str:
    """Text of the first element matching path, or "" if there is none."""
    child = element.find(path)
    return element_text(child) if child is not None else ''


def typed_value(element: ET.Element) -> Any:
    """Convert a response element to int, float, Symbol or str per its type attribute."""
    text = element_text(element)
    kind = element.get('type')
    if kind in ('integer', 'float') and not text:
        return None
    try:
        if kind == 'integer':
            return int(text)
        if kind == 'float':
            return float(text)
    except ValueError:
        return text
    if kind == 'symbol':
        return Symbol(text)
    return text


class Resource:
    """
    A local proxy for a server-side entity.

    Built from keyword attributes, a resource is neither saved nor
    created. Built from a response fragment (xml=...), it is both. The
    only transition is a successful save, which sets both flags at once.
    """

    # child tags of a response fragment that aren't plain attributes
    nested_elements = frozenset()

    def __init__(self, xml: ET.Element = None, **attributes):
        self._saved = False
        self._created = False
        self._attributes = dict(attributes)

        if xml is not None:
            self._load_attributes(xml)
            self._mark_saved()

    @property
    def saved(self) -> bool:
        """True when local attributes match the last known remote state."""
        return self._saved

    @property
    def created(self) -> bool:
        """True when a remote counterpart exists."""
        return self._created

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    @property
    def scribd_id(self):
        return self._attributes.get('id')

    @classmethod
    def build_collection(cls, response: ET.Element, **options) -> List['Resource']:
        """
        Build one resource per result of a multi-result response.

        Args:
            response: The rsp root element
            **options: Extra constructor arguments shared by every result (e.g. owner)
        """
        results = response.findall('result_set/result') or response.findall('resultset/result')
        return [cls(xml=result, **options) for result in results]

    @classmethod
    def create(cls, **attributes) -> 'Resource':
        """Instantiate with the given attributes, save and return the instance."""
        obj = cls(**attributes)
        obj.save()
        return obj

    @classmethod
    def find(cls, *args, **options):
        raise NotImplementedError(f"Cannot find {cls.__name__} objects")

    def save(self):
        raise NotImplementedError(f"Cannot save {type(self).__name__} objects")

    def destroy(self):
        raise NotImplementedError(f"Cannot destroy {type(self).__name__} objects")

    def read_attribute(self, name: str) -> Any:
        return self._attributes.get(_check_name(name))

    def write_attribute(self, name: str, value: Any):
        self._attributes[_check_name(name)] = value

    def read_attributes(self, names) -> Dict[str, Any]:
        """Return a name -> value dict for the given attribute names."""
        if isinstance(names, (str, bytes)) or not isinstance(names, Iterable):
            raise ArgumentError("Attributes must be listed in an iterable of names")
        names = [_check_name(name) for name in names]
        return {name: self._attributes.get(name) for name in names}

    def write_attributes(self, values: Mapping[str, Any]):
        """Update several attributes from a name -> value mapping."""
        if not isinstance(values, Mapping):
            raise ArgumentError("Values must be given as a mapping of attribute names")
        for name in values:
            _check_name(name)
        self._attributes.update(values)

    def __getitem__(self, name):
        return self.read_attribute(name)

    def __setitem__(self, name, value):
        self.write_attribute(name, value)

    def __contains__(self, name):
        return name in self._attributes

    def _mark_saved(self):
        self._saved = self._created = True

    def _load_attributes(self, xml: ET.Element):
        """Copy the typed child elements of a response fragment into the attributes."""
        for child in xml:
            if not isinstance(child.tag, str) or child.tag in self.nested_elements:
                continue
            self._attributes[child.tag] = typed_value(child)

    def __repr__(self):
        attrs = ', '.join(f"{name}={value!r}" for name, value in self._attributes.items()
                          if value is not None)
        return f"<{type(self).__name__} {attrs}>"
