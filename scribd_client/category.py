"""
Categories: the two-way tree documents are filed under.
"""

from typing import List

from .api import get_api
from .document import Document
from .exceptions import ArgumentError
from .resource import Resource


class Category(Resource):
    """
    A category, with a parent (None at the top level) and children.

    Categories loaded with Category.all(include_children=True) have their
    children preloaded; otherwise every children() call asks the server.
    """

    nested_elements = frozenset(['subcategories'])

    def __init__(self, xml=None, parent=None, **attributes):
        if xml is None:
            raise ArgumentError("Categories cannot be created, only retrieved")
        super().__init__(xml, **attributes)
        self.parent = parent
        self._children = None

        subcategories = xml.find('subcategories')
        if subcategories is not None and len(subcategories):
            self._children = [Category(xml=child, parent=self)
                              for child in subcategories.findall('subcategory')]

    @property
    def id(self):
        return self.read_attribute('id')

    @property
    def children_preloaded(self) -> bool:
        return self._children is not None

    @classmethod
    def all(cls, include_children: bool = False) -> List['Category']:
        """Top-level categories, optionally with their children preloaded."""
        fields = {'with_subcategories': True} if include_children else {}
        return cls.build_collection(get_api().request('docs.getCategories', fields))

    def children(self) -> List['Category']:
        if self._children is not None:
            return list(self._children)
        response = get_api().request('docs.getCategories', {'category_id': self.id})
        return self.build_collection(response, parent=self)

    def browse(self, **options) -> List[Document]:
        """Documents in this category, as shown on a browse page."""
        response = get_api().request('docs.browse', {**options, 'category_id': self.id})
        return Document.build_collection(response)
