"""
Read-only view over a decoded JSON document.

The assembler never touches raw dicts and lists directly; it goes through
TreeView so that "absent" is decided in one place: a missing key or a JSON
null value under a key comes back as ``None``. Arrays are different: only an
out-of-range index is absent, and a null element comes back as a view over
``None`` so that it is reported instead of ending the array early.
"""

import json
from typing import Any, List, Optional


class TreeViewError(ValueError):
    """Raised when a value cannot be coerced to the requested shape."""
    pass


class TreeView:
    """Key- and index-addressable wrapper around an untyped JSON value."""

    __slots__ = ("_data",)

    def __init__(self, data: Any):
        self._data = data

    @classmethod
    def from_json(cls, text: str) -> "TreeView":
        """
        Decode JSON text into a view.

        Args:
            text: JSON document (e.g. Acorn's stdout)

        Returns:
            TreeView over the decoded document

        Raises:
            TreeViewError: If the text is not valid JSON
        """
        try:
            return cls(json.loads(text))
        except json.JSONDecodeError as e:
            raise TreeViewError(f"Invalid JSON document: {e}") from e

    @property
    def data(self) -> Any:
        return self._data

    @property
    def kind(self) -> Optional[str]:
        """The node's ``type`` tag, or None when there is no string tag."""
        tag = self._data.get("type") if isinstance(self._data, dict) else None
        return tag if isinstance(tag, str) else None

    def get(self, key: str) -> Optional["TreeView"]:
        if not isinstance(self._data, dict):
            return None
        value = self._data.get(key)
        if value is None:
            return None
        return TreeView(value)

    def index(self, i: int) -> Optional["TreeView"]:
        """Element ``i`` as a view, or None past the end; a null element is a null view."""
        if not isinstance(self._data, list) or i < 0 or i >= len(self._data):
            return None
        return TreeView(self._data[i])

    def as_str(self) -> str:
        if not isinstance(self._data, str):
            raise TreeViewError(f"Expected string, got {type(self._data).__name__}")
        return self._data

    def as_bool(self) -> bool:
        if not isinstance(self._data, bool):
            raise TreeViewError(f"Expected bool, got {type(self._data).__name__}")
        return self._data

    def as_int(self) -> int:
        # bool is an int subclass but never a valid offset
        if isinstance(self._data, bool) or not isinstance(self._data, int):
            raise TreeViewError(f"Expected int, got {type(self._data).__name__}")
        return self._data

    def as_array(self) -> List["TreeView"]:
        """Return the elements of an array value as views, keeping nulls as null views."""
        if not isinstance(self._data, list):
            raise TreeViewError(f"Expected array, got {type(self._data).__name__}")
        return [TreeView(item) for item in self._data]

    def __repr__(self) -> str:
        return f"TreeView({self._data!r})"
