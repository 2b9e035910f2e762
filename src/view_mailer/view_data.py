"""View data containers shared between mailers, views and results."""

from typing import Any, Optional


class ViewDataDictionary(dict):
    """Dictionary of values passed to a view, plus the view's model."""

    def __init__(self, *args, model: Any = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.model = model

    def copy(self) -> "ViewDataDictionary":
        return ViewDataDictionary(self, model=self.model)

    def __repr__(self) -> str:
        return f"ViewDataDictionary({dict.__repr__(self)}, model={self.model!r})"


class ViewBag:
    """Attribute-style access to a view data dictionary.

    Setting ``bag.title`` stores ``view_data["title"]``; reading a name that
    was never set returns ``None``.
    """

    __slots__ = ("_view_data",)

    def __init__(self, view_data: Optional[ViewDataDictionary] = None):
        object.__setattr__(
            self, "_view_data", view_data if view_data is not None else ViewDataDictionary()
        )

    @property
    def view_data(self) -> ViewDataDictionary:
        return self._view_data

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._view_data.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._view_data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._view_data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._view_data

    def __repr__(self) -> str:
        return f"ViewBag({dict(self._view_data)!r})"
