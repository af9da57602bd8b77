"""Hidden-title bookkeeping for the film filter panel."""

from __future__ import annotations

from typing import Callable, Iterable, Set

VisibilityPredicate = Callable[[str], bool]


def show_all(title: str) -> bool:
    return True


class VisibilityFilter:
    """
    Set of titles the user has hidden.

    The scheduling engine never sees this object directly; it receives
    ``is_visible`` as a plain predicate.
    """

    def __init__(self, hidden: Iterable[str] | None = None):
        self.hidden: Set[str] = set(hidden or ())

    def is_visible(self, title: str) -> bool:
        return title not in self.hidden

    def toggle(self, title: str) -> None:
        if title in self.hidden:
            self.hidden.discard(title)
        else:
            self.hidden.add(title)

    def toggle_all(self, titles: Iterable[str]) -> None:
        """Show/hide-all switch over the day's titles.

        When every title is visible, or every title is hidden, all of them
        flip. With a mixed selection, the visible ones get hidden.
        """
        titles = list(titles)
        visible = [t for t in titles if self.is_visible(t)]
        if len(visible) == len(titles) or not visible:
            for t in titles:
                self.toggle(t)
        else:
            for t in visible:
                self.toggle(t)

    def __repr__(self) -> str:
        return f"<VisibilityFilter(hidden={sorted(self.hidden)})>"
