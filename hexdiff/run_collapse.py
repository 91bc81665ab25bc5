from collections.abc import Sequence
from enum import Enum

from hexdiff.classify import all_equal
from hexdiff.highlight import HighlightRenderer


class Action(Enum):
    """What to print for one chunk pair."""
    DIFF = "diff"
    SAME = "same"
    ELLIPSIS = "ellipsis"
    SUPPRESS = "suppress"


class RunCollapser:
    """
    Collapses runs of identical chunk pairs.

    The first chunk pair of a run is printed in full, the second becomes a single
    ellipsis line, and the rest of the run is silent. With show_all every equal
    pair is printed and no ellipsis appears. Any differing pair is printed in diff
    mode and resets the run.
    """

    def __init__(self, renderer: HighlightRenderer | None = None, show_all: bool = False) -> None:
        self.renderer = renderer
        self.show_all = show_all
        self.run_length = 0

    @property
    def fresh(self) -> bool:
        return self.run_length == 0

    def decide(self, equal: bool) -> Action:
        """Advances the run state for one chunk pair and returns the action to take."""
        if not equal:
            self.run_length = 0
            return Action.DIFF

        run_length = self.run_length
        self.run_length += 1
        if run_length == 0 or self.show_all:
            return Action.SAME
        if run_length == 1:
            return Action.ELLIPSIS
        return Action.SUPPRESS

    def feed(self, chunk1: bytes, chunk2: bytes, classification: Sequence[bool],
             offset1: int, offset2: int) -> Action:
        """Decides the action for a classified chunk pair and renders it."""
        action = self.decide(all_equal(classification))
        renderer = self.renderer
        if renderer is None:
            return action

        if action is Action.DIFF:
            renderer.render_diff(chunk1, chunk2, classification, offset1, offset2)
        elif action is Action.SAME:
            renderer.render_same(chunk1, chunk2, offset1, offset2)
        elif action is Action.ELLIPSIS:
            renderer.render_ellipsis()
        return action
