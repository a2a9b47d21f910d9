# action.py
from typing import Any, Callable


class Action:
    """
    A unit of undoable work.

    Parameters:
    - forward (callable): performs the change.
    - reverse (callable): restores the state ``forward`` changed.
    - description (str): label shown next to Undo/Redo, may be empty.
    """

    def __init__(
        self,
        forward: Callable[[], Any],
        reverse: Callable[[], Any],
        description: str = "",
    ):
        self._forward = forward
        self._reverse = reverse
        self.description = description

    @property
    def forward(self) -> Callable[[], Any]:
        return self._forward

    @property
    def reverse(self) -> Callable[[], Any]:
        return self._reverse

    def __eq__(self, other: Any):
        if not isinstance(other, Action):
            return False
        return (
            self._forward == other._forward
            and self._reverse == other._reverse
            and self.description == other.description
        )

    def __repr__(self) -> str:
        return f"Action(description={self.description!r})"
