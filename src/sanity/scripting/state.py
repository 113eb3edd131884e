"""Per-build script state."""

from dataclasses import dataclass, field
from typing import Any

from sanity.template import RenderJob


@dataclass
class BuildState:
    """Effects accumulated by build scripts during one build."""

    render_queue: list[RenderJob] = field(default_factory=list)
    injected: dict[str, Any] = field(default_factory=dict)


class StateHandle:
    """Borrowed access to a BuildState.

    Host functions reach the state only through a handle. The build owns
    the state and releases the handle when it ends, after which every
    access raises.
    """

    def __init__(self, state: BuildState):
        self._state: BuildState | None = state

    def get(self) -> BuildState:
        """The live state.

        Raises:
            RuntimeError: If the handle was released
        """
        if self._state is None:
            raise RuntimeError("Build state is no longer available; the build has ended")
        return self._state

    def release(self) -> None:
        self._state = None

    @property
    def released(self) -> bool:
        return self._state is None
