"""Sound entity and its load-state machine."""

from typing import Any, Optional

from soundcatalog.core.exceptions import InvalidTransitionError
from soundcatalog.core.models import LoadState, Provenance

# Allowed load-state edges; READY and FAILED are terminal.
_TRANSITIONS = {
    LoadState.NOT_LOADED: (LoadState.LOADING,),
    LoadState.LOADING: (LoadState.READY, LoadState.FAILED),
    LoadState.READY: (),
    LoadState.FAILED: (),
}


class Sound:
    """
    One catalog entry: a playable clip and its metadata.

    The player handle is only ever present while the sound is READY.
    State changes go through mark_loading(), mark_ready() and mark_failed().
    """

    def __init__(
        self,
        id: str,
        name: str,
        locator: str,
        color: str,
        category_id: str,
        provenance: Provenance,
        original_name: str = "",
        load_state: LoadState = LoadState.NOT_LOADED,
    ):
        if load_state not in (LoadState.NOT_LOADED, LoadState.LOADING):
            raise InvalidTransitionError(
                f"A new sound cannot start in state {load_state.value}"
            )
        self._id = id
        self.name = name
        self._locator = locator
        self.color = color
        self.category_id = category_id
        self._provenance = provenance
        self._original_name = original_name or name
        self._load_state = load_state
        self._player: Optional[Any] = None

    @property
    def id(self) -> str:
        """Unique sound id."""
        return self._id

    @property
    def locator(self) -> str:
        """Reference the audio engine loads the clip from."""
        return self._locator

    @property
    def provenance(self) -> Provenance:
        return self._provenance

    @property
    def original_name(self) -> str:
        """Source file name."""
        return self._original_name

    @property
    def load_state(self) -> LoadState:
        return self._load_state

    @property
    def player(self) -> Optional[Any]:
        """Engine buffer handle, None unless READY."""
        return self._player

    @property
    def is_ready(self) -> bool:
        return self._load_state is LoadState.READY

    def mark_loading(self) -> None:
        self._transition(LoadState.LOADING)

    def mark_ready(self, player: Any) -> None:
        """Attach a loaded buffer and move to READY."""
        if player is None:
            raise InvalidTransitionError(f"Sound {self._id} cannot be ready without a player")
        self._transition(LoadState.READY)
        self._player = player

    def mark_failed(self) -> None:
        self._transition(LoadState.FAILED)
        self._player = None

    def _transition(self, target: LoadState) -> None:
        if target not in _TRANSITIONS[self._load_state]:
            raise InvalidTransitionError(
                f"Sound {self._id}: {self._load_state.value} -> {target.value} is not allowed"
            )
        self._load_state = target

    def __repr__(self) -> str:
        return (
            f"Sound(id={self._id!r}, name={self.name!r}, "
            f"category_id={self.category_id!r}, state={self._load_state.value})"
        )
