"""Action sets exposed on display items."""

from .config import ACTION_MODE_MARK_READ
from .models import MinifluxEntry

MARK_AS_READ = "mark_as_read"
MARK_AS_UNREAD = "mark_as_unread"
STAR = "star"
UNSTAR = "unstar"

# Each action is replaced by its counterpart once it succeeds
_COUNTERPARTS = {
    MARK_AS_READ: MARK_AS_UNREAD,
    MARK_AS_UNREAD: MARK_AS_READ,
    STAR: UNSTAR,
    UNSTAR: STAR,
}

READ_STATE_ACTIONS = {MARK_AS_READ: "read", MARK_AS_UNREAD: "unread"}
BOOKMARK_ACTIONS = (STAR, UNSTAR)


class ToggleActionSet:
    """Read/unread and star/unstar actions reflecting the remote state."""

    mode = "toggle"
    supported = (MARK_AS_READ, MARK_AS_UNREAD, STAR, UNSTAR)

    def supports(self, action_id: str) -> bool:
        return action_id in self.supported

    def actions_for(self, entry: MinifluxEntry) -> dict[str, str]:
        value = str(entry.id)
        actions = {}
        if entry.is_unread:
            actions[MARK_AS_READ] = value
        else:
            actions[MARK_AS_UNREAD] = value
        if entry.starred:
            actions[UNSTAR] = value
        else:
            actions[STAR] = value
        return actions

    def apply(self, actions: dict[str, str], action_id: str) -> dict[str, str]:
        """Return the action mapping after ``action_id`` succeeded.

        Only the toggled pair changes; the independent pair is kept as is.
        """
        if action_id not in actions:
            return dict(actions)
        updated = {}
        for name, value in actions.items():
            if name == action_id:
                updated[_COUNTERPARTS[name]] = value
            else:
                updated[name] = value
        return updated


class SingleActionSet:
    """Only a mark-as-read action, shown on unread entries."""

    mode = "mark_read"
    supported = (MARK_AS_READ,)

    def supports(self, action_id: str) -> bool:
        return action_id in self.supported

    def actions_for(self, entry: MinifluxEntry) -> dict[str, str]:
        if entry.is_unread:
            return {MARK_AS_READ: str(entry.id)}
        return {}

    def apply(self, actions: dict[str, str], action_id: str) -> dict[str, str]:
        return {name: value for name, value in actions.items() if name != action_id}


def build_action_set(action_mode: str) -> ToggleActionSet | SingleActionSet:
    if action_mode == ACTION_MODE_MARK_READ:
        return SingleActionSet()
    return ToggleActionSet()
