"""Persisted bot state with an injectable backend and locked mutations.

WHY: Every submission rewrites the whole state document. Handlers may run
on different worker threads, so a read-modify-write must not interleave
with another one, and the reconciliation logic must be testable without
touching the filesystem.

HOW: Three components work together:
  StateBackend   — protocol with load() and save(state)
  JsonFileBackend / MemoryBackend — concrete backends
  Store          — in-memory state loaded once at startup, mutated inside
                   a threading.Lock, flushed to the backend after each change

RULES:
- State is a plain dict with "users", "plans" and "timeoff" mappings
- A load failure is logged and yields an empty state (prior data is lost)
- A save failure is logged and swallowed; memory stays ahead of disk
- Read helpers return deep copies, never the live dicts
- Records are never deleted
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Protocol, Union

logger = logging.getLogger(__name__)

State = Dict[str, Any]

STATE_SECTIONS = ("users", "plans", "timeoff")


def empty_state() -> State:
    """Return a fresh state document with every section present."""
    return {section: {} for section in STATE_SECTIONS}


def normalize_state(raw: Any) -> State:
    """Repair a loaded document so every level the bot writes to is a dict.

    RULES:
    - Missing or non-dict sections become empty dicts
    - Non-dict per-user entries are dropped
    - Under "plans" and "timeoff", non-dict week/date records are dropped
    - Every drop is logged as a warning
    """
    state = raw if isinstance(raw, dict) else {}
    for section in STATE_SECTIONS:
        if not isinstance(state.get(section), dict):
            if section in state:
                logger.warning("Resetting malformed %r section in state", section)
            state[section] = {}

        entries = state[section]
        for user_id in list(entries):
            if not isinstance(entries[user_id], dict):
                logger.warning("Dropping malformed %s entry for %s", section, user_id)
                del entries[user_id]
                continue
            if section == "users":
                continue
            records = entries[user_id]
            for key in list(records):
                if not isinstance(records[key], dict):
                    logger.warning(
                        "Dropping malformed %s record %s for %s", section, key, user_id
                    )
                    del records[key]
    return state


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class StateBackend(Protocol):
    """Persistence interface used by Store."""

    def load(self) -> State:
        ...

    def save(self, state: State) -> None:
        ...


class JsonFileBackend:
    """Stores the whole state as one pretty-printed JSON file.

    RULES:
    - load() never raises; missing or corrupt files give an empty state
    - save() overwrites the file in place and raises OSError/TypeError on
      failure (Store decides what to do with that)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> State:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return normalize_state(json.load(fh))
        except FileNotFoundError:
            logger.info("State file %s not found, starting empty", self.path)
        except (OSError, ValueError):
            logger.exception("Failed to read or parse state file %s", self.path)
        return empty_state()

    def save(self, state: State) -> None:
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(state, fh, indent=2, ensure_ascii=False)


class MemoryBackend:
    """Keeps a serialized copy in memory. Used by tests and dry runs."""

    def __init__(self, initial: Optional[State] = None) -> None:
        self._saved = json.dumps(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> State:
        if self._saved is None:
            return empty_state()
        return normalize_state(json.loads(self._saved))

    def save(self, state: State) -> None:
        self._saved = json.dumps(state)
        self.save_count += 1


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class Mutation:
    """Handle yielded by Store.mutate().

    ``state`` is the live document; ``persisted`` is set once the region
    exits and the backend write was attempted.
    """

    def __init__(self, state: State) -> None:
        self.state = state
        self.persisted = False


class Store:
    """Process-wide bot state mirrored to a backend.

    WHY: The state is small and read far more often than written, so it
    lives in memory and the backend only sees full rewrites.

    HOW: The constructor loads once. mutate() yields the live state under
    the lock and flushes when the block exits without an exception.
    """

    def __init__(self, backend: StateBackend) -> None:
        self._backend = backend
        self._lock = threading.Lock()
        self._state = normalize_state(backend.load())

    @contextmanager
    def mutate(self) -> Iterator[Mutation]:
        """Exclusive read-modify-write region; flushes on a clean exit."""
        with self._lock:
            mutation = Mutation(self._state)
            yield mutation
            mutation.persisted = self._flush_locked()

    def _flush_locked(self) -> bool:
        try:
            self._backend.save(self._state)
        except Exception:
            logger.exception("Failed to persist state")
            return False
        return True

    # -- reads ------------------------------------------------------------

    def snapshot(self) -> State:
        with self._lock:
            return copy.deepcopy(self._state)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            user = self._state["users"].get(user_id)
            return copy.deepcopy(user) if user is not None else None

    def plans_for(self, user_id: str) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._state["plans"].get(user_id, {}))

    def timeoff_for(self, user_id: str) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._state["timeoff"].get(user_id, {}))


# ---------------------------------------------------------------------------
# Manager map
# ---------------------------------------------------------------------------


def load_manager_map(path: Union[str, Path]) -> Dict[str, str]:
    """Load the static user -> manager mapping.

    RULES:
    - Read once at startup, never written
    - Missing or unparseable file is logged and gives an empty map
    - Non-string entries are dropped
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError:
        logger.warning("Managers file %s not found", path)
        return {}
    except (OSError, ValueError):
        logger.exception("Failed to read or parse managers file %s", path)
        return {}

    if not isinstance(raw, dict):
        logger.warning("Managers file %s is not a JSON object", path)
        return {}

    return {
        str(user): str(manager)
        for user, manager in raw.items()
        if isinstance(manager, str)
    }
