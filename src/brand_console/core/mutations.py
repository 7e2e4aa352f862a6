"""
Optimistic local updates with rollback, and the hidden-section state machine.
"""

import copy
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, List, MutableMapping

logger = logging.getLogger(__name__)

_MISSING = object()


class MutationState(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class OptimisticMutation:
    """
    Apply a change to a local store before the server confirms it.

    The value under ``key`` is snapshotted when the mutation is created. If
    ``dispatch`` fails, the snapshot is restored and the error re-raised.
    """

    def __init__(self, store: MutableMapping[str, Any], key: str,
                 apply: Callable[[Any], Any],
                 dispatch: Callable[[], Awaitable[Any]]):
        self.store = store
        self.key = key
        self.apply = apply
        self.dispatch = dispatch
        self.state = MutationState.PENDING
        self._snapshot = copy.deepcopy(store[key]) if key in store else _MISSING

    def _restore(self) -> None:
        if self._snapshot is _MISSING:
            self.store.pop(self.key, None)
        else:
            self.store[self.key] = self._snapshot

    async def run(self) -> Any:
        if self.state is not MutationState.PENDING:
            raise RuntimeError(f"Mutation for '{self.key}' already {self.state.value}")

        current = self.store.get(self.key)
        self.store[self.key] = self.apply(copy.deepcopy(current))

        try:
            result = await self.dispatch()
        except Exception as e:
            self._restore()
            self.state = MutationState.ROLLED_BACK
            logger.error(f"Rolled back optimistic update of '{self.key}': {e}")
            raise

        self.state = MutationState.COMMITTED
        return result


class SectionVisibility(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class HiddenSectionsController:
    """
    Per-client record of which sections are hidden.

    Transitions are HIDDEN <-> VISIBLE; each is applied locally first and
    persisted through ``api``. Re-applying the current state is a no-op.
    """

    STORE_KEY = 'hidden'

    def __init__(self, client_id: int, api: Any):
        self.client_id = client_id
        self.api = api
        self._store = {self.STORE_KEY: set()}

    @property
    def hidden(self) -> frozenset:
        return frozenset(self._store[self.STORE_KEY])

    async def load(self) -> frozenset:
        sections = await self.api.list_hidden_sections(self.client_id)
        self._store[self.STORE_KEY] = {section.section_type for section in sections}
        logger.debug(f"Loaded {len(sections)} hidden sections for client {self.client_id}")
        return self.hidden

    def is_hidden(self, section_type: str) -> bool:
        return section_type in self._store[self.STORE_KEY]

    def state_of(self, section_type: str) -> SectionVisibility:
        return SectionVisibility.HIDDEN if self.is_hidden(section_type) else SectionVisibility.VISIBLE

    def visible_sections(self, all_types: Iterable[str]) -> List[str]:
        return [section for section in all_types if not self.is_hidden(section)]

    async def hide(self, section_type: str) -> SectionVisibility:
        if self.is_hidden(section_type):
            return SectionVisibility.HIDDEN

        mutation = OptimisticMutation(
            self._store, self.STORE_KEY,
            apply=lambda hidden: hidden | {section_type},
            dispatch=lambda: self.api.add_hidden_section(self.client_id, section_type),
        )
        await mutation.run()
        return SectionVisibility.HIDDEN

    async def show(self, section_type: str) -> SectionVisibility:
        if not self.is_hidden(section_type):
            return SectionVisibility.VISIBLE

        mutation = OptimisticMutation(
            self._store, self.STORE_KEY,
            apply=lambda hidden: hidden - {section_type},
            dispatch=lambda: self.api.remove_hidden_section(self.client_id, section_type),
        )
        await mutation.run()
        return SectionVisibility.VISIBLE

    async def toggle(self, section_type: str) -> SectionVisibility:
        if self.is_hidden(section_type):
            return await self.show(section_type)
        return await self.hide(section_type)
