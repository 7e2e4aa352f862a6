"""
Tests for optimistic mutations and hidden-section visibility.
"""

import pytest

from brand_console.core.asset_data import HiddenSection
from brand_console.core.exceptions import ApiError
from brand_console.core.mutations import (
    HiddenSectionsController,
    MutationState,
    OptimisticMutation,
    SectionVisibility,
)


class FakeSectionsApi:
    """In-memory stand-in for the hidden-sections endpoints."""

    def __init__(self, hidden=(), fail=False):
        self.hidden = list(hidden)
        self.fail = fail
        self.calls = []

    async def list_hidden_sections(self, client_id):
        return [HiddenSection(client_id=client_id, section_type=s) for s in self.hidden]

    async def add_hidden_section(self, client_id, section_type):
        self.calls.append(("add", client_id, section_type))
        if self.fail:
            raise ApiError("Forbidden", status_code=403)
        return HiddenSection(client_id=client_id, section_type=section_type)

    async def remove_hidden_section(self, client_id, section_type):
        self.calls.append(("remove", client_id, section_type))
        if self.fail:
            raise ApiError("Forbidden", status_code=403)


class TestOptimisticMutation:
    """Test apply/commit/rollback."""

    @pytest.mark.asyncio
    async def test_commit(self):
        """Test that a successful dispatch keeps the local change."""
        store = {"description": "old"}

        async def dispatch():
            assert store["description"] == "new"
            return "ok"

        mutation = OptimisticMutation(store, "description", lambda _: "new", dispatch)
        assert await mutation.run() == "ok"
        assert mutation.state is MutationState.COMMITTED
        assert store["description"] == "new"

    @pytest.mark.asyncio
    async def test_rollback_restores_snapshot(self):
        """Test that a failed dispatch restores the prior value and re-raises."""
        store = {"tags": ["a"]}

        async def dispatch():
            raise ApiError("Server error", status_code=500)

        mutation = OptimisticMutation(store, "tags", lambda tags: tags + ["b"], dispatch)
        with pytest.raises(ApiError):
            await mutation.run()

        assert mutation.state is MutationState.ROLLED_BACK
        assert store["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_rollback_of_missing_key(self):
        """Test that a key absent before the mutation is removed again."""
        store = {}

        async def dispatch():
            raise ApiError("nope")

        with pytest.raises(ApiError):
            await OptimisticMutation(store, "name", lambda _: "x", dispatch).run()
        assert "name" not in store

    @pytest.mark.asyncio
    async def test_run_once(self):
        """Test that a finished mutation cannot be replayed."""
        async def dispatch():
            return None

        mutation = OptimisticMutation({}, "k", lambda _: 1, dispatch)
        await mutation.run()
        with pytest.raises(RuntimeError):
            await mutation.run()


class TestHiddenSectionsController:
    """Test the hidden/visible state machine."""

    @pytest.mark.asyncio
    async def test_load(self):
        """Test loading hidden sections from the API."""
        controller = HiddenSectionsController(9, FakeSectionsApi(hidden=["personas"]))
        await controller.load()
        assert controller.is_hidden("personas")
        assert controller.state_of("logos") is SectionVisibility.VISIBLE
        assert controller.visible_sections(["logos", "personas", "colors"]) == ["logos", "colors"]

    @pytest.mark.asyncio
    async def test_hide_and_show(self):
        """Test transitions persist through the API."""
        api = FakeSectionsApi()
        controller = HiddenSectionsController(9, api)

        assert await controller.hide("logos") is SectionVisibility.HIDDEN
        assert controller.is_hidden("logos")
        assert await controller.show("logos") is SectionVisibility.VISIBLE
        assert not controller.is_hidden("logos")
        assert api.calls == [("add", 9, "logos"), ("remove", 9, "logos")]

    @pytest.mark.asyncio
    async def test_idempotent(self):
        """Test that repeating the current state sends nothing."""
        api = FakeSectionsApi(hidden=["logos"])
        controller = HiddenSectionsController(9, api)
        await controller.load()

        await controller.hide("logos")
        await controller.show("fonts")
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_failed_hide_rolls_back(self):
        """Test that a rejected hide leaves the section visible."""
        controller = HiddenSectionsController(9, FakeSectionsApi(fail=True))
        with pytest.raises(ApiError):
            await controller.hide("logos")
        assert not controller.is_hidden("logos")

    @pytest.mark.asyncio
    async def test_toggle(self):
        """Test toggling flips the state."""
        controller = HiddenSectionsController(9, FakeSectionsApi())
        assert await controller.toggle("colors") is SectionVisibility.HIDDEN
        assert await controller.toggle("colors") is SectionVisibility.VISIBLE
