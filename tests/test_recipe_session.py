"""
Tests for the recipe session state machine.

These tests verify that:
- Image analysis replaces recipes atomically and leaves state intact on failure
- Step navigation covers overview, every step and the finished screen
- Every landing position is narrated and leaving cooking stops narration
- The shopping list stays duplicate-free
"""

import asyncio

import pytest

from models.entities import AnalysisResult, DietaryFilter
from models.view_state import ViewMode
from services.recipe_session import RecipeSession
from tests.conftest import FakeGateway, make_recipe


def submit(session, image=b"jpeg-bytes"):
    return asyncio.run(session.submit_image(image))


class TestInitialState:
    def test_new_session_starts_on_upload(self, make_session):
        session = make_session()

        assert session.view_mode == ViewMode.UPLOAD
        assert session.is_loading is False
        assert session.recipes == ()
        assert session.detected_ingredients == ()
        assert session.dietary_filter == DietaryFilter.ALL
        assert session.shopping_list.items == []
        assert session.selected_recipe is None
        assert session.cooking_step_index is None


class TestSubmitImage:
    def test_success_moves_to_results(self, make_session, omelette_result):
        session = make_session(omelette_result)

        assert submit(session) is True

        assert session.view_mode == ViewMode.RESULTS
        assert session.is_loading is False
        assert len(session.recipes) == 1
        assert len(session.filtered_recipes) == 1
        assert session.detected_ingredients == ("eggs", "cheese")
        assert session.last_error is None

    def test_recipes_get_unique_ids(self, make_session, mixed_result):
        session = make_session(mixed_result)
        submit(session)

        ids = [r.id for r in session.recipes]
        assert all(ids)
        assert len(set(ids)) == len(ids)

    def test_ids_are_never_reused_across_analyses(self, make_session, omelette_result, mixed_result):
        session = make_session(omelette_result, mixed_result)
        submit(session)
        first_ids = {r.id for r in session.recipes}

        submit(session)
        second_ids = {r.id for r in session.recipes}

        assert first_ids.isdisjoint(second_ids)

    def test_duplicate_supplied_ids_are_replaced(self, make_session):
        result = AnalysisResult(
            detected_ingredients=(),
            recipes=(make_recipe("A", id="same"), make_recipe("B", id="same")),
        )
        session = make_session(result)
        submit(session)

        assert session.recipes[0].id == "same"
        assert session.recipes[1].id != "same"

    def test_is_loading_while_gateway_pending(self, narrator, omelette_result):
        seen = []

        class ObservingGateway:
            async def analyze(self, image_bytes, media_type="image/jpeg"):
                seen.append(session.is_loading)
                return omelette_result

        session = RecipeSession(gateway=ObservingGateway(), narrator=narrator)
        submit(session)

        assert seen == [True]
        assert session.is_loading is False

    def test_media_type_is_passed_to_gateway(self, omelette_result, narrator):
        gateway = FakeGateway(omelette_result)
        session = RecipeSession(gateway=gateway, narrator=narrator)

        asyncio.run(session.submit_image(b"png", "image/png"))

        assert gateway.calls == [(b"png", "image/png")]

    def test_failure_keeps_previous_state(self, make_session, transport_failure):
        session = make_session(transport_failure)

        assert submit(session) is False

        assert session.is_loading is False
        assert session.view_mode == ViewMode.UPLOAD
        assert session.recipes == ()
        assert session.last_error == RecipeSession.FAILURE_NOTICE

    def test_raising_gateway_is_a_failure(self, make_session):
        session = make_session(ConnectionError("network down"))

        assert submit(session) is False

        assert session.is_loading is False
        assert session.view_mode == ViewMode.UPLOAD
        assert session.recipes == ()
        assert session.last_error == RecipeSession.FAILURE_NOTICE

    def test_failure_after_success_keeps_recipes(self, make_session, omelette_result, transport_failure):
        session = make_session(omelette_result, transport_failure)
        submit(session)
        session.reset_to_upload()
        recipes = session.recipes

        submit(session)

        assert session.recipes == recipes
        assert session.detected_ingredients == ("eggs", "cheese")
        assert session.view_mode == ViewMode.UPLOAD

    def test_next_submission_clears_error(self, make_session, omelette_result, transport_failure):
        session = make_session(transport_failure, omelette_result)
        submit(session)
        assert session.last_error

        submit(session)
        assert session.last_error is None

    def test_latest_submission_wins(self, narrator, omelette_result, mixed_result):
        first_may_finish = asyncio.Event()

        class SlowFirstGateway:
            def __init__(self):
                self.calls = 0

            async def analyze(self, image_bytes, media_type="image/jpeg"):
                self.calls += 1
                if self.calls == 1:
                    await first_may_finish.wait()
                    return omelette_result
                return mixed_result

        session = RecipeSession(gateway=SlowFirstGateway(), narrator=narrator)

        async def scenario():
            first = asyncio.create_task(session.submit_image(b"first"))
            await asyncio.sleep(0)
            second = await session.submit_image(b"second")
            first_may_finish.set()
            return await first, second

        first_applied, second_applied = asyncio.run(scenario())

        assert first_applied is False
        assert second_applied is True
        assert [r.name for r in session.recipes] == [r.name for r in mixed_result.recipes]
        assert session.is_loading is False

    def test_cancelled_submission_stops_loading(self, narrator, omelette_result):
        class HangingGateway:
            async def analyze(self, image_bytes, media_type="image/jpeg"):
                await asyncio.sleep(3600)
                return omelette_result

        session = RecipeSession(gateway=HangingGateway(), narrator=narrator)

        async def scenario():
            task = asyncio.create_task(session.submit_image(b"jpeg"))
            await asyncio.sleep(0)
            assert session.is_loading is True
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())

        assert session.is_loading is False
        assert session.view_mode == ViewMode.UPLOAD
        assert session.recipes == ()


class TestDietaryFilter:
    def test_filter_all_returns_recipes_in_order(self, make_session, mixed_result):
        session = make_session(mixed_result)
        submit(session)

        assert session.filtered_recipes == list(session.recipes)

    def test_filter_matches_tags_ignoring_case(self, make_session, mixed_result):
        session = make_session(mixed_result)
        submit(session)

        session.set_dietary_filter(DietaryFilter.VEGAN)
        assert [r.name for r in session.filtered_recipes] == ["Tofu Scramble"]

        session.set_dietary_filter(DietaryFilter.VEGETARIAN)
        assert [r.name for r in session.filtered_recipes] == ["Spinach Frittata", "Tofu Scramble"]

    @pytest.mark.parametrize("dietary_filter", [f for f in DietaryFilter if f is not DietaryFilter.ALL])
    def test_every_filtered_recipe_has_matching_tag(self, make_session, mixed_result, dietary_filter):
        session = make_session(mixed_result)
        submit(session)
        session.set_dietary_filter(dietary_filter)

        for recipe in session.filtered_recipes:
            assert dietary_filter.label.lower() in [t.lower() for t in recipe.tags]

    def test_filter_accepts_label(self, make_session):
        session = make_session()
        session.set_dietary_filter("gluten-free")
        assert session.dietary_filter == DietaryFilter.GLUTEN_FREE

    def test_unknown_label_raises(self, make_session):
        session = make_session()
        with pytest.raises(ValueError):
            session.set_dietary_filter("Paleo")
        assert session.dietary_filter == DietaryFilter.ALL


class TestCookThrough:
    @pytest.fixture
    def cooking_session(self, make_session, omelette_result):
        session = make_session(omelette_result)
        submit(session)
        return session

    def test_select_recipe_enters_cooking(self, cooking_session, narrator):
        recipe = cooking_session.recipes[0]

        assert cooking_session.select_recipe(recipe.id) is True

        assert cooking_session.view_mode == ViewMode.COOKING
        assert cooking_session.selected_recipe == recipe
        assert cooking_session.cooking_step_index == -1
        assert narrator.spoken == ["Let's cook Omelette. Here are the ingredients."]

    def test_select_unknown_recipe_is_ignored(self, cooking_session, narrator):
        assert cooking_session.select_recipe("recipe-999") is False

        assert cooking_session.view_mode == ViewMode.RESULTS
        assert narrator.spoken == []

    def test_select_always_resets_step(self, cooking_session):
        recipe_id = cooking_session.recipes[0].id
        cooking_session.select_recipe(recipe_id)
        cooking_session.advance_step()
        cooking_session.advance_step()

        cooking_session.select_recipe(recipe_id)

        assert cooking_session.cooking_step_index == -1

    def test_advance_walks_to_finished(self, cooking_session):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        indices = [cooking_session.cooking_step_index]

        for _ in range(3):
            cooking_session.advance_step()
            indices.append(cooking_session.cooking_step_index)

        assert indices == [-1, 0, 1, 2]
        assert cooking_session.is_finished is True

    def test_advance_stops_at_finished(self, cooking_session):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        for _ in range(3):
            cooking_session.advance_step()

        assert cooking_session.advance_step() is False
        assert cooking_session.cooking_step_index == 2

    def test_step_narration(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        for _ in range(3):
            cooking_session.advance_step()

        assert narrator.spoken == [
            "Let's cook Omelette. Here are the ingredients.",
            "Step 1. Crack eggs",
            "Step 2. Cook",
            "Enjoy your meal!",
        ]

    def test_new_narration_supersedes_previous(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        intro = narrator.current

        cooking_session.advance_step()

        assert intro.cancelled is True
        assert narrator.current.cancelled is False

    def test_retreat_to_overview_then_no_op(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        cooking_session.advance_step()

        assert cooking_session.retreat_step() is True
        assert cooking_session.cooking_step_index == -1
        assert narrator.spoken[-1] == "Let's cook Omelette. Here are the ingredients."

        assert cooking_session.retreat_step() is False
        assert cooking_session.cooking_step_index == -1

    def test_retreat_narrates_step(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        cooking_session.advance_step()
        cooking_session.advance_step()

        cooking_session.retreat_step()

        assert narrator.spoken[-1] == "Step 1. Crack eggs"

    def test_repeat_narration(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        cooking_session.advance_step()

        cooking_session.repeat_narration()

        assert narrator.spoken[-2:] == ["Step 1. Crack eggs", "Step 1. Crack eggs"]
        assert cooking_session.cooking_step_index == 0

    def test_recipe_without_steps(self, make_session, narrator):
        result = AnalysisResult(detected_ingredients=(), recipes=(make_recipe("Salad", steps=()),))
        session = make_session(result)
        submit(session)
        session.select_recipe(session.recipes[0].id)

        session.advance_step()

        assert session.cooking_step_index == 0
        assert session.is_finished is True
        assert narrator.spoken[-1] == "Enjoy your meal!"

    def test_steps_outside_cooking_are_ignored(self, cooking_session, narrator):
        assert cooking_session.advance_step() is False
        assert cooking_session.retreat_step() is False
        assert cooking_session.repeat_narration() is None
        assert cooking_session.view_mode == ViewMode.RESULTS
        assert narrator.spoken == []

    def test_close_cooking_returns_to_results(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        cooking_session.advance_step()

        cooking_session.close_cooking()

        assert cooking_session.view_mode == ViewMode.RESULTS
        assert cooking_session.cooking_step_index is None
        assert narrator.current is None
        assert narrator.cancel_count == 1

    def test_reset_to_upload_keeps_recipes_and_list(self, cooking_session):
        cooking_session.add_to_shopping_list("salt")
        recipes = cooking_session.recipes

        cooking_session.reset_to_upload()

        assert cooking_session.view_mode == ViewMode.UPLOAD
        assert cooking_session.recipes == recipes
        assert cooking_session.shopping_list.items == ["salt"]

    def test_close_cancels_narration(self, cooking_session, narrator):
        cooking_session.select_recipe(cooking_session.recipes[0].id)
        speaking = narrator.current

        cooking_session.close()

        assert speaking.cancelled is True


class TestShoppingList:
    def test_add_twice_then_remove_leaves_empty(self, make_session):
        session = make_session()

        session.add_to_shopping_list("salt")
        session.add_to_shopping_list("salt")
        assert session.shopping_list.items == ["salt"]

        session.remove_from_shopping_list("salt")
        assert session.shopping_list.items == []

    def test_remove_absent_is_no_op(self, make_session):
        session = make_session()
        session.add_to_shopping_list("milk")

        assert session.remove_from_shopping_list("salt") is False
        assert session.shopping_list.items == ["milk"]

    def test_add_missing_ingredients(self, make_session, omelette_result):
        session = make_session(omelette_result)
        submit(session)
        recipe_id = session.recipes[0].id

        assert session.add_missing_ingredients(recipe_id) == 1
        assert session.add_missing_ingredients(recipe_id) == 0
        assert session.shopping_list.items == ["salt"]

    def test_list_survives_new_analysis(self, make_session, omelette_result, mixed_result):
        session = make_session(omelette_result, mixed_result)
        submit(session)
        session.add_to_shopping_list("salt")

        session.reset_to_upload()
        submit(session)

        assert session.shopping_list.items == ["salt"]
