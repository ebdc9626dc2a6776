"""Tests for TUI module."""

import asyncio

from textual.widgets import DataTable, Input

from savory_secrets.events import ALL_EVENTS
from savory_secrets.images import ImageHandle, apply_picked_image
from savory_secrets.recipes import Recipe, RecipeStore
from savory_secrets.shopping import ShoppingListEntry, ShoppingListStore
from savory_secrets.tui import (
    EMPTY_RECIPES,
    NO_IMAGE,
    EntryDetailScreen,
    ImagePickerModal,
    RecipeDetailScreen,
    SavorySecretsApp,
    entry_rows,
    image_label,
    recipe_rows,
)


class TestRowHelpers:
    """Tests for the table row formatting helpers."""

    def test_empty_recipes_message(self):
        assert EMPTY_RECIPES == "No recipes available.\nHead to Create!"

    def test_image_label(self, image):
        assert image_label(None) == NO_IMAGE
        assert image_label(image) == "pasta.png"

    def test_recipe_rows(self, image):
        recipes = [
            Recipe(name="Pasta", image=image, ingredients={"Tomato": "2", "Basil": "1"}),
            Recipe(name="Soup"),
        ]

        assert recipe_rows(recipes) == [
            ("Pasta", "pasta.png", "2"),
            ("Soup", NO_IMAGE, "0"),
        ]

    def test_entry_rows(self):
        entries = [
            ShoppingListEntry(entry_id=1, name="Tacos", sub_ingredients=["Salsa", "Tortillas"]),
            ShoppingListEntry(entry_id=2, name="Milk"),
        ]
        assert entry_rows(entries) == [("Tacos", "2"), ("Milk", "0")]


class TestSavorySecretsApp:
    """Tests for the app object (without running it)."""

    def test_creates_fresh_stores(self):
        app = SavorySecretsApp()

        assert len(app.recipes) == 0
        assert len(app.shopping) == 0
        assert app.draft.name == ""
        assert app.picker.is_presented is False

    def test_uses_given_stores(self):
        recipes = RecipeStore()
        shopping = ShoppingListStore()
        app = SavorySecretsApp(recipes, shopping)

        assert app.recipes is recipes
        assert app.shopping is shopping

    def test_second_picker_not_presented(self):
        app = SavorySecretsApp()
        app.picker.present()

        assert app.pick_image(lambda image: None) is False


class TestSavorySecretsAppRunning:
    """Tests that mount the app headlessly and drive it through the stores."""

    def test_empty_states_shown(self):
        async def scenario():
            app = SavorySecretsApp()
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.recipes_empty.display is True
                assert app.shopping_empty.display is True
                assert app.recipes_table.row_count == 0

        asyncio.run(scenario())

    def test_existing_recipes_listed(self):
        recipes = RecipeStore()
        recipes.add_recipe("Pasta", None, {"Tomato": "2"})
        recipes.add_recipe("Soup")

        async def scenario():
            app = SavorySecretsApp(recipes=recipes)
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.recipes_table.row_count == 2
                assert app.recipes_empty.display is False

        asyncio.run(scenario())

    def test_store_mutation_rerenders(self):
        async def scenario():
            app = SavorySecretsApp()
            async with app.run_test() as pilot:
                app.shopping.add_item("Milk")
                app.recipes.add_recipe("Pasta")
                await pilot.pause()

                assert app.shopping_table.row_count == 1
                assert app.shopping_empty.display is False
                assert app.recipes_table.row_count == 1

        asyncio.run(scenario())

    def test_submit_draft(self):
        async def scenario():
            app = SavorySecretsApp()
            async with app.run_test() as pilot:
                assert app.add_recipe_button.disabled is True

                app.draft.set_ingredient("Tomato", "2")
                app._refresh_draft()
                assert app.add_recipe_button.disabled is False
                assert app.draft_table.row_count == 1

                app.name_input.value = "Pasta"
                app.on_add_recipe()
                await pilot.pause()

                assert app.recipes.get("Pasta").ingredients == {"Tomato": "2"}
                assert app.draft.ingredients == {}
                assert app.add_recipe_button.disabled is True
                assert app.tabs.active == "recipes-tab"

        asyncio.run(scenario())

    def test_entry_detail_follows_store(self):
        shopping = ShoppingListStore()
        entry_id = shopping.add_item("Tacos")

        async def scenario():
            app = SavorySecretsApp(shopping=shopping)
            async with app.run_test() as pilot:
                screen = EntryDetailScreen(shopping, entry_id)
                app.push_screen(screen)
                await pilot.pause()

                shopping.add_sub_ingredient(entry_id, "Salsa")
                await pilot.pause()
                table = screen.query_one("#sub-ingredients", DataTable)
                assert table.row_count == 1
                # List view counts the note too
                assert app.shopping_table.row_count == 1

                app.pop_screen()
                await pilot.pause()
                # Only the app's own subscription remains
                assert shopping.bus.subscriber_count(ALL_EVENTS) == 1

        asyncio.run(scenario())

    def test_recipe_detail_shows_sorted_ingredients(self):
        recipes = RecipeStore()
        recipes.add_recipe("Bread", None, {"Salt": "1tsp"})

        async def scenario():
            app = SavorySecretsApp(recipes=recipes)
            async with app.run_test() as pilot:
                screen = RecipeDetailScreen(recipes, "Bread")
                app.push_screen(screen)
                await pilot.pause()

                recipes.add_ingredient("Bread", "Flour", "2cup")
                await pilot.pause()

                table = screen.query_one("#detail-ingredients", DataTable)
                assert table.row_count == 2
                assert table.get_row_at(0) == ["Flour", "2cup"]

        asyncio.run(scenario())


class TestImagePickerFlow:
    """Tests for presenting the image picker and delivering its result."""

    def test_cancel_keeps_prior_image(self, image):
        recipes = RecipeStore()
        recipes.add_recipe("Pasta", image)
        received = []

        def deliver(picked):
            received.append(picked)
            apply_picked_image(recipes, "Pasta", picked)

        async def scenario():
            app = SavorySecretsApp(recipes=recipes)
            async with app.run_test() as pilot:
                assert app.pick_image(deliver) is True
                await pilot.pause()
                assert app.picker.is_presented is True
                assert isinstance(app.screen, ImagePickerModal)

                await pilot.press("escape")
                await pilot.pause()

                assert received == [None]
                assert app.picker.is_presented is False
                assert not isinstance(app.screen, ImagePickerModal)
                assert recipes.get("Pasta").image is image

        asyncio.run(scenario())

    def test_picker_can_open_again_after_close(self):
        async def scenario():
            app = SavorySecretsApp()
            async with app.run_test() as pilot:
                app.pick_image(lambda picked: None)
                await pilot.pause()
                await pilot.press("escape")
                await pilot.pause()

                assert app.pick_image(lambda picked: None) is True

        asyncio.run(scenario())


class TestRowSelection:
    """Tests that selecting a row opens a detail screen bound to the store."""

    def test_recipe_row_opens_detail_and_changes_image(self, image_file):
        recipes = RecipeStore()
        recipes.add_recipe("Pasta", None, {"Tomato": "2"})

        async def scenario():
            app = SavorySecretsApp(recipes=recipes)
            async with app.run_test() as pilot:
                app.recipes_table.focus()
                await pilot.pause()
                await pilot.press("enter")
                await pilot.pause()

                assert isinstance(app.screen, RecipeDetailScreen)
                assert app.screen.recipe_name == "Pasta"

                await pilot.press("i")
                await pilot.pause()
                assert isinstance(app.screen, ImagePickerModal)

                path_input = app.screen.query_one("#image-path", Input)
                path_input.value = str(image_file)
                path_input.focus()
                await pilot.pause()
                await pilot.press("enter")
                await pilot.pause()

                picked = recipes.get("Pasta").image
                assert isinstance(picked, ImageHandle)
                assert picked.name == "pasta.png"
                assert app.picker.is_presented is False
                assert isinstance(app.screen, RecipeDetailScreen)

        asyncio.run(scenario())

    def test_shopping_row_opens_detail_and_adds_note(self):
        shopping = ShoppingListStore()
        shopping.add_item("Milk")
        entry_id = shopping.add_item("Tacos")

        async def scenario():
            app = SavorySecretsApp(shopping=shopping)
            async with app.run_test() as pilot:
                app.tabs.active = "shopping-tab"
                await pilot.pause()
                app.shopping_table.focus()
                await pilot.pause()
                await pilot.press("down")
                await pilot.press("enter")
                await pilot.pause()

                assert isinstance(app.screen, EntryDetailScreen)
                assert app.screen.entry_id == entry_id

                note_input = app.screen.query_one("#sub-ingredient", Input)
                note_input.value = "Salsa"
                note_input.focus()
                await pilot.pause()
                await pilot.press("enter")
                await pilot.pause()

                assert shopping.sub_ingredients(entry_id) == ["Salsa"]
                assert note_input.value == ""
                assert shopping.sub_ingredients(1) == []

        asyncio.run(scenario())
