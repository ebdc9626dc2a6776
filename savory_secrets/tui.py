"""Interactive TUI: recipes, recipe creation and the shopping list."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TabbedContent,
    TabPane,
)

from .config import PICTURES_DIR
from .events import ALL_EVENTS
from .images import ImageError, ImageHandle, ImagePicker, apply_picked_image
from .recipes import Recipe, RecipeDraft, RecipeStore
from .shopping import ShoppingListEntry, ShoppingListStore

logger = logging.getLogger(__name__)

EMPTY_RECIPES = "No recipes available.\nHead to Create!"
EMPTY_SHOPPING = "No items in the list."
NO_IMAGE = "No image"


def image_label(image: ImageHandle | None) -> str:
    return image.name if image is not None else NO_IMAGE


def recipe_rows(recipes: Iterable[Recipe]) -> list[tuple[str, str, str]]:
    """Rows for the recipe table: name, image, ingredient count."""
    return [
        (recipe.name, image_label(recipe.image), str(len(recipe.ingredients)))
        for recipe in recipes
    ]


def entry_rows(entries: Iterable[ShoppingListEntry]) -> list[tuple[str, str]]:
    """Rows for the shopping list table: name, number of ingredient notes."""
    return [(entry.name, str(len(entry.sub_ingredients))) for entry in entries]


def _fill_table(table: DataTable, rows: Iterable[tuple[str, ...]]) -> int:
    table.clear()
    count = 0
    for row in rows:
        table.add_row(*row)
        count += 1
    return count


class ImagePickerModal(ModalScreen[ImageHandle | None]):
    """Modal dialog asking for an image file. Dismisses with None on cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Label("Select Image", classes="dialog-title")
            yield Input(value=f"{PICTURES_DIR}/", placeholder="Path to image", id="image-path")
            yield Label("", id="image-error")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Choose", variant="success", id="btn-choose")
                yield Button("Cancel", variant="default", id="btn-cancel")

    @on(Input.Submitted, "#image-path")
    @on(Button.Pressed, "#btn-choose")
    def on_choose(self) -> None:
        path = self.query_one("#image-path", Input).value.strip()
        try:
            image = ImageHandle.from_path(path)
        except ImageError as e:
            self.query_one("#image-error", Label).update(str(e))
            return
        self.dismiss(image)

    @on(Button.Pressed, "#btn-cancel")
    def on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class AddIngredientModal(ModalScreen[None]):
    """Modal for entering ingredient/quantity pairs; stays open for several entries."""

    BINDINGS = [
        Binding("escape", "close", "Done"),
    ]

    def __init__(self, on_add: Callable[[str, str], bool], name: str | None = None) -> None:
        super().__init__(name=name)
        self.on_add = on_add

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Input(placeholder="Enter ingredient", id="ingredient-name")
            yield Input(placeholder="Enter quantity", id="ingredient-quantity")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Add Ingredient", variant="success", id="btn-add")
                yield Button("Done", variant="default", id="btn-done")

    @on(Input.Submitted, "#ingredient-quantity")
    @on(Button.Pressed, "#btn-add")
    def on_add_pressed(self) -> None:
        name_input = self.query_one("#ingredient-name", Input)
        qty_input = self.query_one("#ingredient-quantity", Input)
        if self.on_add(name_input.value, qty_input.value):
            name_input.value = ""
            qty_input.value = ""
            name_input.focus()

    @on(Button.Pressed, "#btn-done")
    def on_done(self) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class NewListModal(ModalScreen[str | None]):
    """Modal asking for the name of a new shopping list entry."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Label("Create New Shopping List", classes="dialog-title")
            yield Input(placeholder="Enter shopping list name", id="list-name")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Create List", variant="success", id="btn-create")
                yield Button("Cancel", variant="default", id="btn-cancel")

    @on(Input.Submitted, "#list-name")
    @on(Button.Pressed, "#btn-create")
    def on_create(self) -> None:
        value = self.query_one("#list-name", Input).value
        if value:
            self.dismiss(value)

    @on(Button.Pressed, "#btn-cancel")
    def on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class RecipeDetailScreen(Screen[None]):
    """Shows one recipe and lets the user change its image or add ingredients."""

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("i", "change_image", "Change Image"),
        Binding("a", "add_ingredient", "Add Ingredient"),
    ]

    def __init__(self, store: RecipeStore, recipe_name: str) -> None:
        super().__init__()
        self.store = store
        self.recipe_name = recipe_name

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(classes="detail"):
            yield Label(self.recipe_name, classes="detail-title")
            yield Label(NO_IMAGE, id="detail-image")
            table = DataTable(id="detail-ingredients")
            table.add_columns("Ingredient", "Quantity")
            yield table
            with Horizontal(classes="button-bar"):
                yield Button("Change Image (i)", id="btn-image")
                yield Button("Add Ingredient (a)", id="btn-ingredient")
                yield Button("Back", id="btn-back")
        yield Footer()

    def on_mount(self) -> None:
        self.store.subscribe(ALL_EVENTS, self._on_store_event)
        self._refresh()

    def on_unmount(self) -> None:
        self.store.unsubscribe(ALL_EVENTS, self._on_store_event)

    def _on_store_event(self, event_name: str, payload: Any) -> None:
        self._refresh()

    def _refresh(self) -> None:
        # Name-keyed operations always resolve to the first recipe with this name
        recipe = self.store.get(self.recipe_name)
        if recipe is None:
            return
        self.query_one("#detail-image", Label).update(image_label(recipe.image))
        _fill_table(
            self.query_one("#detail-ingredients", DataTable), recipe.sorted_ingredients()
        )

    def action_change_image(self) -> None:
        app: SavorySecretsApp = self.app  # type: ignore[assignment]
        app.pick_image(lambda image: apply_picked_image(self.store, self.recipe_name, image))

    def action_add_ingredient(self) -> None:
        self.app.push_screen(
            AddIngredientModal(
                lambda ingredient, qty: self.store.add_ingredient(self.recipe_name, ingredient, qty)
            )
        )

    def action_back(self) -> None:
        self.app.pop_screen()

    @on(Button.Pressed, "#btn-image")
    def on_image_button(self) -> None:
        self.action_change_image()

    @on(Button.Pressed, "#btn-ingredient")
    def on_ingredient_button(self) -> None:
        self.action_add_ingredient()

    @on(Button.Pressed, "#btn-back")
    def on_back_button(self) -> None:
        self.action_back()


class EntryDetailScreen(Screen[None]):
    """Ingredient notes for one shopping list entry, edited through the store."""

    BINDINGS = [
        Binding("escape", "back", "Back"),
    ]

    def __init__(self, store: ShoppingListStore, entry_id: int) -> None:
        super().__init__()
        self.store = store
        self.entry_id = entry_id

    def compose(self) -> ComposeResult:
        entry = self.store.get(self.entry_id)
        title = entry.name if entry is not None else ""
        yield Header()
        with Vertical(classes="detail"):
            yield Label(f"Ingredients for {title}", classes="detail-title")
            yield Input(placeholder="Enter ingredient", id="sub-ingredient")
            with Horizontal(classes="button-bar"):
                yield Button("Add Ingredient", variant="primary", id="btn-add-sub")
                yield Button("Back", id="btn-back")
            table = DataTable(id="sub-ingredients")
            table.add_columns("Ingredient")
            yield table
        yield Footer()

    def on_mount(self) -> None:
        self.store.subscribe(ALL_EVENTS, self._on_store_event)
        self._refresh()

    def on_unmount(self) -> None:
        self.store.unsubscribe(ALL_EVENTS, self._on_store_event)

    def _on_store_event(self, event_name: str, payload: Any) -> None:
        self._refresh()

    def _refresh(self) -> None:
        rows = [(item,) for item in self.store.sub_ingredients(self.entry_id)]
        _fill_table(self.query_one("#sub-ingredients", DataTable), rows)

    @on(Input.Submitted, "#sub-ingredient")
    @on(Button.Pressed, "#btn-add-sub")
    def on_add(self) -> None:
        entry_input = self.query_one("#sub-ingredient", Input)
        if self.store.add_sub_ingredient(self.entry_id, entry_input.value):
            entry_input.value = ""

    @on(Button.Pressed, "#btn-back")
    def on_back_button(self) -> None:
        self.action_back()

    def action_back(self) -> None:
        self.app.pop_screen()


class SavorySecretsApp(App[None]):
    """Recipe book and shopping list."""

    TITLE = "Savory Secrets"

    CSS = """
    Screen {
        background: $surface;
    }

    .empty-state {
        height: auto;
        padding: 1;
        color: $text-muted;
        content-align: center middle;
    }

    DataTable {
        height: 1fr;
        margin: 1 0;
    }

    .button-bar {
        height: 3;
        align: center middle;
        padding: 0 1;
    }

    .button-bar Button {
        margin: 0 1;
    }

    ModalScreen {
        align: center middle;
    }

    .dialog {
        width: 70;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    .dialog-title, .detail-title {
        text-style: bold;
        padding-bottom: 1;
    }

    .dialog-buttons {
        height: 3;
        align: center middle;
    }

    #image-error {
        color: $error;
    }

    .detail {
        height: 100%;
        padding: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+n", "new_list", "New List"),
    ]

    def __init__(
        self,
        recipes: RecipeStore | None = None,
        shopping: ShoppingListStore | None = None,
    ) -> None:
        super().__init__()
        self.recipes = recipes if recipes is not None else RecipeStore()
        self.shopping = shopping if shopping is not None else ShoppingListStore()
        self.draft = RecipeDraft()
        self.picker = ImagePicker()

    def compose(self) -> ComposeResult:
        # Widgets are held as attributes; the default screen may be covered when stores publish
        self.tabs = TabbedContent(initial="recipes-tab")
        self.recipes_empty = Static(EMPTY_RECIPES, id="recipes-empty", classes="empty-state")
        self.recipes_table = DataTable(id="recipes-table")
        self.recipes_table.cursor_type = "row"
        self.recipes_table.add_columns("Recipe", "Image", "Ingredients")

        self.name_input = Input(placeholder="Enter recipe name", id="recipe-name")
        self.draft_image = Label(NO_IMAGE, id="draft-image")
        self.draft_table = DataTable(id="draft-table")
        self.draft_table.add_columns("Ingredient", "Quantity")
        self.add_recipe_button = Button(
            "Add Recipe", variant="success", id="btn-add-recipe", disabled=True
        )

        self.shopping_empty = Static(EMPTY_SHOPPING, id="shopping-empty", classes="empty-state")
        self.shopping_table = DataTable(id="shopping-table")
        self.shopping_table.cursor_type = "row"
        self.shopping_table.add_columns("List", "Ingredients")

        yield Header()
        with self.tabs:
            with TabPane("Recipes", id="recipes-tab"):
                yield self.recipes_empty
                yield self.recipes_table
            with TabPane("Create", id="create-tab"):
                yield self.name_input
                yield self.draft_image
                with Horizontal(classes="button-bar"):
                    yield Button("Select Image", id="btn-select-image")
                    yield Button("Add Ingredients", id="btn-add-ingredients")
                yield self.draft_table
                with Horizontal(classes="button-bar"):
                    yield self.add_recipe_button
            with TabPane("Shopping List", id="shopping-tab"):
                yield self.shopping_empty
                yield self.shopping_table
                with Horizontal(classes="button-bar"):
                    yield Button("New List (ctrl+n)", variant="primary", id="btn-new-list")
        yield Footer()

    def on_mount(self) -> None:
        self.recipes.subscribe(ALL_EVENTS, self._on_recipes_changed)
        self.shopping.subscribe(ALL_EVENTS, self._on_shopping_changed)
        self._refresh_recipes()
        self._refresh_draft()
        self._refresh_shopping()

    def on_unmount(self) -> None:
        self.recipes.unsubscribe(ALL_EVENTS, self._on_recipes_changed)
        self.shopping.unsubscribe(ALL_EVENTS, self._on_shopping_changed)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_recipes_changed(self, event_name: str, payload: Any) -> None:
        self._refresh_recipes()

    def _on_shopping_changed(self, event_name: str, payload: Any) -> None:
        self._refresh_shopping()

    def _refresh_recipes(self) -> None:
        count = _fill_table(self.recipes_table, recipe_rows(self.recipes))
        self.recipes_empty.display = count == 0

    def _refresh_shopping(self) -> None:
        count = _fill_table(self.shopping_table, entry_rows(self.shopping))
        self.shopping_empty.display = count == 0

    def _refresh_draft(self) -> None:
        self.draft_image.update(image_label(self.draft.image))
        _fill_table(self.draft_table, self.draft.sorted_ingredients())
        self.add_recipe_button.disabled = not self.draft.can_submit

    # ------------------------------------------------------------------
    # Image picking
    # ------------------------------------------------------------------

    def pick_image(self, deliver: Callable[[ImageHandle | None], Any]) -> bool:
        """
        Present the image picker and hand its result to `deliver`.

        Returns False without presenting anything if a picker is already open.
        """
        if not self.picker.present():
            return False

        def on_picked(image: ImageHandle | None) -> None:
            deliver(self.picker.finish(image))

        self.push_screen(ImagePickerModal(), callback=on_picked)
        return True

    # ------------------------------------------------------------------
    # Recipes tab
    # ------------------------------------------------------------------

    @on(DataTable.RowSelected, "#recipes-table")
    def on_recipe_selected(self, event: DataTable.RowSelected) -> None:
        recipes = list(self.recipes)
        if event.cursor_row is not None and 0 <= event.cursor_row < len(recipes):
            recipe = recipes[event.cursor_row]
            self.push_screen(RecipeDetailScreen(self.recipes, recipe.name))

    # ------------------------------------------------------------------
    # Create tab
    # ------------------------------------------------------------------

    @on(Input.Changed, "#recipe-name")
    def on_recipe_name_changed(self, event: Input.Changed) -> None:
        self.draft.name = event.value

    @on(Button.Pressed, "#btn-select-image")
    def on_select_image(self) -> None:
        def set_draft_image(image: ImageHandle | None) -> None:
            # Cancelling keeps whatever image was picked before
            if image is not None:
                self.draft.image = image
                self._refresh_draft()

        self.pick_image(set_draft_image)

    @on(Button.Pressed, "#btn-add-ingredients")
    def on_add_ingredients(self) -> None:
        def add(ingredient: str, quantity: str) -> bool:
            added = self.draft.set_ingredient(ingredient, quantity)
            if added:
                self._refresh_draft()
            return added

        self.push_screen(AddIngredientModal(add))

    @on(Button.Pressed, "#btn-add-recipe")
    def on_add_recipe(self) -> None:
        # Read the input directly; the Changed message may not have been handled yet
        self.draft.name = self.name_input.value
        if not self.draft.submit(self.recipes):
            self.notify("Enter a recipe name first.", severity="warning")
            return
        self.name_input.value = ""
        self._refresh_draft()
        self.tabs.active = "recipes-tab"

    # ------------------------------------------------------------------
    # Shopping list tab
    # ------------------------------------------------------------------

    def action_new_list(self) -> None:
        def create(name: str | None) -> None:
            if name:
                self.shopping.add_item(name)

        self.push_screen(NewListModal(), callback=create)

    @on(Button.Pressed, "#btn-new-list")
    def on_new_list_button(self) -> None:
        self.action_new_list()

    @on(DataTable.RowSelected, "#shopping-table")
    def on_entry_selected(self, event: DataTable.RowSelected) -> None:
        entries = list(self.shopping)
        if event.cursor_row is not None and 0 <= event.cursor_row < len(entries):
            self.push_screen(EntryDetailScreen(self.shopping, entries[event.cursor_row].entry_id))


def run_app(
    recipes: RecipeStore | None = None,
    shopping: ShoppingListStore | None = None,
) -> None:
    """Launch the TUI with the given (or fresh) stores."""
    app = SavorySecretsApp(recipes, shopping)
    logger.info("Starting %s", app.TITLE)
    app.run()
