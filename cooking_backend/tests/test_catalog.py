from __future__ import annotations

from pathlib import Path

import pytest

from cooking_backend.catalog import store
from cooking_backend.exceptions import (
    DataLoadError,
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)


def _write_catalog(directory: Path, ingredients: str) -> Path:
    (directory / "products.csv").write_text(
        "id,name,category,is_common\n1,Eggs,Dairy,true\n2,Milk,Dairy,false\n",
        encoding="utf-8",
    )
    (directory / "recipes.csv").write_text(
        "id,title,description,cooking_steps,cooking_time_minutes,difficulty,"
        "servings,category,image_url,is_approved\n"
        "1,Omelette,,Whisk and fry.,10,easy,1,Breakfast,,true\n"
        "2,Custard,,Cook slowly.,,,,,,false\n",
        encoding="utf-8",
    )
    (directory / "recipe_ingredients.csv").write_text(ingredients, encoding="utf-8")
    return directory


def test_seed_catalog_loads():
    products = store.list_products()
    assert len(products) > 0
    assert [p.id for p in products] == sorted(p.id for p in products)
    omelette = store.get_recipe(1)
    assert omelette.title == "Omelette"
    assert {i.product_name for i in omelette.ingredients} == {"Eggs", "Milk", "Butter", "Salt"}


def test_list_products_filters_by_category_then_search():
    dairy = store.list_products(category="dairy")
    assert dairy
    assert all("dairy" in p.category.lower() for p in dairy)

    potatoes = store.list_products(search="POT")
    assert [p.name for p in potatoes] == ["Potato"]


def test_approved_recipes_skip_unapproved():
    approved_ids = [r.id for r in store.list_approved_recipes()]
    assert 8 not in approved_ids
    assert 8 in [r.id for r in store.list_recipes()]
    assert approved_ids == sorted(approved_ids)


def test_create_product_rejects_duplicate_name():
    created = store.create_product("Basil", "Herbs")
    assert store.get_product(created.id).name == "Basil"
    with pytest.raises(DuplicateResourceError):
        store.create_product("basil", "Herbs")


def test_rename_product_updates_ingredient_names():
    store.update_product(1, name="Chicken eggs")
    names = [i.product_name for i in store.get_recipe(1).ingredients]
    assert "Chicken eggs" in names
    assert "Eggs" not in names


def test_delete_product_removes_it_from_recipes():
    store.delete_product(6)
    with pytest.raises(ResourceNotFoundError):
        store.get_product(6)
    for recipe in store.list_recipes():
        assert all(i.product_id != 6 for i in recipe.ingredients)


def test_create_recipe_resolves_ingredients():
    recipe = store.create_recipe(
        title="Boiled eggs",
        cooking_steps="Boil for 8 minutes.",
        difficulty="easy",
        ingredients=[(1, 2, "pcs"), (6, 1, "pinch")],
    )
    assert recipe.approved
    assert [i.product_name for i in recipe.ingredients] == ["Eggs", "Salt"]
    assert store.get_recipe(recipe.id) == recipe


def test_create_recipe_rejects_unknown_product():
    with pytest.raises(ResourceNotFoundError):
        store.create_recipe(title="Mystery", cooking_steps="?", ingredients=[(999, 1, "g")])


def test_create_recipe_rejects_duplicate_product():
    with pytest.raises(InvalidArgumentError):
        store.create_recipe(
            title="Double eggs",
            cooking_steps="?",
            ingredients=[(1, 2, "pcs"), (1, 3, "pcs")],
        )


def test_update_recipe_rejects_unknown_fields():
    with pytest.raises(InvalidArgumentError):
        store.update_recipe(1, calories=300)


def test_update_and_delete_recipe():
    updated = store.update_recipe(1, approved=False, ingredients=[(1, 4, "pcs")])
    assert not updated.approved
    assert len(updated.ingredients) == 1
    store.delete_recipe(1)
    with pytest.raises(ResourceNotFoundError):
        store.get_recipe(1)


def test_mutations_bump_revision():
    before = store.catalog_revision()
    store.create_product("Thyme", "Herbs")
    assert store.catalog_revision() > before


def test_missing_files_raise_data_load_error(tmp_path):
    store.reset_catalog(tmp_path)
    with pytest.raises(DataLoadError):
        store.list_products()


def test_duplicate_ingredient_pair_is_rejected(tmp_path):
    _write_catalog(tmp_path, "recipe_id,product_id,quantity,unit\n1,1,2,pcs\n1,1,3,pcs\n")
    store.reset_catalog(tmp_path)
    with pytest.raises(DataLoadError):
        store.list_products()


def test_dangling_ingredient_is_dropped(tmp_path):
    _write_catalog(tmp_path, "recipe_id,product_id,quantity,unit\n1,1,2,pcs\n1,42,1,g\n")
    store.reset_catalog(tmp_path)
    omelette = store.get_recipe(1)
    assert [i.product_id for i in omelette.ingredients] == [1]
    custard = store.get_recipe(2)
    assert custard.ingredients == ()
    assert custard.difficulty == "medium"
    assert custard.servings == 2
    assert not custard.approved
    assert not store.get_product(2).is_common
