"""Tests for resolving recipes from ``module:function`` strings."""

import os.path

import pytest

from xmldoc_emit.api_reference import write_api_reference
from xmldoc_emit.errors import LoadFailure
from xmldoc_emit.load_config import DEFAULT_RECIPE
from xmldoc_emit.load_recipe import load_recipe


def test_default_recipe_resolves() -> None:
    assert load_recipe(DEFAULT_RECIPE) is write_api_reference


def test_dotted_attribute() -> None:
    assert load_recipe("os:path.join") is os.path.join


@pytest.mark.parametrize(
    ("recipe_name", "message"),
    [
        ("no_separator", "module:function"),
        (":missing_module", "module:function"),
        ("xmldoc_emit.api_reference:", "module:function"),
        ("xmldoc_emit_no_such_module:f", "cannot import"),
        ("xmldoc_emit.api_reference:nope", "no attribute"),
        ("os:sep", "not callable"),
    ],
)
def test_bad_recipes(recipe_name: str, message: str) -> None:
    with pytest.raises(LoadFailure, match=message):
        load_recipe(recipe_name)
