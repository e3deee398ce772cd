"""Load a conversion recipe: a pre-built ``recipe(ctx, config)`` callable."""

import importlib
import logging
from collections.abc import Callable
from typing import Any

from xmldoc_emit.errors import LoadFailure

logger = logging.getLogger(__name__)

Recipe = Callable[[Any, dict[str, Any]], Any]


def load_recipe(recipe_name: str) -> Recipe:
    """Resolve ``package.module:function`` to a callable."""
    module_name, sep, attr = recipe_name.partition(":")
    if not sep or not module_name or not attr:
        raise LoadFailure(recipe_name, "recipe must be given as 'module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise LoadFailure(recipe_name, f"cannot import {module_name}: {exc}") from exc

    recipe = module
    for part in attr.split("."):
        recipe = getattr(recipe, part, None)
        if recipe is None:
            raise LoadFailure(recipe_name, f"{module_name} has no attribute {attr}")
    if not callable(recipe):
        raise LoadFailure(recipe_name, f"{attr} is not callable")
    logger.debug("Loaded recipe %s", recipe_name)
    return recipe
