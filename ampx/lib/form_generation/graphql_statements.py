"""
Renders the GraphQL query and mutation documents used by the generated forms
"""

from typing import Any, Dict, Iterable, List

from ampx.lib.form_generation.model_schema import SCALAR_TYPES, ModelDefinition
from ampx.lib.form_generation.template_renderer import render_template

GENERATED_HEADER = "/* eslint-disable */\n// this is an auto generated file. This will be overwritten\n"

MUTATION_OPERATIONS = ("create", "update", "delete")


def _selection_set(model: ModelDefinition) -> List[str]:
    return [f.name for f in model.fields if f.type in SCALAR_TYPES or f.type in model.enums]


def _models_data(models: Iterable[ModelDefinition]) -> List[Dict[str, Any]]:
    return [{"name": model.name, "selection": _selection_set(model)} for model in models]


def render_queries(models: Iterable[ModelDefinition]) -> str:
    return render_template("queries.js.mustache", {"models": _models_data(models)})


def render_mutations(models: Iterable[ModelDefinition]) -> str:
    operations = [{"operation": operation, "type_prefix": operation.capitalize()} for operation in MUTATION_OPERATIONS]
    return render_template("mutations.js.mustache", {"models": _models_data(models), "operations": operations})


def mutation_name(operation: str, model: ModelDefinition) -> str:
    return f"{operation}{model.name}"


def query_name(model: ModelDefinition) -> str:
    return f"get{model.name}"
