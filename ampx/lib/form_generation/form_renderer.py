"""
Renders React create and update forms for a model
"""

from typing import Any, Dict

from ampx.lib.form_generation.graphql_statements import mutation_name, query_name
from ampx.lib.form_generation.model_schema import ModelDefinition, ModelField
from ampx.lib.form_generation.template_renderer import render_template

FORM_TEMPLATE = "form.jsx.mustache"

NUMBER_TYPES = ("Int", "Float", "AWSTimestamp")
INPUT_TYPES = {
    "AWSDate": "date",
    "AWSTime": "time",
    "AWSDateTime": "datetime-local",
    "AWSEmail": "email",
    "AWSURL": "url",
    "AWSPhone": "tel",
}


def _label(model_field: ModelField) -> str:
    words = []
    current = ""
    for char in model_field.name:
        if char.isupper() and current:
            words.append(current)
            current = char
        else:
            current += char
    words.append(current)
    label = " ".join(words)
    return label[:1].upper() + label[1:]


def _setter(model_field: ModelField) -> str:
    return f"set{model_field.name[:1].upper()}{model_field.name[1:]}"


def _initial_value(model_field: ModelField) -> str:
    if model_field.type == "Boolean":
        return "false"
    if model_field.is_list:
        return "[]"
    return '""'




def _input_type(model_field: ModelField) -> str:
    if model_field.type in INPUT_TYPES:
        return f' type="{INPUT_TYPES[model_field.type]}"'
    if model_field.type in NUMBER_TYPES:
        return ' type="number" step="any"'
    return ""


def _input_value(model_field: ModelField) -> str:
    if model_field.type in ("Int", "AWSTimestamp"):
        return f'{model_field.name} === "" ? null : parseInt({model_field.name})'
    if model_field.type == "Float":
        return f'{model_field.name} === "" ? null : Number({model_field.name})'
    if model_field.type == "Boolean":
        return model_field.name
    return f"{model_field.name} || null"


def _field_data(model: ModelDefinition, model_field: ModelField) -> Dict[str, Any]:
    """
    Template values of one field, including which widget renders it
    """
    is_switch = model_field.type == "Boolean"
    is_select = model_field.type in model.enums
    return {
        "name": model_field.name,
        "label": _label(model_field),
        "setter": _setter(model_field),
        "required": str(model_field.required).lower(),
        # a switch always holds a value
        "check_required": model_field.required and not is_switch,
        "initial_value": _initial_value(model_field),
        "input_value": _input_value(model_field),
        "input_type": _input_type(model_field),
        "is_switch": is_switch,
        "is_select": is_select,
        "is_text": not (is_switch or is_select),
        "options": list(model.enums.get(model_field.type, ())),
    }


def render_form(model: ModelDefinition, is_update: bool) -> str:
    """
    Renders the source of <Model>CreateForm.jsx or <Model>UpdateForm.jsx

    The update form takes either `id` or `<model>` props and loads the record to pre-fill the fields.
    """
    data = {
        "component": f"{model.name}{'UpdateForm' if is_update else 'CreateForm'}",
        "is_update": is_update,
        "model_prop": model.name[:1].lower() + model.name[1:],
        "mutation": mutation_name("update" if is_update else "create", model),
        "mutation_input": "{ id: record.id, ...input }" if is_update else "input",
        "query": query_name(model),
        "reset_label": "Reset" if is_update else "Clear",
        "fields": [_field_data(model, model_field) for model_field in model.form_fields()],
    }
    return render_template(FORM_TEMPLATE, data)
