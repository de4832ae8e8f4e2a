"""
Reads the @model types out of a GraphQL schema (SDL)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from graphql import (
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    TypeNode,
    parse,
)

SCALAR_TYPES = frozenset(
    [
        "ID",
        "String",
        "Int",
        "Float",
        "Boolean",
        "AWSDate",
        "AWSTime",
        "AWSDateTime",
        "AWSTimestamp",
        "AWSEmail",
        "AWSJSON",
        "AWSURL",
        "AWSPhone",
        "AWSIPAddress",
    ]
)
# fields managed by the API, never part of a form
READ_ONLY_FIELDS = frozenset(["id", "createdAt", "updatedAt", "owner"])

MODEL_DIRECTIVE = "model"


class ModelSchemaError(Exception):
    pass


@dataclass(frozen=True)
class ModelField:
    name: str
    type: str
    required: bool = False
    is_list: bool = False


@dataclass(frozen=True)
class ModelDefinition:
    name: str
    fields: Tuple[ModelField, ...]
    enums: Dict[str, Tuple[str, ...]] = field(default_factory=dict, compare=False)

    def form_fields(self) -> List[ModelField]:
        """
        Fields a user can fill in: scalars and enums, without the fields managed by the API
        """
        return [
            model_field
            for model_field in self.fields
            if model_field.name not in READ_ONLY_FIELDS
            and (model_field.type in SCALAR_TYPES or model_field.type in self.enums)
        ]


def _named_type(type_node: TypeNode) -> str:
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    return type_node.name.value  # type: ignore[attr-defined]


def _to_model_field(definition: FieldDefinitionNode) -> ModelField:
    # the outer wrapper decides whether the field itself is required, ex: [String!]! and [String!]
    required = isinstance(definition.type, NonNullTypeNode)
    outer = definition.type.type if required else definition.type  # type: ignore[attr-defined]
    return ModelField(
        name=definition.name.value,
        type=_named_type(definition.type),
        required=required,
        is_list=isinstance(outer, ListTypeNode),
    )


def parse_models(schema: str) -> List[ModelDefinition]:
    """
    Parses the types annotated with @model

    Parameters
    ----------
    schema: str
        GraphQL schema in SDL form. The AppSync scalars and directives do not need to be declared, the
        document is only parsed, not validated.

    Returns
    -------
    List[ModelDefinition]
        Models in the order they are declared

    Raises
    ------
    ModelSchemaError
        When the schema is not valid SDL
    """
    if not schema.strip():
        return []
    try:
        document = parse(schema, no_location=True)
    except GraphQLSyntaxError as ex:
        raise ModelSchemaError(ex.message) from ex

    enums: Dict[str, Tuple[str, ...]] = {}
    model_types: List[ObjectTypeDefinitionNode] = []
    for definition in document.definitions:
        if isinstance(definition, EnumTypeDefinitionNode):
            enums[definition.name.value] = tuple(value.name.value for value in definition.values or ())
        elif isinstance(definition, ObjectTypeDefinitionNode) and any(
            directive.name.value == MODEL_DIRECTIVE for directive in definition.directives or ()
        ):
            model_types.append(definition)

    return [
        ModelDefinition(
            name=model_type.name.value,
            fields=tuple(_to_model_field(definition) for definition in model_type.fields or ()),
            enums=enums,
        )
        for model_type in model_types
    ]
