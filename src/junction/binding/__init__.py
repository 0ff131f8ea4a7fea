"""Body binding: named parameters and flat dataclass records."""

from junction.binding.handlers import body_handler, json_handler, parameters_handler, struct_handler
from junction.binding.parameters import bind_parameters, bind_values
from junction.binding.params import (
    Parameter,
    ParameterKind,
    custom_parameter,
    int_parameter,
    string_parameter,
)
from junction.binding.structs import FieldKind, FieldSpec, StructBinder, describe, is_record_type

__all__ = [
    "FieldKind",
    "FieldSpec",
    "Parameter",
    "ParameterKind",
    "StructBinder",
    "bind_parameters",
    "bind_values",
    "body_handler",
    "custom_parameter",
    "describe",
    "int_parameter",
    "is_record_type",
    "json_handler",
    "parameters_handler",
    "string_parameter",
    "struct_handler",
]
