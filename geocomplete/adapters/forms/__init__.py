"""Form adapters - Implementations of the form ports."""

from .schema import DictFormState, MappingRecord, SchemaFieldResolver

__all__ = ["SchemaFieldResolver", "MappingRecord", "DictFormState"]
