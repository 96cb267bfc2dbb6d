"""Option schema loading and lookup for devenvls."""
from .schema import (
    OptionLeaf,
    OptionNode,
    OptionSchemaError,
    OptionSchemaIndex,
    build_schema,
)

__all__ = [
    'OptionLeaf',
    'OptionNode',
    'OptionSchemaError',
    'OptionSchemaIndex',
    'build_schema',
]
