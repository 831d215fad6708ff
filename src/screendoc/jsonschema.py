"""JSON Schema of canonical documents.

The schema describes documents in their canonical (mapping-keyed) shape
and is intended for editor completion and validation of authored files.
"""

from functools import cache
from json import dumps
from typing import TYPE_CHECKING

from pydantic.json_schema import GenerateJsonSchema, JsonSchemaValue

from screendoc.schema import Document

if TYPE_CHECKING:
    from pydantic.json_schema import JsonSchemaMode
    from pydantic_core import CoreSchema


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for screen documents.

    Annotates the root schema with the document title, description
    and the JSON Schema dialect.
    """

    def generate(self, schema: 'CoreSchema',
                 mode: 'JsonSchemaMode' = 'validation') -> JsonSchemaValue:
        """Generate the root JSON Schema.

        Args:
            schema: Pydantic core schema of the document model.
            mode: JSON Schema generation mode.

        Returns:
            The generated JSON Schema.
        """
        json_schema = super().generate(schema, mode=mode)

        return {
            **json_schema,
            'title': 'screendoc',
            'description': 'JSON Schema for screen documents',
            '$schema': self.schema_dialect,
        }


@cache
def make_schema(indent: int | str | None = 4) -> str:
    """Generate the serialized JSON Schema of screen documents.

    Args:
        indent: Indentation level used for JSON formatting.

    Returns:
        Serialized JSON Schema string.
    """
    return dumps(
        Document.model_json_schema(schema_generator=SchemaGenerator),
        ensure_ascii=False,
        sort_keys=True,
        indent=indent,
    )
