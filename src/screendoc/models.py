"""Base Pydantic models for document elements.

This module defines the foundational model classes used by all canonical
document structures and by runtime settings. Canonical elements are
immutable so that a parsed document can be shared by rendering and
lookup collaborators without defensive copies.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all canonical document elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation, so
          a document behaves as a value owned by its caller.
        - Tolerant input: unknown attributes are dropped. The structural
          validator is responsible for reporting problems; canonical
          models only keep the attributes meaningful for each element.

    All canonical models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        coerce_numbers_to_str=True,
    )


class DescribedMixin(SchemaModel):
    """Mixin providing an optional human-readable description."""

    description: str | None = Field(
        default=None,
        title='Description',
        description='Detailed human-readable description of the element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for pipeline settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation,
          which keeps every parse a pure function of its input and settings.
        - Tolerant schema handling: unknown or extra variables are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
