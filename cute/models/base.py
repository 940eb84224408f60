"""Base model configuration for configuration structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class DerivedModel(BaseModel):
    """Immutable model populated from the attributes of another object.

    Reporter configurations are derived from the run configuration and only
    pick the fields they declare.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)
