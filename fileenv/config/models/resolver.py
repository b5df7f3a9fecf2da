"""Resolver configuration models."""

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SUFFIX = "_FILE"


class ResolverConfig(BaseModel):
    """Configuration for the file-backed value resolver.

    The suffix is fixed when the resolver is built and is never read
    from the environment.
    """

    model_config = ConfigDict(frozen=True)

    suffix: str = Field(
        default=DEFAULT_SUFFIX,
        min_length=1,
        description="Key suffix marking a value as a file path",
    )
    case_sensitive: bool = Field(
        default=False,
        description="Match the suffix case-sensitively",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of referenced files",
    )

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value
