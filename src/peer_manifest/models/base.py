"""Base Pydantic model configuration for manifest models.

All manifest models inherit from ManifestBaseModel to ensure consistent behavior:
- Immutability (frozen=True) so a loaded manifest can be shared across threads
- Unknown fields ignored (extra="ignore") so peers can publish additions
- Flexible field naming (populate_by_name=True) for the hyphenated wire aliases
"""

from pydantic import BaseModel, ConfigDict


class ManifestBaseModel(BaseModel):
    """Base model for all manifest entities.

    Example:
        >>> from pydantic import Field
        >>> class Entry(ManifestBaseModel):
        ...     public_key: str = Field(alias="public-key")
        >>>
        >>> Entry.model_validate({"public-key": "pem"}).public_key
        'pem'
        >>> Entry(public_key="pem").public_key
        'pem'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )
