"""Credential value object."""

from pydantic import BaseModel, ConfigDict, Field

from wbglance.logger import mask_secret


class Credential(BaseModel):
    """API key plus the entity (user or organization) it acts for.

    The key is never rendered in full by ``repr`` or ``str``.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., repr=False, description="Service API key")
    entity: str = Field(default="", description="Entity namespace used as a fallback owner")

    @property
    def is_empty(self) -> bool:
        """Whether the API key is blank after trimming."""
        return not self.api_key.strip()

    def __str__(self) -> str:
        return f"Credential(entity={self.entity!r}, api_key={mask_secret(self.api_key)})"
