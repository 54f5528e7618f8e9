from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shared.constants import DEFAULT_ROLE, Role


class CurrentUser(BaseModel):
    """Authenticated caller decoded from the bearer JWT."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str = ""
    roles: list[Role] = Field(default_factory=list)

    @property
    def primary_role(self) -> Role:
        return self.roles[0] if self.roles else DEFAULT_ROLE
