"""Work center entity: a station that work orders are scheduled on."""

from pydantic import Field

from workboard.domain.shared.base import Entity


class WorkCenter(Entity):
    """A named production resource shown as one row on the board."""

    name: str = Field(min_length=1)
