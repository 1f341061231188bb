"""Loadable resources and the units that register them under an id and type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from radiance.utils import require_non_null


class ResourceBase(ABC):
    """A resource that can be loaded once its description has been read.

    ``resource_type`` names the kind of resource; ``main_only`` is true when
    the resource must be loaded on the main thread (graphics objects).
    """

    resource_type: ClassVar[str] = ""
    main_only: bool = False

    @abstractmethod
    def load(self) -> None:
        """Load the resource's data."""


@dataclass(frozen=True)
class ResourceUnit:
    """A loaded resource entry: its id, its data and its declared type."""

    resource_id: str
    data: ResourceBase
    resource_type: str

    def __post_init__(self) -> None:
        require_non_null(self.data, "data")