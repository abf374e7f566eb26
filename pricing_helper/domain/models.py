"""Domain models for the pricing session inputs and per-operation state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PipelineMode(str, Enum):
    BY_IDENTIFIER = "by_identifier"
    BY_FEATURE_SET = "by_feature_set"


class PriceSource(str, Enum):
    """Where the current base price text came from."""

    EMPTY = "empty"
    SEEDED = "seeded"
    EDITED = "edited"


@dataclass
class SharedFlags:
    weekend: bool = False
    holiday: bool = False


@dataclass
class IdentifierInput:
    row_index: str = "0"


@dataclass
class FeatureInput:
    """Raw form values for the feature-based pipeline, as the operator typed them."""

    room_type: str = "Entire home/apt"
    property_type: str = "House"
    accommodates: str = "2"
    bathrooms: str = "1"
    amenities: str = "Wifi,Kitchen,Heating"
    minimum_nights: str = "1"
    instant_bookable: bool = False
    rating: str = "4.8"
    reviews: str = "10"
    superhost: bool = False
    latitude: str = ""
    longitude: str = ""


@dataclass
class OperationState:
    """Loading flag, error slot, and request generation for one operation kind."""

    loading: bool = False
    error: str = ""
    generation: int = 0

    def begin(self) -> int:
        self.generation += 1
        self.loading = True
        self.error = ""
        return self.generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self.generation

    def succeed(self) -> None:
        self.loading = False
        self.error = ""

    def fail(self, message: str) -> None:
        self.loading = False
        self.error = message

    def invalidate(self) -> None:
        """Drop whatever is in flight; its response will be discarded."""
        self.generation += 1
        self.loading = False

