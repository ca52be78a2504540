from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class PlaneRegion:
    """
    Rectangle of the complex plane covered by the image. `upper_left` maps to
    pixel (0, 0); the imaginary part decreases downwards.
    """

    upper_left: complex
    lower_right: complex


@dataclass(frozen=True)
class RenderConfig:
    dimensions: ImageDimensions
    region: PlaneRegion
    max_iterations: int
    worker_count: int
