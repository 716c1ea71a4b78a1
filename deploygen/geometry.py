# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

from dataclasses import dataclass
from shapely import box as shapely_box


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in metres. The z-range may be flat."""
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    z_min: float = 0.
    z_max: float = 0.

    def __post_init__(self):
        if self.x_min > self.x_max or self.y_min > self.y_max or self.z_min > self.z_max:
            raise ValueError(f'Inverted box boundaries: {self}')

    def __str__(self):
        return f'{self.x_min}|{self.x_max}|{self.y_min}|{self.y_max}|{self.z_min}|{self.z_max}'

    @property
    def x_size(self):
        return self.x_max - self.x_min

    @property
    def y_size(self):
        return self.y_max - self.y_min

    @property
    def z_size(self):
        return self.z_max - self.z_min

    @property
    def area(self):
        return self.x_size * self.y_size

    def contains(self, other: 'Box') -> bool:
        return (self.x_min <= other.x_min and other.x_max <= self.x_max
                and self.y_min <= other.y_min and other.y_max <= self.y_max)

    def contains_point(self, x, y) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def to_polygon(self):
        return shapely_box(self.x_min, self.y_min, self.x_max, self.y_max)


def are_overlapping(a: Box, b: Box) -> bool:
    """Check if two boxes overlap on the x-y plane. Touching boxes overlap."""
    return not ((a.x_min > b.x_max) or (b.x_min > a.x_max) or (a.y_min > b.y_max) or (b.y_min > a.y_max))
