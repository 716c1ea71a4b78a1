# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import logging
from dataclasses import dataclass
from typing import List
from deploygen.geometry import Box, are_overlapping
from deploygen.errors import InfeasibleDeploymentError
from deploygen.random_source import RandomSource

logger = logging.getLogger(__name__)

# apartments ("rooms") are 10 m wide, buildings are two apartments deep
APARTMENT_SIZE = 10.
BLOCK_MARGIN = 10.
BLOCK_Y_SIZE = 70.
FLOOR_HEIGHT = 3.
N_ROOMS_Y = 2
BUILDINGS_PER_BLOCK = 2


@dataclass(frozen=True)
class Building:
    boundaries: Box
    n_rooms_x: int
    n_rooms_y: int
    n_floors: int

    def room_box(self, room_x, room_y, floor):
        """Boundaries of a room. Indices are 1-based, as in the building model."""
        b = self.boundaries
        dx = b.x_size / self.n_rooms_x
        dy = b.y_size / self.n_rooms_y
        dz = b.z_size / self.n_floors
        return Box(b.x_min + dx * (room_x - 1), b.x_min + dx * room_x,
                   b.y_min + dy * (room_y - 1), b.y_min + dy * room_y,
                   b.z_min + dz * (floor - 1), b.z_min + dz * floor)

    def rooms(self):
        return [(x, y, f)
                for f in range(1, self.n_floors + 1)
                for y in range(1, self.n_rooms_y + 1)
                for x in range(1, self.n_rooms_x + 1)]


def block_buildings(block: Box, n_apartments_x, n_floors) -> List[Building]:
    """Lays out the two buildings of a block on a one-column grid.

    Each building is n_apartments_x x 2 apartments, separated by a 10 m street
    and inset 10 m from the block boundaries.
    """
    length_x = APARTMENT_SIZE * n_apartments_x
    length_y = APARTMENT_SIZE * N_ROOMS_Y
    height = FLOOR_HEIGHT * n_floors
    min_x = block.x_min + BLOCK_MARGIN
    min_y = block.y_min + BLOCK_MARGIN

    buildings = []
    for i in range(BUILDINGS_PER_BLOCK):
        y = min_y + i * (length_y + BLOCK_MARGIN)
        buildings.append(Building(Box(min_x, min_x + length_x, y, y + length_y, 0., height),
                                  n_apartments_x, N_ROOMS_Y, n_floors))
    return buildings


class FemtocellBlockAllocator:
    """Installs pairs of apartment buildings in an area, as in the dual stripe model.

    Candidate positions are drawn uniformly and rejected while they overlap a
    previously accepted block.

    Args:
        area (Box): the total area.
        n_apartments_x (int): number of apartments in the X direction.
        n_floors (int): number of floors.
        x_var (RandomSource): stream for the block x positions.
        y_var (RandomSource): stream for the block y positions.
    """
    MAX_ATTEMPTS = 100

    def __init__(self, area: Box, n_apartments_x, n_floors, x_var: RandomSource, y_var: RandomSource) -> None:
        self.area = area
        self.n_apartments_x = n_apartments_x
        self.n_floors = n_floors
        self.x_size = n_apartments_x * APARTMENT_SIZE + 2 * BLOCK_MARGIN
        self.y_size = BLOCK_Y_SIZE
        self.x_var = x_var
        self.y_var = y_var

        self.blocks: List[Box] = []
        self.buildings: List[Building] = []

    def create(self, n):
        """Creates n blocks and returns them. All accepted blocks stay in self.blocks."""
        return [self.create_one() for _ in range(n)]

    def create_one(self) -> Box:
        if self.area.x_size < self.x_size or self.area.y_size < self.y_size:
            raise InfeasibleDeploymentError(0, len(self.blocks), self.area)

        for _ in range(self.MAX_ATTEMPTS):
            x_min = self.x_var.next_uniform(self.area.x_min, self.area.x_max - self.x_size)
            y_min = self.y_var.next_uniform(self.area.y_min, self.area.y_max - self.y_size)
            box = Box(x_min, x_min + self.x_size, y_min, y_min + self.y_size,
                      self.area.z_min, self.area.z_max)
            if not self.overlaps_with_any_previous(box):
                break
        else:
            raise InfeasibleDeploymentError(self.MAX_ATTEMPTS, len(self.blocks), self.area)

        logger.debug('allocated non overlapping block %s', box)
        self.blocks.append(box)
        self.buildings.extend(block_buildings(box, self.n_apartments_x, self.n_floors))
        return box

    def overlaps_with_any_previous(self, box: Box) -> bool:
        return any(are_overlapping(previous, box) for previous in self.blocks)
