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
from typing import List, Tuple
import numpy as np
from scipy.spatial import cKDTree
from deploygen.blocks import Building
from deploygen.errors import DeployGenError
from deploygen.geometry import Box
from deploygen.random_source import RandomSource, StreamManager, shuffle

logger = logging.getLogger(__name__)

Room = Tuple[int, Tuple[int, int, int]]


def uniform_in_box(box: Box, x_var: RandomSource, y_var: RandomSource, z_var: RandomSource):
    return (x_var.next_uniform(box.x_min, box.x_max),
            y_var.next_uniform(box.y_min, box.y_max),
            z_var.next_uniform(box.z_min, box.z_max))


class RandomRoomPositionAllocator:
    """Places nodes in randomly chosen rooms, one node per room until every room is taken.

    Args:
        buildings (list): buildings whose rooms are handed out.
        room_var (RandomSource): stream used to shuffle the rooms.
        position_var (RandomSource): stream used for the position inside a room.
    """
    def __init__(self, buildings: List[Building], room_var: RandomSource, position_var: RandomSource) -> None:
        self.buildings = list(buildings)
        self.room_var = room_var
        self.position_var = position_var
        self._free_rooms: List[Room] = []

    def _refill(self):
        rooms = [(i, room) for i, b in enumerate(self.buildings) for room in b.rooms()]
        if not rooms:
            raise DeployGenError('No room available: the deployment has no buildings.')
        self._free_rooms = shuffle(rooms, self.room_var)

    def next(self):
        if not self._free_rooms:
            self._refill()
        room = self._free_rooms.pop(0)
        building_index, (room_x, room_y, floor) = room
        box = self.buildings[building_index].room_box(room_x, room_y, floor)
        position = uniform_in_box(box, self.position_var, self.position_var, self.position_var)
        return position, room


class SameRoomPositionAllocator:
    """Places each node in the room of a reference node, cycling over the references."""
    def __init__(self, buildings: List[Building], rooms: List[Room], position_var: RandomSource) -> None:
        if not rooms:
            raise DeployGenError('No reference node to share a room with.')
        self.buildings = list(buildings)
        self.rooms = list(rooms)
        self.position_var = position_var
        self._next_index = 0

    def next(self):
        room = self.rooms[self._next_index % len(self.rooms)]
        self._next_index += 1
        building_index, (room_x, room_y, floor) = room
        box = self.buildings[building_index].room_box(room_x, room_y, floor)
        return uniform_in_box(box, self.position_var, self.position_var, self.position_var), room


class RandomBoxPositionAllocator:
    def __init__(self, box: Box, x_var: RandomSource, y_var: RandomSource, z_var: RandomSource) -> None:
        self.box = box
        self.x_var = x_var
        self.y_var = y_var
        self.z_var = z_var

    def next(self):
        return uniform_in_box(self.box, self.x_var, self.y_var, self.z_var)


def attach_to_closest_site(positions, sites):
    """Index of the closest macro site (on the x-y plane) for each position, -1 if there is no site."""
    positions = np.asarray(positions, dtype=float).reshape((-1, 3))
    if len(sites) == 0:
        return np.full(len(positions), -1, dtype=int)
    if len(positions) == 0:
        return np.zeros(0, dtype=int)
    tree = cKDTree(np.array([[s.x, s.y] for s in sites]))
    _, idx = tree.query(positions[:, :2])
    return np.array([sites[i].index for i in np.atleast_1d(idx)], dtype=int)


@dataclass(eq=False)
class EntityPositions:
    home_enbs: np.ndarray
    home_enb_rooms: list
    home_ues: np.ndarray
    macro_ues: np.ndarray
    macro_ue_sites: np.ndarray

    def equals(self, other: 'EntityPositions') -> bool:
        return (np.array_equal(self.home_enbs, other.home_enbs)
                and self.home_enb_rooms == other.home_enb_rooms
                and np.array_equal(self.home_ues, other.home_ues)
                and np.array_equal(self.macro_ues, other.macro_ues)
                and np.array_equal(self.macro_ue_sites, other.macro_ue_sites))


def _as_positions(points):
    return np.array(points, dtype=float).reshape((-1, 3))


def populate(layout, streams: StreamManager) -> EntityPositions:
    """Positions HeNBs and home UEs in the apartments, and macro UEs in the macro area.

    HeNBs go to random apartments, home UEs to the apartment of a HeNB, and
    macro UEs are spread uniformly over the macro UE box and attached to the
    closest macro site.
    """
    home_enbs = []
    home_enb_rooms = []
    if layout.n_home_enbs:
        room_alloc = RandomRoomPositionAllocator(layout.buildings, streams.stream('home_enb_room'),
                                                 streams.stream('home_enb_position'))
        for _ in range(layout.n_home_enbs):
            position, room = room_alloc.next()
            home_enbs.append(position)
            home_enb_rooms.append(room)

    home_ues = []
    if layout.n_home_ues:
        same_room_alloc = SameRoomPositionAllocator(layout.buildings, home_enb_rooms,
                                                    streams.stream('home_ue_position'))
        home_ues = [same_room_alloc.next()[0] for _ in range(layout.n_home_ues)]

    logger.debug('randomly allocating macro UEs in %s', layout.area)
    box_alloc = RandomBoxPositionAllocator(layout.area, streams.stream('macro_ue_x'),
                                           streams.stream('macro_ue_y'), streams.stream('macro_ue_z'))
    macro_ues = _as_positions([box_alloc.next() for _ in range(layout.n_macro_ues)])

    return EntityPositions(
        home_enbs=_as_positions(home_enbs),
        home_enb_rooms=home_enb_rooms,
        home_ues=_as_positions(home_ues),
        macro_ues=macro_ues,
        macro_ue_sites=attach_to_closest_site(macro_ues, layout.sites),
    )
