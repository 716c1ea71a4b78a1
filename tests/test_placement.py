# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import numpy as np
import pytest
from deploygen import Box, Building, DeploymentConfig, DeploymentGenerator, StreamManager
from deploygen import attach_to_closest_site, populate, HexGridSitePlacer
from deploygen.errors import DeployGenError
from deploygen.placement import RandomRoomPositionAllocator, SameRoomPositionAllocator, RandomBoxPositionAllocator


@pytest.fixture
def layout():
    return DeploymentGenerator(DeploymentConfig(n_blocks=2), StreamManager(1, 1)).generate()


def test_random_rooms_without_replacement():
    building = Building(Box(0, 20, 0, 20, 0, 3), 2, 2, 1)
    streams = StreamManager(1, 1)
    alloc = RandomRoomPositionAllocator([building], streams.stream('room'), streams.stream('position'))
    rooms = [alloc.next()[1] for _ in range(4)]
    assert len(set(rooms)) == 4
    # rooms are handed out again once all of them are taken
    assert alloc.next()[1] in rooms


def test_random_room_position_inside_room():
    building = Building(Box(0, 30, 0, 20, 0, 6), 3, 2, 2)
    streams = StreamManager(2, 1)
    alloc = RandomRoomPositionAllocator([building], streams.stream('room'), streams.stream('position'))
    for _ in range(12):
        (x, y, z), (_, (rx, ry, floor)) = alloc.next()
        room = building.room_box(rx, ry, floor)
        assert room.x_min <= x <= room.x_max
        assert room.y_min <= y <= room.y_max
        assert room.z_min <= z <= room.z_max


def test_random_room_needs_buildings():
    streams = StreamManager()
    alloc = RandomRoomPositionAllocator([], streams.stream('room'), streams.stream('position'))
    with pytest.raises(DeployGenError):
        alloc.next()


def test_same_room_cycles_over_references():
    building = Building(Box(0, 20, 0, 20, 0, 3), 2, 2, 1)
    rooms = [(0, (1, 1, 1)), (0, (2, 2, 1))]
    alloc = SameRoomPositionAllocator([building], rooms, StreamManager().stream('position'))
    assert [alloc.next()[1] for _ in range(5)] == [rooms[0], rooms[1], rooms[0], rooms[1], rooms[0]]


def test_random_box_position(fixed_source):
    alloc = RandomBoxPositionAllocator(Box(0, 10, 0, 10, 1.5, 1.5), fixed_source([3.]), fixed_source([4.]),
                                       fixed_source([1.5]))
    assert alloc.next() == (3., 4., 1.5)


def test_attach_to_closest_site():
    sites = HexGridSitePlacer(500., 1).place(3)
    positions = [(240., 10., 1.5), (20., 420., 1.5), (480., 440., 1.5)]
    assert list(attach_to_closest_site(positions, sites)) == [0, 1, 2]
    assert list(attach_to_closest_site(positions, ())) == [-1, -1, -1]
    assert len(attach_to_closest_site(np.zeros((0, 3)), sites)) == 0


def test_populate(layout):
    positions = populate(layout, StreamManager(1, 1))
    assert positions.home_enbs.shape == (layout.n_home_enbs, 3)
    assert positions.home_ues.shape == (layout.n_home_ues, 3)
    assert positions.macro_ues.shape == (layout.n_macro_ues, 3)
    assert len(set(positions.home_enb_rooms)) == layout.n_home_enbs

    for (x, y, z), (b, room) in zip(positions.home_enbs, positions.home_enb_rooms):
        box = layout.buildings[b].room_box(*room)
        assert box.x_min <= x <= box.x_max and box.y_min <= y <= box.y_max and box.z_min <= z <= box.z_max

    # home UEs share the apartment of a HeNB
    for i, (x, y, _) in enumerate(positions.home_ues):
        b, room = positions.home_enb_rooms[i % layout.n_home_enbs]
        box = layout.buildings[b].room_box(*room)
        assert box.x_min <= x <= box.x_max and box.y_min <= y <= box.y_max

    for x, y, z in positions.macro_ues:
        assert layout.area.contains_point(x, y)
        assert z == 1.5
    assert set(positions.macro_ue_sites) <= {0, 1, 2}


def test_populate_is_deterministic(layout):
    assert populate(layout, StreamManager(1, 1)).equals(populate(layout, StreamManager(1, 1)))
    assert not populate(layout, StreamManager(1, 1)).equals(populate(layout, StreamManager(1, 2)))


def test_populate_without_blocks():
    layout = DeploymentGenerator(DeploymentConfig(n_blocks=0)).generate()
    positions = populate(layout, StreamManager())
    assert positions.home_enbs.shape == (0, 3)
    assert positions.home_ues.shape == (0, 3)
    assert positions.macro_ues.shape[0] == layout.n_macro_ues
