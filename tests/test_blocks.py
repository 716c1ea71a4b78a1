# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import itertools
import pytest
from deploygen import Box, FemtocellBlockAllocator, InfeasibleDeploymentError, StreamManager, are_overlapping


def make_allocator(area, x_var, y_var, n_apartments_x=10, n_floors=1):
    return FemtocellBlockAllocator(area, n_apartments_x, n_floors, x_var, y_var)


def test_create_three_blocks():
    area = Box(0, 1000, 0, 1000, 1.5, 1.5)
    streams = StreamManager(1, 1)
    allocator = make_allocator(area, streams.stream('block_x'), streams.stream('block_y'))
    blocks = allocator.create(3)

    assert len(blocks) == 3
    for b in blocks:
        assert b.x_size == pytest.approx(120)
        assert b.y_size == pytest.approx(70)
        assert area.contains(b)
    for a, b in itertools.combinations(blocks, 2):
        assert not are_overlapping(a, b)


def test_block_size_depends_on_apartments():
    allocator = make_allocator(Box(0, 1000, 0, 1000), None, None, n_apartments_x=4)
    assert allocator.x_size == 60
    assert allocator.y_size == 70


def test_overlapping_candidate_is_redrawn(fixed_source):
    # the second candidate touches the first block and is rejected
    x_var = fixed_source([0., 120., 300.])
    y_var = fixed_source([0.])
    allocator = make_allocator(Box(0, 1000, 0, 1000), x_var, y_var)
    blocks = allocator.create(2)
    assert [b.x_min for b in blocks] == [0., 300.]
    assert x_var.calls == 3


def test_abort_after_max_attempts(fixed_source):
    x_var = fixed_source([0.])
    y_var = fixed_source([0.])
    allocator = make_allocator(Box(0, 1000, 0, 1000), x_var, y_var)
    allocator.create_one()

    with pytest.raises(InfeasibleDeploymentError) as e:
        allocator.create_one()
    assert x_var.calls == 1 + FemtocellBlockAllocator.MAX_ATTEMPTS
    assert e.value.attempts == 100
    assert e.value.block_index == 1
    assert 'Too many blocks? Too small an area?' in str(e.value)
    assert len(allocator.blocks) == 1


def test_area_fitting_one_block_aborts_on_second():
    area = Box(0, 120, 0, 70)
    streams = StreamManager(1, 1)
    allocator = make_allocator(area, streams.stream('block_x'), streams.stream('block_y'))
    with pytest.raises(InfeasibleDeploymentError):
        allocator.create(2)


def test_area_smaller_than_block():
    allocator = make_allocator(Box(0, 100, 0, 100), None, None)
    with pytest.raises(InfeasibleDeploymentError) as e:
        allocator.create_one()
    assert e.value.attempts == 0


def test_create_zero_blocks():
    allocator = make_allocator(Box(0, 100, 0, 100), None, None)
    assert allocator.create(0) == []


def test_buildings_of_a_block(fixed_source):
    allocator = make_allocator(Box(0, 1000, 0, 1000), fixed_source([100.]), fixed_source([200.]), n_floors=3)
    allocator.create_one()
    block = allocator.blocks[0]
    first, second = allocator.buildings

    assert first.boundaries == Box(110, 210, 210, 230, 0, 9)
    assert second.boundaries == Box(110, 210, 240, 260, 0, 9)
    for building in allocator.buildings:
        assert block.contains(building.boundaries)
        assert building.n_rooms_x == 10
        assert building.n_rooms_y == 2
        assert building.n_floors == 3
        assert len(building.rooms()) == 60


def test_room_box():
    from deploygen import Building
    building = Building(Box(0, 20, 0, 20, 0, 6), 2, 2, 2)
    assert building.room_box(2, 1, 1) == Box(10, 20, 0, 10, 0, 3)
    assert building.room_box(1, 2, 2) == Box(0, 10, 10, 20, 3, 6)


def test_create_returns_only_new_blocks(fixed_source):
    allocator = make_allocator(Box(0, 1000, 0, 1000), fixed_source([0., 300., 600.]), fixed_source([0.]))
    first = allocator.create(1)
    second = allocator.create(2)
    assert [b.x_min for b in first] == [0.]
    assert [b.x_min for b in second] == [300., 600.]
    assert len(allocator.blocks) == 3
