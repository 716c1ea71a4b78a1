# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

from deploygen import DeploymentConfig, StreamManager, DeploymentGenerator, populate, write_gnuplot_files
from deploygen.export import building_lines, enb_lines, ue_lines


def make_scenario(n_blocks=2):
    streams = StreamManager(1, 1)
    layout = DeploymentGenerator(DeploymentConfig(n_blocks=n_blocks), streams).generate()
    return layout, populate(layout, streams)


def test_building_lines():
    layout, _ = make_scenario()
    lines = building_lines(layout)
    assert len(lines) == 4
    assert lines[0].startswith('set object 1 rect from ')
    assert lines[-1].endswith('front fs empty ')


def test_enb_lines():
    layout, positions = make_scenario()
    lines = enb_lines(layout, positions)
    assert len(lines) == layout.n_macro_enbs + layout.n_home_enbs
    # HeNBs are numbered after the macro sectors
    assert lines[0].startswith(f'set label "{layout.n_macro_enbs + 1}" at ')
    assert lines[-1].startswith(f'set label "{layout.n_macro_enbs}" at ')


def test_ue_lines():
    layout, positions = make_scenario()
    lines = ue_lines(positions)
    assert len(lines) == layout.n_home_ues + layout.n_macro_ues
    assert lines[0].startswith('set label "1" at ')
    assert 'textcolor rgb "grey"' in lines[0]


def test_write_gnuplot_files(tmp_path):
    layout, positions = make_scenario(n_blocks=1)
    paths = write_gnuplot_files(layout, positions, tmp_path / 'out')
    assert [p.name for p in paths] == ['buildings.txt', 'enbs.txt', 'ues.txt']
    assert len((tmp_path / 'out' / 'buildings.txt').read_text().splitlines()) == 2
