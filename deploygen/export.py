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
from pathlib import Path
from deploygen.placement import EntityPositions
from deploygen.topo_generation import DeploymentLayout

logger = logging.getLogger(__name__)

BUILDINGS_FILE = 'buildings.txt'
ENBS_FILE = 'enbs.txt'
UES_FILE = 'ues.txt'


def building_lines(layout: DeploymentLayout):
    lines = []
    for index, building in enumerate(layout.buildings, start=1):
        b = building.boundaries
        lines.append(f'set object {index} rect from {b.x_min:g},{b.y_min:g} to {b.x_max:g},{b.y_max:g} front fs empty ')
    return lines


def enb_lines(layout: DeploymentLayout, positions: EntityPositions):
    """Labels of all eNBs. Macro sectors get the first cell ids, HeNBs the following ones."""
    n_macro = layout.n_macro_enbs
    labels = [(n_macro + i + 1, x, y) for i, (x, y, _) in enumerate(positions.home_enbs)]
    labels += [(s.cell_index + 1, s.x, s.y) for s in layout.sectors]
    return [f'set label "{cell_id}" at {x:g},{y:g} left font "Helvetica,4" textcolor rgb "white" '
            f'front  point pt 2 ps 0.3 lc rgb "white" offset 0,0'
            for cell_id, x, y in labels]


def ue_lines(positions: EntityPositions):
    """Labels of all UEs. Home UEs get the first IMSIs, macro UEs the following ones."""
    ues = list(positions.home_ues) + list(positions.macro_ues)
    return [f'set label "{imsi}" at {x:g},{y:g} left font "Helvetica,4" textcolor rgb "grey" '
            f'front point pt 1 ps 0.3 lc rgb "grey" offset 0,0'
            for imsi, (x, y, _) in enumerate(ues, start=1)]


def write_gnuplot_files(layout: DeploymentLayout, positions: EntityPositions, directory='.'):
    """Writes buildings.txt, enbs.txt and ues.txt, to be loaded by gnuplot along with a REM.

    Returns:
        list: paths of the written files
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    contents = {
        BUILDINGS_FILE: building_lines(layout),
        ENBS_FILE: enb_lines(layout, positions),
        UES_FILE: ue_lines(positions),
    }
    paths = []
    for name, lines in contents.items():
        path = directory / name
        with open(path, 'w') as f:
            f.writelines(line + '\n' for line in lines)
        logger.info('Wrote %d entries to %s', len(lines), path)
        paths.append(path)
    return paths
