# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import pandas as pd
import numpy as np
from tqdm import tqdm
from deploygen.errors import InfeasibleDeploymentError
from deploygen.random_source import StreamManager
from deploygen.topo_generation import DeploymentGenerator


def generate_runs(config, seed=1, runs=range(1, 11), progress=True):
    layouts = {}
    for run in tqdm(runs, disable=not progress):
        layouts[run] = DeploymentGenerator(config, StreamManager(seed, run)).generate()
    return layouts


def _coordinates(layout):
    sites = np.array([(s.x, s.y, s.z) for s in layout.sites], dtype=float).reshape((-1, 3))
    blocks = np.array([(b.x_min, b.x_max, b.y_min, b.y_max) for b in layout.blocks], dtype=float).reshape((-1, 4))
    return sites, blocks


def layouts_equal(a, b, atol=0.):
    """Compares two layouts, allowing site and block coordinates to differ by up to atol metres.

    Configuration, area and derived counts must match exactly.
    """
    if a.config != b.config or a.area != b.area or a.population != b.population:
        return False
    sites_a, blocks_a = _coordinates(a)
    sites_b, blocks_b = _coordinates(b)
    if sites_a.shape != sites_b.shape or blocks_a.shape != blocks_b.shape:
        return False
    return (np.allclose(sites_a, sites_b, rtol=0., atol=atol)
            and np.allclose(blocks_a, blocks_b, rtol=0., atol=atol))


def summarize_runs(layouts):
    rows = []
    for run, layout in layouts.items():
        block_area = sum(b.area for b in layout.blocks)
        rows.append({
            'run': run,
            'n_macro_sites': len(layout.sites),
            'n_blocks': len(layout.blocks),
            'n_home_enbs': layout.n_home_enbs,
            'n_home_ues': layout.n_home_ues,
            'n_macro_ues': layout.n_macro_ues,
            'area': layout.area.area,
            'block_coverage': block_area / layout.area.area if layout.area.area else np.nan,
            'block_x_mean': np.mean([b.x_min for b in layout.blocks]) if layout.blocks else np.nan,
            'block_y_mean': np.mean([b.y_min for b in layout.blocks]) if layout.blocks else np.nan,
        })
    return pd.DataFrame(rows).set_index('run')


def feasibility_rate(config, seed=1, runs=range(1, 11), progress=True):
    """Fraction of runs for which all the blocks of config could be placed."""
    runs = list(runs)
    success = 0
    for run in tqdm(runs, disable=not progress):
        try:
            DeploymentGenerator(config, StreamManager(seed, run)).generate()
        except InfeasibleDeploymentError:
            continue
        success += 1
    return success / len(runs) if runs else np.nan
