# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

from .errors import DeployGenError, ConfigurationError, InfeasibleDeploymentError
from .geometry import Box, are_overlapping
from .config import DeploymentConfig
from .random_source import RandomSource, UniformStream, StreamManager
from .blocks import Building, FemtocellBlockAllocator
from .population import Population, derive_population, round_half_away
from .topo_generation import Site, Sector, HexGridSitePlacer, DeploymentLayout, DeploymentGenerator
from .topo_generation import macro_ue_box, macro_grid_rows, generate_deployment
from .placement import EntityPositions, populate, attach_to_closest_site
from .coverage_shapes import SiteCoverage, RemGrid
from .export import write_gnuplot_files
from .analysis import generate_runs, summarize_runs, layouts_equal, feasibility_rate
