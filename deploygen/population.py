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
import math
from dataclasses import dataclass
from deploygen.config import DeploymentConfig
from deploygen.geometry import Box

logger = logging.getLogger(__name__)

# 2 buildings per block, 2 apartments deep
APARTMENTS_PER_BLOCK_COLUMN = 4


@dataclass(frozen=True)
class Population:
    n_home_enbs: int
    n_home_ues: int
    n_macro_ues: int


def round_half_away(value) -> int:
    magnitude = abs(value)
    rounded = math.floor(magnitude)
    if magnitude - rounded >= 0.5:
        rounded += 1
    return int(math.copysign(rounded, value))


def derive_population(config: DeploymentConfig, area: Box) -> Population:
    """Converts densities and ratios into entity counts.

    Args:
        config (DeploymentConfig): deployment parameters.
        area (Box): macro UE area, see macro_ue_box.

    Returns:
        Population: number of HeNBs, home UEs and macro UEs
    """
    n_home_enbs = round_half_away(APARTMENTS_PER_BLOCK_COLUMN * config.n_apartments_x * config.n_blocks
                                  * config.n_floors * config.home_enb_deployment_ratio
                                  * config.home_enb_activation_ratio)
    logger.debug('n_home_enbs = %d', n_home_enbs)
    n_home_ues = round_half_away(n_home_enbs * config.home_ues_home_enb_ratio)
    logger.debug('n_home_ues = %d', n_home_ues)
    n_macro_ues = round_half_away(area.area * config.macro_ue_density)
    logger.debug('n_macro_ues = %d (density=%g)', n_macro_ues, config.macro_ue_density)
    return Population(n_home_enbs, n_home_ues, n_macro_ues)
