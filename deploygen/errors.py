# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>


class DeployGenError(Exception):
    pass


class ConfigurationError(DeployGenError, ValueError):
    """Raised when a deployment parameter is out of its valid range."""


class InfeasibleDeploymentError(DeployGenError, RuntimeError):
    """Raised when apartment blocks cannot be packed into the deployment area.

    Generation is all-or-nothing: once raised, the partially placed layout is
    discarded.

    Args:
        attempts (int): number of rejected candidate positions.
        block_index (int): index of the block that could not be placed.
        area (Box): area in which the block was being placed.
    """
    def __init__(self, attempts, block_index, area):
        self.attempts = attempts
        self.block_index = block_index
        self.area = area
        super().__init__(
            f'Too many failed attempts to position apartment block {block_index} '
            f'({attempts} attempts in {area}). Too many blocks? Too small an area?'
        )
