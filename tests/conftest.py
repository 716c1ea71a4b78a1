# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import matplotlib
import pytest
from deploygen import RandomSource

matplotlib.use('Agg')


class FixedSource(RandomSource):
    """Replays a fixed sequence of values, repeating the last one, and counts the draws."""
    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next_uniform(self, low, high):
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_source():
    return FixedSource
