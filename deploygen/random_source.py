# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import numbers
import zlib
from abc import ABC, abstractmethod
import numpy as np
from deploygen.errors import ConfigurationError


class RandomSource(ABC):
    @abstractmethod
    def next_uniform(self, low, high) -> float:
        pass


class UniformStream(RandomSource):
    def __init__(self, generator: np.random.Generator) -> None:
        self.generator = generator

    def next_uniform(self, low, high) -> float:
        return low + (high - low) * float(self.generator.random())


class StreamManager:
    """Hands out one independent uniform stream per logical random quantity.

    Streams are keyed by (seed, run, name), so that re-running with the same
    seed and run reproduces every draw, and adding a stream for a new quantity
    does not shift the draws of the existing ones.

    Args:
        seed (int, optional): base seed. Defaults to 1.
        run (int, optional): run index, for independent replications. Defaults to 1.
    """
    def __init__(self, seed=1, run=1) -> None:
        for name, value in (('seed', seed), ('run', run)):
            if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(f'{name}={value!r} must be a non-negative integer')
        self.seed = seed
        self.run = run
        self._streams = {}

    def stream(self, name) -> UniformStream:
        if name not in self._streams:
            key = zlib.crc32(name.encode('utf-8'))
            seq = np.random.SeedSequence(entropy=self.seed, spawn_key=(self.run, key))
            self._streams[name] = UniformStream(np.random.default_rng(seq))
        return self._streams[name]


def shuffle(items, source: RandomSource):
    """In-place Fisher-Yates shuffle drawing from source."""
    for i in range(len(items) - 1, 0, -1):
        j = min(int(source.next_uniform(0, i + 1)), i)
        items[i], items[j] = items[j], items[i]
    return items
