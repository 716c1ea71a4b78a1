# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import json
import numbers
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from deploygen.errors import ConfigurationError


@dataclass(frozen=True)
class DeploymentConfig:
    """Parameters of a dual-stripe deployment, after 3GPP R4-092042 section 4.2.1.

    Args:
        n_blocks (int, optional): number of femtocell blocks. Defaults to 1.
        n_apartments_x (int, optional): number of apartments along the X axis in a block. Defaults to 10.
        n_floors (int, optional): number of floors. Defaults to 1.
        n_macro_enb_sites (int, optional): number of 3-sector macro sites. Defaults to 3.
        n_macro_enb_sites_x (int, optional): (minimum) number of sites along the X axis of the hex grid. Defaults to 1.
        inter_site_distance (float, optional): distance between two nearby macro sites in m. Defaults to 500.
        area_margin_factor (float, optional): how much the UE area extends outside the macro grid,
            as a fraction of inter_site_distance. Defaults to 0.5.
        macro_ue_density (float, optional): macro UEs per square metre. Defaults to 0.00002.
        home_enb_deployment_ratio (float, optional): HeNB deployment ratio. Defaults to 0.2.
        home_enb_activation_ratio (float, optional): HeNB activation ratio. Defaults to 0.5.
        home_ues_home_enb_ratio (float, optional): average number of home UEs per HeNB. Defaults to 1.0.
        macro_site_height (float, optional): height of the macro sites in m. Defaults to 30.
        ue_height (float, optional): height of macro UEs and of the REM plane in m. Defaults to 1.5.
        rem_x_res (int, optional): REM resolution along X. Defaults to 100.
        rem_y_res (int, optional): REM resolution along Y. Defaults to 100.
        rem_rb_id (int, optional): data channel RB of the REM, -1 to average the control channel. Defaults to -1.
    """
    n_blocks: int = 1
    n_apartments_x: int = 10
    n_floors: int = 1
    n_macro_enb_sites: int = 3
    n_macro_enb_sites_x: int = 1
    inter_site_distance: float = 500.
    area_margin_factor: float = 0.5
    macro_ue_density: float = 0.00002
    home_enb_deployment_ratio: float = 0.2
    home_enb_activation_ratio: float = 0.5
    home_ues_home_enb_ratio: float = 1.0
    macro_site_height: float = 30.
    ue_height: float = 1.5
    rem_x_res: int = 100
    rem_y_res: int = 100
    rem_rb_id: int = -1

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = numbers.Integral if f.type is int else numbers.Real
            self._check(f.name, isinstance(value, expected) and not isinstance(value, bool),
                        f'must be of type {f.type.__name__}')

        for name in ('n_blocks', 'n_macro_enb_sites'):
            self._check(name, getattr(self, name) >= 0, 'must be >= 0')
        for name in ('n_apartments_x', 'n_floors', 'n_macro_enb_sites_x', 'rem_x_res', 'rem_y_res'):
            self._check(name, getattr(self, name) >= 1, 'must be >= 1')
        self._check('inter_site_distance', self.inter_site_distance > 0, 'must be > 0')
        for name in ('area_margin_factor', 'macro_ue_density', 'home_ues_home_enb_ratio'):
            self._check(name, getattr(self, name) >= 0, 'must be >= 0')
        for name in ('home_enb_deployment_ratio', 'home_enb_activation_ratio'):
            self._check(name, 0 <= getattr(self, name) <= 1, 'must be in [0, 1]')
        self._check('rem_rb_id', self.rem_rb_id >= -1, 'must be >= -1')

    def _check(self, name, condition, message):
        if not condition:
            raise ConfigurationError(f'{name}={getattr(self, name)!r} {message}')

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, values):
        unknown = set(values) - set(cls.field_names())
        if unknown:
            raise ConfigurationError(f'Unknown deployment parameters: {sorted(unknown)}')
        return cls(**values)

    @classmethod
    def from_json(cls, path):
        with open(Path(path), 'r') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self):
        return asdict(self)

    def replace(self, **changes):
        return replace(self, **changes)
