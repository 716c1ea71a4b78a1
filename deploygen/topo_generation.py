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
from typing import Tuple
import numpy as np
import matplotlib.pyplot as plt
import geopandas as gpd
import pandas as pd
from deploygen.config import DeploymentConfig
from deploygen.geometry import Box
from deploygen.blocks import Building, FemtocellBlockAllocator
from deploygen.population import Population, derive_population
from deploygen.random_source import StreamManager

logger = logging.getLogger(__name__)

ROW_SPACING = math.sqrt(0.75)
SECTOR_AZIMUTS = (0., 120., 240.)
FALLBACK_AREA_SIZE = 150.


@dataclass(frozen=True)
class Site:
    index: int
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Sector:
    cell_index: int
    site_index: int
    azimut: float
    x: float
    y: float
    z: float


def macro_grid_rows(n_sites, n_sites_x):
    """Number of rows of the hex grid needed for n_sites.

    Rows alternate between n_sites_x and n_sites_x + 1 sites.
    """
    current_site = n_sites - 1
    bi_row_index = current_site // (2 * n_sites_x + 1)
    bi_row_remainder = current_site % (2 * n_sites_x + 1)
    row_index = bi_row_index * 2 + 1
    if bi_row_remainder >= n_sites_x:
        row_index += 1
    return row_index


def macro_ue_box(config: DeploymentConfig) -> Box:
    """Macro coverage area: the hex grid extended by the area margin.

    When there are no macro sites, a fixed 150 m x 150 m box is returned so that
    femtocell blocks can still be placed.
    """
    z = config.ue_height
    if config.n_macro_enb_sites == 0:
        return Box(0., FALLBACK_AREA_SIZE, 0., FALLBACK_AREA_SIZE, z, z)

    d = config.inter_site_distance
    margin = config.area_margin_factor * d
    n_sites_y = macro_grid_rows(config.n_macro_enb_sites, config.n_macro_enb_sites_x)
    logger.debug('n_macro_enb_sites_y = %d', n_sites_y)
    return Box(-margin,
               (config.n_macro_enb_sites_x + config.area_margin_factor) * d,
               -margin,
               (n_sites_y - 1) * d * ROW_SPACING + margin,
               z, z)


class HexGridSitePlacer:
    """Positions 3-sector macro sites on a triangular lattice.

    Even rows hold grid_width sites starting at min_x, odd rows hold
    grid_width + 1 sites shifted by half the inter-site distance.

    Args:
        inter_site_distance (float): horizontal spacing of the sites in m.
        grid_width (int): number of sites of the even rows.
        min_x (float, optional): x of the first site. Defaults to inter_site_distance / 2.
        min_y (float, optional): y of the first row. Defaults to 0.
        site_height (float, optional): z of the sites. Defaults to 30.
    """
    def __init__(self, inter_site_distance, grid_width, min_x=None, min_y=0., site_height=30.) -> None:
        self.d = inter_site_distance
        self.grid_width = grid_width
        self.min_x = inter_site_distance / 2 if min_x is None else min_x
        self.min_y = min_y
        self.site_height = site_height

    @classmethod
    def from_config(cls, config: DeploymentConfig):
        return cls(config.inter_site_distance, config.n_macro_enb_sites_x, site_height=config.macro_site_height)

    def site_position(self, index):
        bi_row_index = index // (2 * self.grid_width + 1)
        bi_row_remainder = index % (2 * self.grid_width + 1)
        row_index = bi_row_index * 2
        col_index = bi_row_remainder
        if bi_row_remainder >= self.grid_width:
            row_index += 1
            col_index -= self.grid_width

        y = self.min_y + self.d * row_index * ROW_SPACING
        x = self.min_x + self.d * col_index
        if row_index % 2 == 1:
            x -= self.d / 2
        return x, y, self.site_height

    def place(self, n_sites) -> Tuple[Site, ...]:
        return tuple(Site(i, *self.site_position(i)) for i in range(n_sites))

    @staticmethod
    def sectors(sites) -> Tuple[Sector, ...]:
        """Expands each site into three co-located sectors."""
        sectors = []
        for site in sites:
            for az in SECTOR_AZIMUTS:
                sectors.append(Sector(len(sectors), site.index, az, site.x, site.y, site.z))
        return tuple(sectors)


@dataclass(frozen=True)
class DeploymentLayout:
    config: DeploymentConfig
    area: Box
    sites: Tuple[Site, ...]
    blocks: Tuple[Box, ...]
    buildings: Tuple[Building, ...]
    population: Population

    @property
    def sectors(self):
        return HexGridSitePlacer.sectors(self.sites)

    @property
    def n_macro_enbs(self):
        return len(SECTOR_AZIMUTS) * len(self.sites)

    @property
    def n_home_enbs(self):
        return self.population.n_home_enbs

    @property
    def n_home_ues(self):
        return self.population.n_home_ues

    @property
    def n_macro_ues(self):
        return self.population.n_macro_ues

    def to_geodataframes(self):
        """Returns the layout as a dict of GeoDataFrames: area, sites, sectors, blocks, buildings."""
        gdf_area = gpd.GeoDataFrame({'name': ['macro_ue_box']}, geometry=[self.area.to_polygon()])

        x_bs = np.array([s.x for s in self.sites], dtype=float)
        y_bs = np.array([s.y for s in self.sites], dtype=float)
        gdf_sites = gpd.GeoDataFrame({'site_id': [f'site{s.index}' for s in self.sites],
                                      'x': x_bs, 'y': y_bs,
                                      'z': [s.z for s in self.sites]},
                                     geometry=gpd.points_from_xy(x_bs, y_bs))

        df_sectors = pd.DataFrame([{'cell_id': s.cell_index + 1,
                                    'site_id': f'site{s.site_index}',
                                    'azimut': s.azimut} for s in self.sectors],
                                  columns=['cell_id', 'site_id', 'azimut'])
        gdf_sectors = gdf_sites.merge(df_sectors, on='site_id')

        gdf_blocks = gpd.GeoDataFrame({'block_id': [f'block{i}' for i in range(len(self.blocks))]},
                                      geometry=[b.to_polygon() for b in self.blocks])

        gdf_buildings = gpd.GeoDataFrame(
            {'building_id': [f'building{i}' for i in range(len(self.buildings))],
             'block_id': [f'block{i // 2}' for i in range(len(self.buildings))],
             'n_rooms_x': [b.n_rooms_x for b in self.buildings],
             'n_rooms_y': [b.n_rooms_y for b in self.buildings],
             'n_floors': [b.n_floors for b in self.buildings],
             'height': [b.boundaries.z_max for b in self.buildings]},
            geometry=[b.boundaries.to_polygon() for b in self.buildings])

        return {
            'area': gdf_area,
            'sites': gdf_sites,
            'sectors': gdf_sectors,
            'blocks': gdf_blocks,
            'buildings': gdf_buildings,
        }

    def plot(self, positions=None, ax=None):
        """Plots the area, blocks, buildings and macro sites, and optionally the entity positions.

        Args:
            positions (EntityPositions, optional): output of placement.populate. Defaults to None.
            ax (Axes, optional): matplotlib axes to draw on. Defaults to None.

        Returns:
            Axes: the axes drawn on
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 10))
        gdfs = self.to_geodataframes()
        gdfs['area'].boundary.plot(ax=ax, color='black', linestyle='--')
        if len(self.blocks):
            gdfs['blocks'].boundary.plot(ax=ax, color='grey')
            gdfs['buildings'].plot(ax=ax, color='lightgrey', edgecolor='black')
        if len(self.sites):
            ax.scatter(gdfs['sites'].x, gdfs['sites'].y, marker='^', color='red', label='macro site')

        if positions is not None:
            for xyz, marker, color, label in [(positions.home_enbs, 's', 'blue', 'HeNB'),
                                              (positions.home_ues, '.', 'green', 'home UE'),
                                              (positions.macro_ues, '.', 'orange', 'macro UE')]:
                if len(xyz):
                    ax.scatter(xyz[:, 0], xyz[:, 1], marker=marker, color=color, label=label)

        ax.set_xlim([self.area.x_min, self.area.x_max])
        ax.set_ylim([self.area.y_min, self.area.y_max])
        ax.set_aspect('equal')
        if ax.get_legend_handles_labels()[0]:
            ax.legend()
        return ax


class DeploymentGenerator:
    """Generates a dual-stripe deployment layout.

    Args:
        config (DeploymentConfig): deployment parameters.
        streams (StreamManager, optional): random streams. Defaults to StreamManager(seed=1, run=1).
    """
    def __init__(self, config: DeploymentConfig, streams: StreamManager = None) -> None:
        self.config = config
        self.streams = StreamManager() if streams is None else streams

    def generate(self) -> DeploymentLayout:
        config = self.config
        area = macro_ue_box(config)
        sites = HexGridSitePlacer.from_config(config).place(config.n_macro_enb_sites)

        allocator = FemtocellBlockAllocator(area, config.n_apartments_x, config.n_floors,
                                            self.streams.stream('block_x'),
                                            self.streams.stream('block_y'))
        allocator.create(config.n_blocks)

        population = derive_population(config, area)
        logger.info('Generated %d macro sites, %d blocks, %d HeNBs, %d home UEs, %d macro UEs',
                    len(sites), len(allocator.blocks), population.n_home_enbs,
                    population.n_home_ues, population.n_macro_ues)
        return DeploymentLayout(config, area, sites, tuple(allocator.blocks),
                                tuple(allocator.buildings), population)


def generate_deployment(config: DeploymentConfig = None, seed=1, run=1) -> DeploymentLayout:
    if config is None:
        config = DeploymentConfig()
    return DeploymentGenerator(config, StreamManager(seed, run)).generate()
