# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

from dataclasses import dataclass
from shapely import MultiPoint, voronoi_polygons
import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
from deploygen.geometry import Box
from deploygen.topo_generation import DeploymentLayout


@dataclass
class SiteCoverage:
    """Closest-site regions of the macro sites, clipped to the macro UE box."""
    layout: DeploymentLayout
    site_shapes: gpd.GeoDataFrame

    @classmethod
    def from_layout(cls, layout: DeploymentLayout):
        return cls(layout, cls._create_site_shapes(layout))

    @staticmethod
    def _create_site_shapes(layout):
        sites = layout.to_geodataframes()['sites']
        area = layout.area.to_polygon()
        if sites.shape[0] == 0:
            return gpd.GeoDataFrame({'site_id': [], 'x': [], 'y': []}, geometry=[])
        if sites.shape[0] == 1:
            return gpd.GeoDataFrame(sites[['site_id', 'x', 'y']], geometry=[area])

        g = voronoi_polygons(MultiPoint(sites.geometry.to_list()), extend_to=area)
        gs_shape = gpd.GeoSeries([g]).explode(index_parts=False).intersection(area)
        gdf_shape = gpd.GeoDataFrame(geometry=gs_shape.reset_index(drop=True))

        gdf_shape = gpd.sjoin(gdf_shape, sites, predicate='intersects')
        gdf_shape = gdf_shape.drop(['index_right'], axis=1)[['site_id', 'x', 'y', 'geometry']]
        gdf_shape = gdf_shape.sort_values(by='site_id', key=lambda s: s.str[4:].astype(int)).reset_index(drop=True)
        assert gdf_shape.shape[0] == sites.shape[0]
        return gdf_shape

    def serving_sites(self, positions):
        """site_id of the region containing each (x, y[, z]) position, None outside the area."""
        positions = np.asarray(positions, dtype=float)
        if positions.size == 0:
            return []
        points = gpd.GeoDataFrame(geometry=gpd.points_from_xy(positions[:, 0], positions[:, 1]))
        joined = gpd.sjoin(points, self.site_shapes, how='left', predicate='intersects')
        joined = joined[~joined.index.duplicated(keep='first')]
        return [None if isinstance(s, float) else s for s in joined.site_id]

    def plot(self, ax=None, **kwargs):
        """Draws the closest-site regions, one colour per site, and the site positions."""
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 10))
        if self.site_shapes.shape[0] == 0:
            return ax
        self.site_shapes.plot(ax=ax, column='site_id', categorical=True, alpha=0.3, edgecolor='black', **kwargs)
        ax.scatter(self.site_shapes.x, self.site_shapes.y, marker='^', color='red')
        return ax


@dataclass(frozen=True)
class RemGrid:
    """Sampling grid of a radio environment map over the macro UE box.

    rb_id = -1 means the map is averaged over the control channel.
    """
    bounds: Box
    z: float
    x_res: int
    y_res: int
    rb_id: int = -1

    @classmethod
    def from_layout(cls, layout: DeploymentLayout):
        config = layout.config
        return cls(layout.area, config.ue_height, config.rem_x_res, config.rem_y_res, config.rem_rb_id)

    @property
    def use_data_channel(self):
        return self.rb_id >= 0

    def points(self):
        """(x_res * y_res, 3) array of sample positions, x varying fastest."""
        xs = np.linspace(self.bounds.x_min, self.bounds.x_max, self.x_res)
        ys = np.linspace(self.bounds.y_min, self.bounds.y_max, self.y_res)
        xx, yy = np.meshgrid(xs, ys)
        return np.column_stack([xx.ravel(), yy.ravel(), np.full(xx.size, self.z)])
