# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

import argparse
import logging
import sys
from dataclasses import fields
from deploygen.config import DeploymentConfig
from deploygen.coverage_shapes import SiteCoverage
from deploygen.errors import DeployGenError
from deploygen.export import write_gnuplot_files
from deploygen.placement import populate
from deploygen.random_source import StreamManager
from deploygen.topo_generation import DeploymentGenerator

logger = logging.getLogger('deploygen')


def build_parser():
    parser = argparse.ArgumentParser(prog='deploygen', description='Generate a dual-stripe HetNet deployment.')
    parser.add_argument('--config', type=str, default=None, help='JSON file of deployment parameters')
    parser.add_argument('--seed', type=int, default=1, help='base random seed')
    parser.add_argument('--run', type=int, default=1, help='run index')
    parser.add_argument('--output-dir', type=str, default=None, help='directory for the gnuplot files')
    parser.add_argument('--plot', type=str, default=None, help='save a plot of the deployment to this file')
    parser.add_argument('-v', '--verbose', action='count', default=0)
    for f in fields(DeploymentConfig):
        # command line values override the JSON file
        parser.add_argument('--' + f.name.replace('_', '-'), dest=f.name, type=f.type, default=None,
                            help=f'defaults to {f.default}')
    return parser


def load_config(args):
    config = DeploymentConfig() if args.config is None else DeploymentConfig.from_json(args.config)
    overrides = {f.name: getattr(args, f.name) for f in fields(DeploymentConfig)
                 if getattr(args, f.name) is not None}
    return config.replace(**overrides)


def main(argv=None):
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    try:
        config = load_config(args)
        streams = StreamManager(args.seed, args.run)
        layout = DeploymentGenerator(config, streams).generate()
        positions = populate(layout, streams)
    except DeployGenError as e:
        logger.error(str(e))
        return 1

    print(f'macro UE box: {layout.area}')
    print(f'macro sites: {len(layout.sites)} ({layout.n_macro_enbs} eNBs)')
    print(f'blocks: {len(layout.blocks)}')
    print(f'HeNBs: {layout.n_home_enbs}, home UEs: {layout.n_home_ues}, macro UEs: {layout.n_macro_ues}')

    if args.output_dir is not None:
        write_gnuplot_files(layout, positions, args.output_dir)
    if args.plot is not None:
        ax = layout.plot(positions, ax=SiteCoverage.from_layout(layout).plot())
        ax.figure.savefig(args.plot)
    return 0


if __name__ == '__main__':
    sys.exit(main())
