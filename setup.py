# Software Name: DeployGen
# Version: 0.1.0
# SPDX-FileCopyrightText: Copyright (c) 2023 Orange
# SPDX-License-Identifier: BSD-3-Clause
#
# This software is distributed under the BSD 3-Clause "New" or "Revised" License,
# see the "LICENSE.txt" file for more details.
#
# Author: Danny Qiu <danny.qiu@orange.com>

from setuptools import setup

setup(
    name='DeployGen',
    version="0.1.0",
    description="A small package for dual-stripe heterogeneous network deployment generation",
    author='Danny Qiu',
    author_email='danny.qiu@orange.com',
    license='BSD 3-Clause',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Researchers",
        "Programming Language :: Python :: 3 :: Only",
    ],
    packages=[
        'deploygen',
    ],
    install_requires=[
        'numpy',
        'geopandas',
        'pandas',
        'matplotlib',
        'tqdm',
        'shapely>=2.0',
        'scipy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['deploygen=deploygen.__main__:main'],
    },
)
