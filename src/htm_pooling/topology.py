# ----------------------------------------------------------------------
# Numenta Platform for Intelligent Computing (NuPIC)
# Copyright (C) 2022, Numenta, Inc.  Unless you have an agreement
# with Numenta, Inc., for a separate license for this software code, the
# following terms and conditions apply:
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero Public License for more details.
#
# You should have received a copy of the GNU Affero Public License
# along with this program.  If not, see http://www.gnu.org/licenses.
#
# http://numenta.org/licenses/
# ----------------------------------------------------------------------

import itertools

import numpy as np


def _axis_range(center, radius, dimension, wrap_around):
    """
    coordinates within `radius` of `center` along one axis, in discovery order
    (from center - radius up to center + radius) with duplicates removed.
    """

    coordinates = range(center - radius, center + radius + 1)

    if wrap_around:
        coordinates = (c % dimension for c in coordinates)
    else:
        coordinates = (c for c in coordinates if 0 <= c < dimension)

    # a radius larger than half the axis wraps onto itself
    return list(dict.fromkeys(coordinates))


def neighbors_nd(index, dimensions, radius, wrap_around=False):
    """
    gets the neighbors of a point in an n-dimensional lattice. the neighbors are
    all points whose coordinate along every axis is within `radius` of the point's
    coordinate, excluding the point itself.

    index:          linear (row-major) index of the point.
    dimensions:     size of each axis of the lattice.
    radius:         maximum per-axis distance of a neighbor.
    wrap_around:    if True, each axis is treated as a ring, otherwise the
                    neighborhood is truncated at the edges.

    returns a list of distinct linear indices. for a 1-D lattice with wrap_around
    this is the window [index - radius, index + radius] modulo the dimension.
    """

    dimensions = np.array(dimensions, ndmin=1)
    if dimensions.size == 0:
        raise ValueError("dimensions must have at least one axis")

    center = np.unravel_index(index, dimensions)

    ranges = [
        _axis_range(int(center[i]), int(radius), int(dimension), wrap_around)
        for i, dimension in enumerate(dimensions)
    ]

    coordinates = np.array(list(itertools.product(*ranges)))
    neighbors = np.ravel_multi_index(coordinates.T, dimensions).tolist()
    neighbors.remove(int(index))

    return neighbors


def neighborhood(index, dimensions, radius, wrap_around=False):
    """
    gets the points in the neighborhood of a point, including the point itself. a
    point's neighborhood is the n-dimensional hypercube with sides ranging
    [center - radius, center + radius] inclusive. unless wrap_around is set,
    neighborhoods are truncated when they are near an edge.
    """

    neighbors = neighbors_nd(index, dimensions, radius, wrap_around=wrap_around)

    return np.array(sorted(neighbors + [int(index)]), dtype=np.int64)
