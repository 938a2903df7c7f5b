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

"""
duty cycles are moving averages of a boolean activity signal.

columns of the spatial pooler use a fixed-window average that is updated on
every iteration. segments use a tiered scheme: an exact ratio while the history
is short, then an exponential moving average whose rate depends on how many
learning iterations have elapsed.
"""

import numpy as np

from htm_pooling.errors import ConfigurationError

# learning iteration at which each tier begins, paired with the alpha of the
# exponential moving average used once that tier has been passed
DUTY_CYCLE_TIERS = (0, 100, 320, 1000, 3200, 10000, 32000, 100000, 320000)

DUTY_CYCLE_ALPHAS = (0.0, 0.0032, 0.0010, 0.00032, 0.00010, 0.000032, 0.00001,
                     0.0000032, 0.0000010)


def update_duty_cycles_helper(duty_cycles, new_values, period):
    """
    updates a duty cycle with a new value. used by the spatial pooler to update
    the overlap and active duty cycles of its columns.

                    (period - 1)*duty_cycle + new_value
    duty_cycle := ---------------------------------------
                                period

    duty_cycles:    array of current duty cycles.
    new_values:     array of new values, one per duty cycle.
    period:         averaging window; must be at least 1.

    returns a new array of updated duty cycles.
    """

    if period < 1:
        raise ConfigurationError("duty cycle period must be at least 1, got {}"
                                 .format(period))

    duty_cycles = np.asarray(duty_cycles, dtype=np.float64)
    new_values = np.asarray(new_values, dtype=np.float64)

    return (duty_cycles * (period - 1.0) + new_values) / period


def duty_cycle_alpha(iteration):
    """
    alpha of the moving average for a learning iteration beyond the first tier: the
    alpha of the highest tier that the iteration has passed.
    """

    for tier in range(len(DUTY_CYCLE_TIERS) - 1, 0, -1):
        if iteration > DUTY_CYCLE_TIERS[tier]:
            return DUTY_CYCLE_ALPHAS[tier]

    return 0.0
