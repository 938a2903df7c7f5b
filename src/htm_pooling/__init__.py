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

from .duty_cycles import (
    DUTY_CYCLE_ALPHAS,
    DUTY_CYCLE_TIERS,
    duty_cycle_alpha,
    update_duty_cycles_helper,
)
from .errors import ConfigurationError, HTMError, InvariantViolation
from .segment import Segment, SegmentUpdate, Synapse, SynapseUpdateState
from .spatial_pooler import SpatialPooler
from .temporal_pooler import TemporalPoolerContext
from .topology import neighborhood, neighbors_nd

__version__ = "0.1.0"
