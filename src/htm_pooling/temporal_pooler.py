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

import abc
import itertools
import logging

from htm_pooling.errors import ConfigurationError
from htm_pooling.segment import SegmentUpdate, SynapseUpdateState

logger = logging.getLogger(__name__)


class TemporalPoolerContext(object, metaclass=abc.ABCMeta):
    """
    state shared by the segments of a temporal layer: the learning iteration
    counter, synapse parameters, verbosity, and segment id allocation. the
    temporal layer owns the context and advances lrn_iteration_idx; segments only
    hold a reference to it.

    subclasses decide which cells new synapses are grown from by implementing
    choose_cells_to_learn_from.
    """

    def __init__(self, permanence_max=1.0, new_synapse_count=15, verbosity=0):
        """
        permanence_max:         maximum permanence of a segment synapse.
                                default `1.0`.

        new_synapse_count:      number of synapses a segment update aims for when
                                new synapses are requested.
                                default `15`.

        verbosity:              amount of debug logging. 0 is silent.
        """

        if permanence_max <= 0:
            raise ConfigurationError(
                "permanence_max must be positive, got {}".format(permanence_max)
            )
        if new_synapse_count < 0:
            raise ConfigurationError(
                "new_synapse_count must not be negative, got {}"
                .format(new_synapse_count)
            )

        self.permanence_max = permanence_max
        self.new_synapse_count = new_synapse_count
        self.verbosity = verbosity

        self.lrn_iteration_idx = 0
        self._segment_ids = itertools.count()

    def next_segment_id(self):
        return next(self._segment_ids)

    @abc.abstractmethod
    def choose_cells_to_learn_from(self, segment, count, active_state):
        """
        choose up to `count` cells to grow new synapses from, avoiding cells the
        segment is already connected to. returns a list of (column, cell) pairs.
        """

    def get_segment_active_synapses(self, c, i, segment, active_state,
                                    new_synapses=False):
        """
        return a SegmentUpdate containing a list of proposed changes to `segment`.
        the active synapses are those whose source cell is on in active_state, a
        (column, cell) indexed boolean matrix. the list is empty if segment is None
        since the segment doesn't exist yet.

        if new_synapses is True, then new_synapse_count - len(active synapses)
        synapses are added to the proposal, chosen by choose_cells_to_learn_from and
        marked as new.

        the segment itself is not modified.
        """

        if self.verbosity >= 5:
            logger.debug(
                "get_segment_active_synapses column=%d cell=%d segment=%s "
                "new_synapses=%s", c, i,
                None if segment is None else segment.seg_id, new_synapses
            )

        active_synapses = []

        if segment is not None:
            for index, syn in enumerate(segment.syns):
                if active_state[syn.src_cell_col, syn.src_cell_idx]:
                    active_synapses.append(SynapseUpdateState(index))

        if new_synapses:
            num_to_add = self.new_synapse_count - len(active_synapses)

            if num_to_add > 0:
                cells = self.choose_cells_to_learn_from(segment, num_to_add,
                                                        active_state)
                for column, cell in cells:
                    active_synapses.append(
                        SynapseUpdateState(column, cell_index=cell, new=True)
                    )

        # active_synapses may still be empty, the temporal layer decides what to
        # do with an empty update
        return SegmentUpdate(c, i, segment, active_synapses)
