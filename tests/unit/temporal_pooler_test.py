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

import unittest
from unittest.mock import Mock

import numpy as np

from htm_pooling.errors import ConfigurationError
from htm_pooling.segment import Segment, SegmentUpdate, SynapseUpdateState
from htm_pooling.temporal_pooler import TemporalPoolerContext


class SimpleContext(TemporalPoolerContext):
    def choose_cells_to_learn_from(self, segment, count, active_state):
        return []


class TemporalPoolerContextTest(unittest.TestCase):
    '''
    unit tests for the context shared by the segments of a temporal layer.
    '''

    def setUp(self):
        self.tp = SimpleContext(permanence_max=1.0, new_synapse_count=5)

        # 8 columns with 2 cells each
        self.active_state = np.zeros((8, 2), dtype=bool)
        self.active_state[1, 0] = True
        self.active_state[3, 0] = True
        self.active_state[6, 1] = True

        self.segment = Segment(self.tp, True)
        self.segment.add_synapse(1, 0, 0.5)
        self.segment.add_synapse(2, 1, 0.4)
        self.segment.add_synapse(3, 0, 0.3)
        self.segment.add_synapse(6, 0, 0.2)

    def test_abstract(self):
        with self.assertRaises(TypeError):
            TemporalPoolerContext()

    def test_defaults(self):
        tp = SimpleContext()

        self.assertEqual(1.0, tp.permanence_max)
        self.assertEqual(15, tp.new_synapse_count)
        self.assertEqual(0, tp.verbosity)
        self.assertEqual(0, tp.lrn_iteration_idx)
        self.assertListEqual([0, 1, 2], [tp.next_segment_id() for _ in range(3)])

    def test_invalid_parameters(self):
        with self.assertRaises(ConfigurationError):
            SimpleContext(permanence_max=0.0)

        with self.assertRaises(ConfigurationError):
            SimpleContext(new_synapse_count=-1)

    def test_no_segment(self):
        update = self.tp.get_segment_active_synapses(4, 1, None, self.active_state)

        self.assertEqual(SegmentUpdate(4, 1, None, []), update)

    def test_active_synapses(self):
        update = self.tp.get_segment_active_synapses(4, 1, self.segment,
                                                     self.active_state)

        self.assertEqual(4, update.column_idx)
        self.assertEqual(1, update.cell_idx)
        self.assertIs(self.segment, update.segment)
        self.assertListEqual(
            [SynapseUpdateState(0), SynapseUpdateState(2)],
            update.active_synapses
        )
        self.assertFalse(any(state.new for state in update.active_synapses))

    def test_new_synapses(self):
        self.tp.choose_cells_to_learn_from = Mock(return_value=[(5, 1), (7, 0), (0, 1)])

        update = self.tp.get_segment_active_synapses(4, 1, self.segment,
                                                     self.active_state,
                                                     new_synapses=True)

        self.assertEqual(1, self.tp.choose_cells_to_learn_from.call_count)
        segment, count, active_state = self.tp.choose_cells_to_learn_from.call_args[0]
        self.assertIs(self.segment, segment)
        self.assertEqual(3, count)
        self.assertIs(self.active_state, active_state)

        self.assertListEqual(
            [
                SynapseUpdateState(0),
                SynapseUpdateState(2),
                SynapseUpdateState(5, cell_index=1, new=True),
                SynapseUpdateState(7, cell_index=0, new=True),
                SynapseUpdateState(0, cell_index=1, new=True),
            ],
            update.active_synapses
        )

        # the proposal leaves the segment untouched
        self.assertEqual(4, self.segment.num_synapses)
        self.assertListEqual([0.5, 0.4, 0.3, 0.2],
                             [syn.permanence for syn in self.segment.syns])

    def test_new_synapses_for_missing_segment(self):
        self.tp.choose_cells_to_learn_from = Mock(return_value=[(2, 0)])

        update = self.tp.get_segment_active_synapses(4, 1, None, self.active_state,
                                                     new_synapses=True)

        segment, count, _ = self.tp.choose_cells_to_learn_from.call_args[0]
        self.assertIsNone(segment)
        self.assertEqual(5, count)
        self.assertListEqual([SynapseUpdateState(2, cell_index=0, new=True)],
                             update.active_synapses)

    def test_new_synapses_not_needed(self):
        self.tp.new_synapse_count = 2
        self.tp.choose_cells_to_learn_from = Mock(return_value=[(5, 1)])

        update = self.tp.get_segment_active_synapses(4, 1, self.segment,
                                                     self.active_state,
                                                     new_synapses=True)

        self.assertFalse(self.tp.choose_cells_to_learn_from.called)
        self.assertEqual(2, len(update.active_synapses))

    def test_chooser_may_return_fewer_cells(self):
        update = self.tp.get_segment_active_synapses(4, 1, self.segment,
                                                     self.active_state,
                                                     new_synapses=True)

        self.assertEqual(2, len(update.active_synapses))


if __name__ == '__main__':
    unittest.main()
