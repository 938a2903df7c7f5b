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

import time
import unittest

import numpy as np

from htm_pooling.spatial_pooler import SpatialPooler

real_type = np.float64
uint_type = np.uint32


class SpatialPoolerComputeTest(unittest.TestCase):
    '''
    end-to-end test of the compute function
    '''

    def basic_compute_loop(self, sp, input_size, column_dims):
        '''
        feed in some vectors and retrieve outputs. ensure the right number of columns win and that we always get binary outputs.
        '''

        num_records = 100
        generator = np.random.default_rng()

        input_matrix = (generator.random((num_records, input_size)) > 0.8).astype(uint_type)

        y = np.zeros(column_dims, dtype=uint_type)

        # with learning
        for v in input_matrix:
            y.fill(0)
            active_columns = sp.compute(v, True, y)
            self.assertEqual(sp.num_active_columns_per_inh_area, y.sum())
            self.assertEqual(0, y.min())
            self.assertEqual(1, y.max())
            self.assertListEqual(list(np.flatnonzero(y)), list(active_columns))

        # without learning, columns that never won are dropped
        for v in input_matrix:
            y.fill(0)
            active_columns = sp.compute(v, False, y)
            self.assertLessEqual(y.sum(), sp.num_active_columns_per_inh_area)
            self.assertEqual(0, y.min())
            for column in active_columns:
                self.assertGreater(sp.get_active_duty_cycles()[column], 0)

        self.assertEqual(2 * num_records, sp.get_iteration_num())
        self.assertEqual(num_records, sp.get_iteration_learn_num())

    def test_basic_compute1(self):
        '''
        run basic_compute_loop with mostly default parameters.
        '''

        input_size = 30
        column_dims = 50

        sp = SpatialPooler(
            input_dims=[input_size],
            column_dims=[column_dims],
            num_active_columns_per_inh_area=10,
            local_area_density=-1,
            potential_radius=input_size,
            potential_percent=0.5,
            global_inhibition=True,
            stimulus_threshold=0,
            synapse_perm_inc=0.05,
            synapse_perm_dec=0.008,
            synapse_perm_connected=0.1,
            min_percent_overlap_duty_cycles=0.001,
            duty_cycle_period=1000,
            max_boost=1.0,
            seed=int((time.time() % 10000)*10)
        )

        print('test_basic_compute1, SP seed set to:', sp.seed)

        self.basic_compute_loop(sp, input_size, column_dims)

    def test_basic_compute2(self):
        '''
        run basic_compute_loop with learning increments turned off.
        '''

        input_size = 100
        column_dims = 100

        sp = SpatialPooler(
            input_dims=[input_size],
            column_dims=[column_dims],
            num_active_columns_per_inh_area=10,
            local_area_density=-1,
            potential_radius=input_size,
            potential_percent=0.5,
            global_inhibition=True,
            stimulus_threshold=0,
            synapse_perm_inc=0.0,
            synapse_perm_dec=0.0,
            synapse_perm_connected=0.1,
            min_percent_overlap_duty_cycles=0.001,
            duty_cycle_period=1000,
            max_boost=10.0,
            seed=int((time.time() % 10000)*10)
        )

        print('test_basic_compute2, SP seed set to:', sp.seed)

        self.basic_compute_loop(sp, input_size, column_dims)

    def test_local_inhibition_invariants(self):
        '''
        run a 2D pooler with local inhibition through several update rounds and check that its synapse state stays consistent.
        '''

        sp = SpatialPooler(
            input_dims=[16, 16],
            column_dims=[8, 8],
            num_active_columns_per_inh_area=3,
            potential_radius=4,
            potential_percent=0.5,
            global_inhibition=False,
            stimulus_threshold=1,
            synapse_perm_inc=0.05,
            synapse_perm_dec=0.02,
            synapse_perm_connected=0.1,
            min_percent_overlap_duty_cycles=0.1,
            min_percent_active_duty_cycles=0.1,
            duty_cycle_period=20,
            update_period=10,
            seed=int((time.time() % 10000)*10)
        )

        print('test_local_inhibition_invariants, SP seed set to:', sp.seed)

        generator = np.random.default_rng(sp.seed)
        input_matrix = (generator.random((60, 16, 16)) > 0.7).astype(uint_type)

        for v in input_matrix:
            active_columns = sp.compute(v, True)

            self.assertTrue((np.diff(active_columns) > 0).all())
            self.assertTrue((sp.get_overlaps()[active_columns] >= sp.stimulus_threshold).all())

        potential_pools = sp.get_potential_pools()
        permanences = sp.get_permanences()
        connected = sp.get_connected_synapses()

        self.assertTrue((permanences >= 0).all())
        self.assertTrue((permanences <= 1).all())
        self.assertFalse(((permanences > 0) & (permanences <= sp.synapse_perm_trim_threshold)).any())
        self.assertFalse((permanences[~potential_pools] != 0).any())
        self.assertFalse((connected & ~potential_pools).any())
        self.assertTrue((connected == (permanences >= sp.synapse_perm_connected)).all())
        self.assertListEqual(list(connected.sum(axis=1)), list(sp.get_connected_synapses_counts()))
        self.assertGreaterEqual(sp.get_inhibition_radius(), 1)

    def test_reproducible_with_seed(self):
        '''
        two poolers built with the same seed and fed the same inputs stay identical.
        '''

        seed = int((time.time() % 10000)*10)
        params = {
            'input_dims' : [40],
            'column_dims' : [30],
            'num_active_columns_per_inh_area' : 4,
            'potential_radius' : 10,
            'update_period' : 5,
            'seed' : seed
        }

        sp1 = SpatialPooler(**params)
        sp2 = SpatialPooler(**params)

        self.assertTrue((sp1.get_permanences() == sp2.get_permanences()).all())

        generator = np.random.default_rng(seed)
        for v in (generator.random((30, 40)) > 0.6).astype(uint_type):
            self.assertListEqual(list(sp1.compute(v, True)), list(sp2.compute(v, True)))

        self.assertTrue((sp1.get_permanences() == sp2.get_permanences()).all())
        self.assertTrue((sp1.get_boost_factors() == sp2.get_boost_factors()).all())

    def test_random_seed(self):
        sp = SpatialPooler(input_dims=[10], column_dims=[10], seed=-1)

        self.assertIsInstance(sp.seed, int)
        self.assertGreaterEqual(sp.seed, 0)


if __name__ == '__main__':
    unittest.main()
