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

import logging

import numpy as np

from htm_pooling.duty_cycles import update_duty_cycles_helper
from htm_pooling.errors import ConfigurationError
from htm_pooling.topology import neighborhood, neighbors_nd

logger = logging.getLogger(__name__)

real_type = np.float64
uint_type = np.uint32
int_type = np.int64


class SpatialPooler:
    """
    The HTM Spatial Pooler (SP) models how neurons learn feedforward connections and
    form efficient representations of the input. Converts arbitrary binary input
    patterns into sparse distributed representations (SDRs) using competitive
    Hebbian learning and homeostatic excitability control (boosting).

    every column owns a potential pool of input bits. each potential synapse has a
    permanence value; a synapse is connected when its permanence reaches
    synapse_perm_connected. a column's overlap with an input is the number of
    connected synapses onto input bits that are on.
    """

    def __init__(
        self,
        input_dims=(32, 32),
        column_dims=(64, 64),
        potential_radius=16,
        potential_percent=0.5,
        global_inhibition=False,
        local_area_density=-1.0,
        num_active_columns_per_inh_area=10,
        stimulus_threshold=0,
        synapse_perm_dec=0.01,
        synapse_perm_inc=0.1,
        synapse_perm_connected=0.1,
        synapse_perm_below_stimulus_inc=None,
        synapse_perm_trim_threshold=None,
        min_percent_overlap_duty_cycles=0.001,
        min_percent_active_duty_cycles=0.001,
        duty_cycle_period=1000,
        max_boost=10.0,
        update_period=50,
        wrap_around=True,
        seed=-1,
        verbosity=0,
    ):
        """
        input_dims:                         dimensions of input vector.
                                            default ``(32, 32)``.

        column_dims:                        dimensions of the column lattice. must
                                            have as many axes as input_dims.
                                            default ``(64, 64)``.

        potential_radius:                   extent of the input that each column can
                                            potentially connect to. a column's
                                            receptive field is the hypercube with
                                            side lengths (2 * potential_radius + 1)
                                            centered on the input bit the column maps
                                            onto.
                                            default ``16``.

        potential_percent:                  percent of inputs within a column's
                                            potential radius that the column can be
                                            connected to. at initialization we choose
                                            (receptive field size) * potential_percent
                                            input bits to comprise the potential pool.
                                            default ``0.5``.

        global_inhibition:                  if True, winning columns are selected as
                                            the most active columns of the region as
                                            a whole. otherwise they are selected
                                            w.r.t. their local neighborhoods.
                                            default ``False``.

        local_area_density:                 desired density of active columns within
                                            a local inhibition area. when positive it
                                            takes precedence over
                                            num_active_columns_per_inh_area.
                                            default ``-1.0``.

        num_active_columns_per_inh_area:    number of columns that remain on within
                                            an inhibition area. used when
                                            local_area_density is not positive.
                                            default ``10``.

        stimulus_threshold:                 minimum overlap a column needs in order
                                            to become active. prevents noise from
                                            activating columns.
                                            default ``0``.

        synapse_perm_dec:                   amount by which the permanence of a
                                            synapse onto an inactive input bit is
                                            decremented when its column learns.
                                            default ``0.01``.

        synapse_perm_inc:                   amount by which the permanence of a
                                            synapse onto an active input bit is
                                            incremented when its column learns.
                                            default ``0.1``.

        synapse_perm_connected:             permanence at or above which a synapse
                                            is connected.
                                            default ``0.1``.

        synapse_perm_below_stimulus_inc:    increment applied to every potential
                                            synapse of a column that has too few
                                            connections or too low an overlap duty
                                            cycle.
                                            default ``synapse_perm_connected / 10``.

        synapse_perm_trim_threshold:        permanences at or below this value are
                                            set to exactly zero.
                                            default ``synapse_perm_inc / 2``.

        min_percent_overlap_duty_cycles:    floor on how often a column should have
                                            a non-zero overlap, as a fraction of the
                                            largest overlap duty cycle in its
                                            inhibition area. columns below the floor
                                            have all their permanences bumped up.
                                            default ``0.001``.

        min_percent_active_duty_cycles:     floor on how often a column should be
                                            active, as a fraction of the largest
                                            active duty cycle in its inhibition
                                            area. columns below the floor get their
                                            overlap boosted.
                                            default ``0.001``.

        duty_cycle_period:                  period used to calculate duty cycles.
                                            higher values respond more slowly to
                                            changes, lower values are less stable.
                                            default ``1000``.

        max_boost:                          boost factor of a column that has never
                                            been active while its minimum active
                                            duty cycle is positive.
                                            default ``10.0``.

        update_period:                      number of iterations between updates of
                                            the inhibition radius, minimum duty
                                            cycles and boost factors.
                                            default ``50``.

        wrap_around:                        whether potential pools wrap around the
                                            edges of the input space.
                                            default ``True``.

        seed:                               seed for numpy random generator. ``-1``
                                            draws a random seed.

        verbosity:                          amount of debug logging. 0 is silent.
        """

        # input and column dimensionality
        self.input_dims = np.array(input_dims, ndmin=1)
        self.column_dims = np.array(column_dims, ndmin=1)

        if self.input_dims.size == 0 or self.column_dims.size == 0:
            raise ConfigurationError("input_dims and column_dims must be non-empty")
        if (self.input_dims <= 0).any() or (self.column_dims <= 0).any():
            raise ConfigurationError(
                "dimensions must be positive, got input_dims={} column_dims={}"
                .format(list(self.input_dims), list(self.column_dims))
            )
        if self.input_dims.size != self.column_dims.size:
            raise ConfigurationError(
                "input_dims and column_dims must have the same number of axes, "
                "got {} and {}".format(self.input_dims.size, self.column_dims.size)
            )

        self.num_inputs = int(np.prod(self.input_dims))
        self.num_columns = int(np.prod(self.column_dims))

        # controls # of columns that are on within an inhibition area
        self.num_active_columns_per_inh_area = int(num_active_columns_per_inh_area)
        self.local_area_density = local_area_density

        if not ((self.num_active_columns_per_inh_area > 0)
                or (0 < self.local_area_density <= 0.5)):
            raise ConfigurationError(
                "either num_active_columns_per_inh_area must be positive or "
                "local_area_density must be in (0, 0.5]"
            )

        self.global_inhibition = bool(global_inhibition)

        # defines extent of input that each column can potentially connect to
        if potential_radius <= 0:
            raise ConfigurationError(
                "potential_radius must be positive, got {}".format(potential_radius)
            )
        if not 0 < potential_percent <= 1:
            raise ConfigurationError(
                "potential_percent must be in (0, 1], got {}".format(potential_percent)
            )

        self.potential_radius = int(min(potential_radius, self.num_inputs))
        self.potential_percent = potential_percent
        self.wrap_around = wrap_around

        # rules for synaptic connections
        if stimulus_threshold < 0:
            raise ConfigurationError("stimulus_threshold must not be negative")

        self.stimulus_threshold = stimulus_threshold
        self.synapse_perm_inc = synapse_perm_inc
        self.synapse_perm_dec = synapse_perm_dec
        self.synapse_perm_connected = synapse_perm_connected
        self.synapse_perm_min = 0.0
        self.synapse_perm_max = 1.0

        if synapse_perm_below_stimulus_inc is None:
            synapse_perm_below_stimulus_inc = synapse_perm_connected / 10.0
        if synapse_perm_trim_threshold is None:
            synapse_perm_trim_threshold = synapse_perm_inc / 2.0

        self.synapse_perm_below_stimulus_inc = synapse_perm_below_stimulus_inc
        self.synapse_perm_trim_threshold = synapse_perm_trim_threshold

        if not self.synapse_perm_min < self.synapse_perm_connected \
                <= self.synapse_perm_max:
            raise ConfigurationError(
                "synapse_perm_connected must be in (0, 1], got {}"
                .format(self.synapse_perm_connected)
            )
        if self.synapse_perm_below_stimulus_inc <= 0:
            raise ConfigurationError("synapse_perm_below_stimulus_inc must be positive")
        if self.synapse_perm_trim_threshold >= self.synapse_perm_connected:
            raise ConfigurationError(
                "synapse_perm_trim_threshold ({}) must be below "
                "synapse_perm_connected ({})".format(
                    self.synapse_perm_trim_threshold, self.synapse_perm_connected
                )
            )

        # cycle period, update period, and iteration count
        if duty_cycle_period < 1:
            raise ConfigurationError("duty_cycle_period must be at least 1")
        if update_period < 1:
            raise ConfigurationError("update_period must be at least 1")
        if max_boost < 1.0:
            raise ConfigurationError("max_boost must be at least 1.0")

        self.duty_cycle_period = duty_cycle_period
        self.update_period = update_period
        self.iteration_num = 0
        self.iteration_learn_num = 0
        self.verbosity = verbosity

        # duty cycles + overlap metrics + boosting
        #
        # - overlap_duty_cycles[i] is the moving average of how often column "i" had
        #   a non-zero overlap with the input.
        #
        # - active_duty_cycles[i] is the moving average of how often column "i" was
        #   active after inhibition.
        #
        # - min_overlap_duty_cycles[i] / min_active_duty_cycles[i] are the floors
        #   defining normal activity for column "i".
        #
        # - boost_factors[i] multiplies the overlap of column "i" before inhibition.
        self.min_percent_overlap_duty_cycles = min_percent_overlap_duty_cycles
        self.min_percent_active_duty_cycles = min_percent_active_duty_cycles
        self.max_boost = max_boost
        self.init_connected_percent = 0.5

        self.overlap_duty_cycles = np.zeros(self.num_columns, dtype=real_type)
        self.active_duty_cycles = np.zeros(self.num_columns, dtype=real_type)
        self.min_overlap_duty_cycles = np.zeros(self.num_columns, dtype=real_type)
        self.min_active_duty_cycles = np.zeros(self.num_columns, dtype=real_type)
        self.boost_factors = np.ones(self.num_columns, dtype=real_type)
        self.overlaps = np.zeros(self.num_columns, dtype=int_type)
        self.boosted_overlaps = np.zeros(self.num_columns, dtype=real_type)

        # random seed
        if seed == -1:
            self.seed = int(np.random.randint(10**9))
        else:
            self.seed = seed

        self.generator = np.random.default_rng(seed=self.seed)

        # rows of each matrix are columns, matrix columns are input bits.
        #
        # - potential_pools[i][j] shows if input bit "j" is in the potential pool of
        #   column "i". a column can only be connected to inputs in its pool.
        #
        # - permanences[i][j] is the permanence of column "i" to input bit "j".
        #
        # - connected_synapses[i][j] shows if column "i" is connected to input "j".
        #
        # - connected_synapses_counts[i] is the number of connected synapses of
        #   column "i".
        self.potential_pools = np.zeros((self.num_columns, self.num_inputs),
                                        dtype=np.bool_)

        self.permanences = np.zeros((self.num_columns, self.num_inputs),
                                    dtype=real_type)

        self.connected_synapses = np.zeros((self.num_columns, self.num_inputs),
                                           dtype=np.bool_)

        self.connected_synapses_counts = np.zeros(self.num_columns, dtype=int_type)

        for column_index in range(self.num_columns):
            potential = self.map_potential(column_index, self.wrap_around)
            self.potential_pools[column_index, :] = potential > 0
            permanence = self.init_permanence(potential, self.init_connected_percent)
            self.update_permanences_for_column(permanence, column_index,
                                               raise_perm=True)

        self.inhibition_radius = 0
        self.update_inhibition_radius()

        if self.verbosity >= 1:
            logger.debug(
                "spatial pooler: %d inputs %s, %d columns %s, seed %d, "
                "inhibition radius %d",
                self.num_inputs, list(self.input_dims), self.num_columns,
                list(self.column_dims), self.seed, self.inhibition_radius
            )

    def compute(self, input_vector, learn, active_array=None):
        """
        primary spatial pooler method. takes an input vector and returns the indices
        of the active columns in ascending order. if learn is True, the permanences
        and duty cycles of the columns are updated.

        input vector is a binary array with one entry per input bit. it is treated as
        a 1D array regardless of its shape.

        active_array, if given, is an array whose size is equal to the number of
        columns. it is populated with 1's at the indices of the active columns and
        0's everywhere else.
        """

        input_vector = np.asarray(input_vector).reshape(-1)
        if input_vector.size != self.num_inputs:
            raise ValueError(
                "input vector has {} bits, expected {}".format(
                    input_vector.size, self.num_inputs
                )
            )

        self.update_bookkeeping_vars(learn)

        self.overlaps = self.calculate_overlap(input_vector)

        # apply boosting when learning is on
        if learn:
            self.boosted_overlaps = self.boost_factors * self.overlaps
        else:
            self.boosted_overlaps = self.overlaps.astype(real_type)

        # apply inhibition to determine the winning columns
        active_columns = self.inhibit_columns(self.boosted_overlaps)

        if learn:
            self.adapt_synapses(input_vector, active_columns)
            self.bump_up_weak_columns()
            self.update_duty_cycles(self.overlaps, active_columns)

            if self.is_update_round():
                self.update_inhibition_radius()
                self.update_min_duty_cycles()
                self.update_boost_factors()
        else:
            active_columns = self.strip_never_learned(active_columns)

        if self.verbosity >= 3:
            logger.debug("iteration %d (learn=%s): active columns %s",
                         self.iteration_num, learn, active_columns.tolist())

        if active_array is not None:
            active_array.fill(0)
            active_array[active_columns] = 1

        return active_columns

    def update_bookkeeping_vars(self, learn):
        """
        advance the iteration counters.
        """

        self.iteration_num += 1
        if learn:
            self.iteration_learn_num += 1

    def is_update_round(self):
        """
        the inhibition radius, minimum duty cycles and boost factors are refreshed
        once every update_period iterations.
        """

        return (self.iteration_num % self.update_period) == 0

    def map_column(self, index):
        """
        maps a column index to respective input index, keeping topology of the
        region.

        in other words, takes index of column as argument and calculates index of
        flattened input vector that is to be the center of the column's potential
        pool.
        """

        column_coordinates = np.array(np.unravel_index(index, self.column_dims),
                                      dtype=real_type)

        # map column index to find appropriate input index
        input_coordinates = self.input_dims * (column_coordinates / self.column_dims)

        # shift input index by (1/2M)(I)
        input_coordinates += (0.5 * self.input_dims) / self.column_dims

        # get valid index
        input_coordinates = input_coordinates.astype(int)

        return int(np.ravel_multi_index(input_coordinates, self.input_dims))

    def map_potential(self, index, wrap_around=False):
        """
        maps column to input bits.

        takes index of column and determines which indices of the input vector are
        located within the column's potential pool. returns a mask over the input
        bits.

        if the potential radius is greater than or equal to the largest input
        dimension, then each column connects to all of the inputs.
        """

        center_input = self.map_column(index)
        column_inputs = neighborhood(center_input, self.input_dims,
                                     self.potential_radius, wrap_around=wrap_around)

        # select a subset of the receptive field to serve as the potential pool
        num_potential = int(column_inputs.size * self.potential_percent + 0.5)

        selected_inputs = self.generator.choice(column_inputs, size=num_potential,
                                                replace=False)

        potential = np.zeros(self.num_inputs, dtype=uint_type)
        potential[selected_inputs] = 1

        return potential

    def init_perm_connected(self):
        """
        random permanence for a connected synapse, in
        [synapse_perm_connected, synapse_perm_connected + synapse_perm_inc / 4].
        """

        return (self.synapse_perm_connected
                + self.generator.random() * self.synapse_perm_inc / 4.0)

    def init_perm_non_connected(self):
        """
        random permanence for a potential synapse that is not connected, in
        [synapse_perm_inc / 2, synapse_perm_connected).
        """

        low = min(self.synapse_perm_inc / 2.0, self.synapse_perm_connected)

        return low + self.generator.random() * (self.synapse_perm_connected - low)

    def init_permanence(self, potential, connected_percent):
        """
        initializes the permanences of a column. takes a mask of the column's
        potential pool and returns a 1D array the size of the input holding the
        initial permanence of every input bit. bits outside the potential pool get
        a permanence of 0.

        each potential synapse is independently initialized as connected with
        probability connected_percent, close to synapse_perm_connected either way.
        """

        permanence = np.zeros(self.num_inputs, dtype=real_type)

        for i in np.flatnonzero(potential):
            if self.generator.random() < connected_percent:
                permanence[i] = self.init_perm_connected()
            else:
                permanence[i] = self.init_perm_non_connected()

        return permanence

    def update_permanences_for_column(self, permanence, column_index,
                                      raise_perm=True):
        """
        updates the permanence matrix with a column's new permanence values.

        this method is responsible for clipping the permanence values so they remain
        between synapse_perm_min and synapse_perm_max, and for trimming permanence
        values at or below synapse_perm_trim_threshold to zero. the connected
        synapses and the connected count of the column are recomputed.

        permanence is a dense array holding a permanence for every input bit.
        raise_perm indicates whether permanence values should be raised until a
        minimum number of synapses are in a connected state. should be False when a
        direct assignment is required.
        """

        permanence = np.array(permanence, dtype=real_type).reshape(-1)

        mask_potential = np.flatnonzero(self.potential_pools[column_index, :])

        if raise_perm:
            self.raise_permanence_to_threshold(permanence, mask_potential)

        np.clip(permanence, self.synapse_perm_min, self.synapse_perm_max,
                out=permanence)
        permanence[permanence <= self.synapse_perm_trim_threshold] = 0

        self.permanences[column_index, :] = permanence

        new_connected = permanence >= self.synapse_perm_connected

        # remove old synaptic connections and make new ones
        self.connected_synapses[column_index, :] = new_connected
        self.connected_synapses_counts[column_index] = np.count_nonzero(new_connected)

    def raise_permanence_to_threshold(self, permanence, mask_potential):
        """
        ensures that each column has enough connections to input bits to allow it to
        become active. takes in an array of permanence values for a column and the
        indices of its potential synapses, and modifies the array in place.

        since a column must have at least stimulus_threshold overlaps in order to be
        considered during the inhibition phase, columns without this minimal number
        of connections have no chance of reaching the threshold, even if all input
        bits they are connected to are on. for such columns, the permanence values
        of all potential synapses are increased until the minimum number of
        connections are formed.
        """

        np.clip(permanence, self.synapse_perm_min, self.synapse_perm_max,
                out=permanence)

        # after this many rounds every potential synapse is at synapse_perm_max
        max_rounds = int(np.ceil(
            (self.synapse_perm_max - self.synapse_perm_min)
            / self.synapse_perm_below_stimulus_inc
        )) + 1

        for _ in range(max_rounds):
            num_connected = np.count_nonzero(
                permanence >= self.synapse_perm_connected
            )

            if num_connected >= self.stimulus_threshold:
                return

            permanence[mask_potential] += self.synapse_perm_below_stimulus_inc

    def calculate_overlap(self, input_vector):
        """
        determines each column's overlap with the current input vector. overlap of a
        column is the # of connected synapses to input bits which are turned on.
        """

        input_bits = (np.asarray(input_vector).reshape(-1) > 0).astype(int_type)

        return np.asarray(self.connected_synapses, dtype=int_type) @ input_bits

    def calculate_overlap_pct(self, overlaps):
        """
        overlap of every column as a fraction of its connected synapses. columns
        without connected synapses have an overlap percentage of 0.
        """

        counts = np.asarray(self.connected_synapses_counts)
        overlaps_pct = np.zeros(counts.shape, dtype=real_type)

        mask = counts > 0
        overlaps_pct[mask] = np.asarray(overlaps)[mask] / counts[mask]

        return overlaps_pct

    def inhibit_columns(self, overlaps):
        """
        performs inhibition. calculates the density of active columns to aim for and
        delegates to global or local inhibition.

        takes in overlaps, which is an array containing the (boosted) overlap score
        of each column.
        """

        if self.local_area_density > 0:
            density = self.local_area_density
        else:
            inhibition_area = min(
                self.num_columns,
                (2 * self.inhibition_radius + 1) ** self.column_dims.size,
            )

            density = float(self.num_active_columns_per_inh_area) / inhibition_area
            density = min(density, 0.5)

        if self.global_inhibition or self.inhibition_radius > max(self.column_dims):
            return self.inhibit_columns_global(overlaps, density)
        else:
            return self.inhibit_columns_local(overlaps, density)

    def inhibit_columns_global(self, overlaps, density):
        """
        global inhibition -- pick the top density * num_columns columns with the
        highest overlap score in the entire region.

        overlaps are sorted with a stable ascending sort and the winners are taken
        from the top, so among columns with equal overlap the higher index wins.
        columns with an overlap score below the stimulus_threshold are always
        inhibited. returns winner indices in ascending order.
        """

        overlaps = np.asarray(overlaps)

        num_active = int(density * self.num_columns)
        if num_active <= 0:
            return np.array([], dtype=int_type)

        # calculate winners using sorting algorithm
        sorted_columns = np.argsort(overlaps, kind="stable")
        winners = sorted_columns[-num_active:]

        # enforce the stimulus threshold
        winners = winners[overlaps[winners] >= self.stimulus_threshold]

        return np.sort(winners).astype(int_type)

    def inhibit_columns_local(self, overlaps, density):
        """
        local inhibition -- performed on a column by column basis, in ascending
        index order. each column observes the overlaps of its neighbors within the
        inhibition radius and is selected if fewer than

            int(0.5 + density * (# of neighbors + 1))

        neighbors have a bigger overlap. a selected column has its overlap raised
        by a small amount, so that a later neighbor with the same overlap loses the
        tie. the result therefore depends on the processing order.

        columns with an overlap score below the stimulus_threshold are always
        inhibited.
        """

        overlaps = np.array(overlaps, dtype=real_type)
        active_array = np.zeros(self.num_columns, dtype=np.bool_)

        add_to_winners = overlaps.max() / 1000.0

        for column in range(self.num_columns):
            overlap = overlaps[column]
            if overlap < self.stimulus_threshold:
                continue

            neighbors = neighbors_nd(column, self.column_dims, self.inhibition_radius,
                                     wrap_around=False)

            # # of neighbors with overlap value greater than current column
            num_bigger = np.count_nonzero(overlaps[neighbors] > overlap)

            # maximum number of active columns in neighborhood
            num_active = int(0.5 + density * (len(neighbors) + 1))

            if num_bigger < num_active:
                active_array[column] = True
                overlaps[column] += add_to_winners

        return np.flatnonzero(active_array).astype(int_type)

    def adapt_synapses(self, input_vector, active_columns):
        """
        primary method in charge of learning. adapts the permanence values of the
        synapses based on the input vector and the columns chosen by inhibition.

        permanence values are increased for synapses connected to ON input bits.
        permanence values are decreased for synapses connected to OFF input bits.
        only synapses in a column's potential pool are touched.
        """

        input_indices = np.flatnonzero(np.asarray(input_vector).reshape(-1) > 0)

        permanence_changes = np.full(self.num_inputs, -1 * self.synapse_perm_dec,
                                     dtype=real_type)
        permanence_changes[input_indices] = self.synapse_perm_inc

        for column_index in active_columns:
            permanence = np.array(self.permanences[column_index, :], dtype=real_type)

            mask_potential = np.flatnonzero(self.potential_pools[column_index, :])
            permanence[mask_potential] += permanence_changes[mask_potential]

            self.update_permanences_for_column(permanence, column_index,
                                               raise_perm=True)

    def update_duty_cycles(self, overlaps, active_columns):
        """
        updates the duty cycles for each column.

        overlap duty cycles is a moving average of how often each column had a
        non-zero overlap. active duty cycles is a moving average of the frequency of
        activation for each column. the averaging period grows with the iteration
        count until it reaches duty_cycle_period.
        """

        period = min(self.duty_cycle_period, self.iteration_num)

        overlap_array = np.zeros(self.num_columns, dtype=real_type)
        overlap_array[np.asarray(overlaps) > 0] = 1
        self.overlap_duty_cycles = update_duty_cycles_helper(
            self.overlap_duty_cycles, overlap_array, period
        )

        active_array = np.zeros(self.num_columns, dtype=real_type)
        active_array[np.asarray(active_columns, dtype=int_type)] = 1
        self.active_duty_cycles = update_duty_cycles_helper(
            self.active_duty_cycles, active_array, period
        )

    def bump_up_weak_columns(self):
        """
        increases the permanence values of synapses of columns whose activity level
        has been too low. such columns are identified by having an overlap duty cycle
        below their minimum overlap duty cycle. every potential synapse of such a
        column is increased by synapse_perm_below_stimulus_inc, regardless of the
        input.
        """

        weak_columns = np.flatnonzero(
            self.overlap_duty_cycles < self.min_overlap_duty_cycles
        )

        for column_index in weak_columns:
            permanence = np.array(self.permanences[column_index, :], dtype=real_type)

            mask_potential = np.flatnonzero(self.potential_pools[column_index, :])
            permanence[mask_potential] += self.synapse_perm_below_stimulus_inc

            self.update_permanences_for_column(permanence, column_index,
                                               raise_perm=False)

        if self.verbosity >= 2 and weak_columns.size > 0:
            logger.debug("bumped up %d weak columns: %s", weak_columns.size,
                         weak_columns.tolist())

    def update_boost_factors(self):
        r"""
        update boost_factors for all columns. boost_factors are used to increase the
        overlap of inactive columns to improve their chances of becoming active.

        boost is a linear function of the active duty cycle. it is max_boost when a
        column has never been active and falls to 1 once the column reaches its
        minimum active duty cycle:

        boost_factors
                ^
          max   |\
                | \
                |  \
          1  _  |   \ _ _ _ _ _ _
                +-------------------> active_duty_cycle
                    |
              min_active_duty_cycle

        columns whose minimum active duty cycle is not positive get a boost of 1.
        """

        active = np.asarray(self.active_duty_cycles, dtype=real_type)
        min_active = np.asarray(self.min_active_duty_cycles, dtype=real_type)

        boost_factors = np.ones(min_active.shape, dtype=real_type)

        mask = min_active > 0
        boost_factors[mask] = (
            (1 - self.max_boost) / min_active[mask] * active[mask] + self.max_boost
        )
        boost_factors[active >= min_active] = 1.0

        self.boost_factors = boost_factors

    def update_min_duty_cycles(self):
        """
        updates minimum duty cycles defining normal activity for a column.
        """

        if self.global_inhibition or self.inhibition_radius > self.num_columns:
            self.update_min_duty_cycles_global()
        else:
            self.update_min_duty_cycles_local()

    def update_min_duty_cycles_global(self):
        """
        set the minimum duty cycles of all columns to a percent of the maximum duty
        cycles in the region, specified by min_percent_overlap_duty_cycles and
        min_percent_active_duty_cycles.
        """

        self.min_overlap_duty_cycles = np.full(
            self.num_columns,
            self.min_percent_overlap_duty_cycles * np.max(self.overlap_duty_cycles),
            dtype=real_type,
        )
        self.min_active_duty_cycles = np.full(
            self.num_columns,
            self.min_percent_active_duty_cycles * np.max(self.active_duty_cycles),
            dtype=real_type,
        )

    def update_min_duty_cycles_local(self):
        """
        each column's minimum duty cycles are set to a percent of the maximum duty
        cycles in the column's neighborhood.
        """

        overlap_duty_cycles = np.asarray(self.overlap_duty_cycles)
        active_duty_cycles = np.asarray(self.active_duty_cycles)

        for column in range(self.num_columns):
            mask_neighbors = neighborhood(column, self.column_dims,
                                          self.inhibition_radius)

            self.min_overlap_duty_cycles[column] = (
                self.min_percent_overlap_duty_cycles
                * overlap_duty_cycles[mask_neighbors].max()
            )
            self.min_active_duty_cycles[column] = (
                self.min_percent_active_duty_cycles
                * active_duty_cycles[mask_neighbors].max()
            )

    def strip_never_learned(self, active_columns):
        """
        removes columns that have never been active (active duty cycle of exactly 0)
        from a set of active columns.
        """

        active_columns = np.asarray(active_columns, dtype=int_type)

        return active_columns[
            np.asarray(self.active_duty_cycles)[active_columns] != 0
        ]

    def update_inhibition_radius(self):
        """
        update inhibition radius, which is a measure of the hypersquare of columns
        that each column is "connected to" on average. since columns are not
        connected to each other directly, we determine this quantity by figuring out
        how many *inputs* a column is connected to and multiply this by the total
        number of columns that exist for each input. for multiple dimensions, these
        calculations are averaged over all dimensions of inputs and columns.

        when global_inhibition is enabled, the radius spans the largest column
        dimension.
        """

        if self.global_inhibition:
            self.inhibition_radius = int(max(self.column_dims))
            return

        # how many inputs a column is connected to on average
        average_connected_span = np.average(
            [
                self.average_connected_span_for_column(c)
                for c in range(self.num_columns)
            ]
        )

        # how many columns exist for each input on average
        columns_per_input = self.average_columns_per_input()

        diameter = average_connected_span * columns_per_input
        radius = (diameter - 1) / 2.0
        radius = max(radius, 1.0)

        self.inhibition_radius = int(radius + 0.5)

    def average_connected_span_for_column(self, column_index):
        """
        range of connected synapses of a column, averaged over each input dimension.
        value is used to calculate the inhibition radius.
        """

        connected = np.flatnonzero(self.connected_synapses[column_index, :])

        if connected.size == 0:
            return 0

        coordinates = np.array(np.unravel_index(connected, self.input_dims))

        return np.average(coordinates.max(axis=1) - coordinates.min(axis=1) + 1)

    def average_columns_per_input(self):
        """
        average number of columns per input, value is used to calculate the
        inhibition radius.

        if the column dimensions don't match the input dimensions, missing
        dimensions are treated as "ones".
        """

        num_dim = max(self.column_dims.size, self.input_dims.size)

        column_dim = np.ones(num_dim)
        column_dim[: self.column_dims.size] = self.column_dims

        input_dim = np.ones(num_dim)
        input_dim[: self.input_dims.size] = self.input_dims

        columns_per_input = column_dim.astype(real_type) / input_dim

        return np.average(columns_per_input)

    # getter methods

    def get_num_inputs(self):
        return self.num_inputs

    def get_num_columns(self):
        return self.num_columns

    def get_iteration_num(self):
        return self.iteration_num

    def get_iteration_learn_num(self):
        return self.iteration_learn_num

    def get_inhibition_radius(self):
        return self.inhibition_radius

    def get_boost_factors(self):
        return self.boost_factors

    def get_overlap_duty_cycles(self):
        return self.overlap_duty_cycles

    def get_active_duty_cycles(self):
        return self.active_duty_cycles

    def get_min_overlap_duty_cycles(self):
        return self.min_overlap_duty_cycles

    def get_min_active_duty_cycles(self):
        return self.min_active_duty_cycles

    def get_potential_pools(self):
        return self.potential_pools

    def get_permanences(self):
        return self.permanences

    def get_connected_synapses(self):
        return self.connected_synapses

    def get_connected_synapses_counts(self):
        return self.connected_synapses_counts

    def get_overlaps(self):
        return self.overlaps

    def get_boosted_overlaps(self):
        return self.boosted_overlaps

    # setter methods

    def set_inhibition_radius(self, radius):
        self.inhibition_radius = radius

    def set_boost_factors(self, boost_factors):
        self.boost_factors = np.array(boost_factors, dtype=real_type)

    def set_overlap_duty_cycles(self, overlap_duty_cycles):
        self.overlap_duty_cycles = np.array(overlap_duty_cycles, dtype=real_type)

    def set_active_duty_cycles(self, active_duty_cycles):
        self.active_duty_cycles = np.array(active_duty_cycles, dtype=real_type)

    def set_min_overlap_duty_cycles(self, min_overlap_duty_cycles):
        self.min_overlap_duty_cycles = np.array(min_overlap_duty_cycles,
                                                dtype=real_type)

    def set_min_active_duty_cycles(self, min_active_duty_cycles):
        self.min_active_duty_cycles = np.array(min_active_duty_cycles,
                                               dtype=real_type)

    def set_min_percent_overlap_duty_cycles(self, min_percent_overlap_duty_cycles):
        self.min_percent_overlap_duty_cycles = min_percent_overlap_duty_cycles

    def set_min_percent_active_duty_cycles(self, min_percent_active_duty_cycles):
        self.min_percent_active_duty_cycles = min_percent_active_duty_cycles

    def set_potential_pool(self, column_index, potential):
        self.potential_pools[column_index, :] = np.asarray(potential) > 0

    def set_permanence(self, column_index, permanence):
        self.update_permanences_for_column(permanence, column_index,
                                           raise_perm=False)
