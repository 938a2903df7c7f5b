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
segments and synapses used by a temporal layer.

a segment is a collection of permanence-weighted synapses owned by one cell.
each synapse originates from a (column, cell) pair. segments track how often
they produced a good prediction with a tiered duty cycle, and free their
weakest synapses to make room for new ones.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import torch

from htm_pooling.duty_cycles import DUTY_CYCLE_TIERS, duty_cycle_alpha
from htm_pooling.errors import InvariantViolation

logger = logging.getLogger(__name__)

real_type = torch.float64
int_type = torch.int64


@dataclass
class Synapse:
    src_cell_col: int
    src_cell_idx: int
    permanence: float


@dataclass
class SynapseUpdateState:
    """
    one entry of a segment update. for an existing synapse, index is its position
    in the segment. for a new synapse (new=True), index and cell_index are the
    column and cell of the source.
    """

    index: int
    cell_index: int = 0
    new: bool = False


@dataclass
class SegmentUpdate:
    """
    proposed changes to a segment of cell (column_idx, cell_idx). segment is None
    when the segment does not exist yet.
    """

    column_idx: int
    cell_idx: int
    segment: Optional["Segment"] = None
    active_synapses: List[SynapseUpdateState] = field(default_factory=list)


class Segment:
    """
    container for the state of a segment and the synapses it owns.

    tp is the temporal context the segment belongs to. the segment reads the
    learning iteration counter, permanence_max and verbosity from it, but never
    owns it.
    """

    def __init__(self, tp, is_sequence_seg):
        self.tp = tp
        self.seg_id = tp.next_segment_id()
        self.is_sequence_seg = is_sequence_seg
        self.last_active_iteration = tp.lrn_iteration_idx
        self.positive_activations = 1
        self.total_activations = 1

        self.last_pos_duty_cycle = 1.0 / max(tp.lrn_iteration_idx, 1)
        self.last_pos_duty_cycle_iteration = tp.lrn_iteration_idx

        self.syns = []

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented

        return (
            self.tp is other.tp
            and self.seg_id == other.seg_id
            and self.is_sequence_seg == other.is_sequence_seg
            and self.last_active_iteration == other.last_active_iteration
            and self.positive_activations == other.positive_activations
            and self.total_activations == other.total_activations
            and self.last_pos_duty_cycle == other.last_pos_duty_cycle
            and self.last_pos_duty_cycle_iteration
            == other.last_pos_duty_cycle_iteration
            and self.syns == other.syns
        )

    __hash__ = None

    def __str__(self):
        return self.debug_string()

    @property
    def num_synapses(self):
        return len(self.syns)

    def is_sequence_segment(self):
        return self.is_sequence_seg

    def duty_cycle(self, active=False, read_only=False):
        """
        compute/update and return the positive activations duty cycle of this
        segment. this is a measure of how often this segment is providing good
        predictions.

        active:     True if segment just provided a good prediction.
        read_only:  if True, compute the updated duty cycle, but don't change the
                    cached value. used by debugging output.

        the duty cycle is computed differently depending on how much history there
        is. for the first tier it is simply the number of positive activations
        divided by the number of learning iterations. afterwards it becomes a
        moving average that is only updated when requested:

            dc[t] = (1 - alpha) * dc[t - 1] + alpha * value[t]

        if value[t] has been 0 for a number of steps in a row, all of the updates
        can be applied at once:

            dc[t] = (1 - alpha) ** (t - last_t) * dc[last_t]

        the recurrence assumes the method is called on every segment at least once
        in each tier of DUTY_CYCLE_TIERS.
        """

        lrn_iteration_idx = self.tp.lrn_iteration_idx

        # for tier 0, compute it from total number of positive activations seen
        if lrn_iteration_idx <= DUTY_CYCLE_TIERS[1]:
            duty_cycle = float(self.positive_activations) / max(lrn_iteration_idx, 1)

            if not read_only:
                self.last_pos_duty_cycle_iteration = lrn_iteration_idx
                self.last_pos_duty_cycle = duty_cycle

            return duty_cycle

        age = lrn_iteration_idx - self.last_pos_duty_cycle_iteration

        # already up to date
        if age == 0 and not active:
            return self.last_pos_duty_cycle

        alpha = duty_cycle_alpha(lrn_iteration_idx)

        duty_cycle = (1.0 - alpha) ** age * self.last_pos_duty_cycle
        if active:
            duty_cycle += alpha

        if not read_only:
            self.last_pos_duty_cycle_iteration = lrn_iteration_idx
            self.last_pos_duty_cycle = duty_cycle

        return duty_cycle

    def add_synapse(self, src_cell_col, src_cell_idx, permanence):
        """
        appends a new synapse. duplicates of an existing source are not detected.
        """

        self.syns.append(Synapse(src_cell_col, src_cell_idx, permanence))

    def update_synapses(self, synapses, delta):
        """
        adds delta to the permanence of each synapse whose index is listed in
        synapses. positive updates are capped at permanence_max, negative updates
        are floored at 0.

        returns True if any synapse reached 0.
        """

        hit_zero = False

        if delta > 0:
            for index in synapses:
                synapse = self.syns[index]
                synapse.permanence = min(synapse.permanence + delta,
                                         self.tp.permanence_max)
        else:
            for index in synapses:
                synapse = self.syns[index]
                synapse.permanence += delta

                # no global decay, so floor at 0
                if synapse.permanence <= 0:
                    synapse.permanence = 0.0
                    hit_zero = True

        return hit_zero

    def free_n_synapses(self, num_to_free, inactive_synapse_indices):
        """
        free up num_to_free synapses of this segment. inactive synapses are always
        freed (lowest permanence first) before active ones (again lowest permanence
        first). among equal permanences, the synapse that comes first in the
        segment is freed first. the remaining synapses keep their order.

        num_to_free:                number of synapses to free.
        inactive_synapse_indices:   indices of the inactive synapses.
        """

        num_synapses = len(self.syns)
        if not 0 <= num_to_free <= num_synapses:
            raise InvariantViolation(
                "cannot free {} synapses from segment {} with {} synapses".format(
                    num_to_free, self.seg_id, num_synapses
                )
            )

        if self.tp.verbosity >= 5:
            logger.debug("free_n_synapses with num_to_free=%d", num_to_free)
            logger.debug("inactive_synapse_indices=%s", inactive_synapse_indices)

        permanences = torch.tensor([syn.permanence for syn in self.syns],
                                   dtype=real_type)
        inactive_synapse_indices = sorted(set(int(i) for i in inactive_synapse_indices))
        invalid = [i for i in inactive_synapse_indices if not 0 <= i < num_synapses]
        if invalid:
            raise InvariantViolation(
                "inactive synapse indices {} out of range for segment {} with {} "
                "synapses".format(invalid, self.seg_id, num_synapses)
            )

        inactive = torch.tensor(inactive_synapse_indices, dtype=int_type)

        # remove the lowest perm inactive synapses first
        candidates = []
        if inactive.numel() > 0:
            order = torch.sort(permanences[inactive], stable=True).indices
            candidates = inactive[order[:num_to_free]].tolist()

        # if more are needed, remove the lowest perm active synapses too
        if len(candidates) < num_to_free:
            is_inactive = torch.zeros(num_synapses, dtype=torch.bool)
            is_inactive[inactive] = True
            active = torch.nonzero(~is_inactive).flatten()

            order = torch.sort(permanences[active], stable=True).indices
            more_to_free = num_to_free - len(candidates)
            candidates += active[order[:more_to_free]].tolist()

        if self.tp.verbosity >= 4:
            logger.debug(
                "deleting %d synapses from segment to make room for new ones: %s",
                len(candidates), candidates
            )
            logger.debug("before: %s", self.debug_string().rstrip())

        freed = set(candidates)
        self.syns = [syn for index, syn in enumerate(self.syns) if index not in freed]

        if self.tp.verbosity >= 4:
            logger.debug("after: %s", self.debug_string().rstrip())

    def debug_string(self):
        """
        segment information for verbose messaging and debugging, in the format

            ID:54413 True 0.64801 (24/36) 101 [9,1]0.75 [10,1]0.75 [11,1]0.75

        where:
            54413       unique segment id
            True        is sequence segment
            0.64801     moving average duty cycle
            (24/36)     positive activations / total activations
            101         age, number of iterations since last activated
            [9,1]0.75   synapse from column 9, cell 1, permanence 0.75

        the line ends with a newline. computing the duty cycle here does not change
        the cached value.
        """

        result = "ID:{} {} ".format(self.seg_id, self.is_sequence_seg)
        result += "{}".format(self.duty_cycle(active=False, read_only=True))
        result += " ({}/{}) ".format(self.positive_activations,
                                     self.total_activations)
        result += "{}".format(self.tp.lrn_iteration_idx - self.last_active_iteration)

        for syn in self.syns:
            result += " [{},{}]{}".format(syn.src_cell_col, syn.src_cell_idx,
                                          syn.permanence)

        return result + "\n"
