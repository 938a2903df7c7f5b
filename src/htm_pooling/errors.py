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
exceptions raised by the pooling core.
"""


class HTMError(Exception):
    """
    base class for every error raised by htm_pooling.
    """


class ConfigurationError(HTMError, ValueError):
    """
    raised at construction time when parameters are inconsistent, e.g. input and
    column dimensions of different lengths or a non-positive period.
    """


class InvariantViolation(HTMError, RuntimeError):
    """
    raised when a caller asks for something that would break an invariant of the
    data structure, e.g. freeing more synapses than a segment owns.
    """
