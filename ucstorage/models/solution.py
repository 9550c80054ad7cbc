#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
The result of one unit commitment solve.

A :py:class:`Solution` is produced exactly once per solve call and is
read-only afterwards. Time series are keyed first by unit name, then by
hour (1..T):

.. code-block:: python

    solution.generation['G1'][13]   # MW produced by G1 in hour 13
    solution.soc['PHS'][24]         # MWh stored in PHS at the end of hour 24

When the solver did not return a feasible point (e.g., status INFEASIBLE)
every time series is empty and the objective is None.
"""
from collections import namedtuple
from types import MappingProxyType

import pandas as pd

from ucstorage.model_library.defn import SolveStatus, SolutionKind

_FEASIBLE_STATUSES = (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE, SolveStatus.LIMIT_REACHED)

_GENERATOR_KINDS = (SolutionKind.GENERATION, SolutionKind.COMMITMENT,
                    SolutionKind.STARTUP, SolutionKind.SHUTDOWN)
_STORAGE_KINDS = (SolutionKind.CHARGE, SolutionKind.DISCHARGE, SolutionKind.SOC)


def _freeze(series_by_unit):
    return MappingProxyType({unit: MappingProxyType(dict(series))
                             for unit, series in series_by_unit.items()})


_SolutionBase = namedtuple('_SolutionBase',
                           ['status',
                            'termination_condition',
                            'objective',
                            'mip_gap',
                            'time_periods',
                            'demand',
                            'generation',
                            'commitment',
                            'startup',
                            'shutdown',
                            'charge',
                            'discharge',
                            'soc',
                            'prices',
                            'prices_valid',
                            ]
                           )


class Solution(_SolutionBase):
    '''
    Immutable unit commitment solution

    Attributes
    ----------
    status : ucstorage.model_library.defn.SolveStatus
    termination_condition : str
        The solver's termination condition, verbatim
    objective : float or None
        Total production plus startup cost ($)
    mip_gap : float or None
        Relative gap between the incumbent and the best bound, if reported
    time_periods : tuple of int
    demand : tuple of float
    generation, commitment, startup, shutdown : mapping
        generator name -> hour -> value
    charge, discharge, soc : mapping
        storage name -> hour -> value
    prices : mapping or None
        hour -> energy price ($/MWh), only when computed from a continuous
        model (see prices_valid)
    prices_valid : bool
        True only when prices come from an LP (the relaxed model, or the
        MILP with its integer decisions fixed)
    '''
    __slots__ = ()

    def __new__(cls, status, termination_condition,
                objective=None, mip_gap=None, time_periods=(), demand=(),
                generation=None, commitment=None, startup=None, shutdown=None,
                charge=None, discharge=None, soc=None,
                prices=None, prices_valid=False):
        return super().__new__(cls,
                               status=status,
                               termination_condition=str(termination_condition),
                               objective=objective,
                               mip_gap=mip_gap,
                               time_periods=tuple(time_periods),
                               demand=tuple(demand),
                               generation=_freeze(generation or {}),
                               commitment=_freeze(commitment or {}),
                               startup=_freeze(startup or {}),
                               shutdown=_freeze(shutdown or {}),
                               charge=_freeze(charge or {}),
                               discharge=_freeze(discharge or {}),
                               soc=_freeze(soc or {}),
                               prices=None if prices is None else MappingProxyType(dict(prices)),
                               prices_valid=bool(prices_valid),
                               )

    @property
    def is_feasible(self):
        return self.status in _FEASIBLE_STATUSES and self.objective is not None

    def total_generation(self, t):
        ''' thermal generation summed over all generators in hour t (MW) '''
        return sum(series[t] for series in self.generation.values())

    def net_storage(self, t):
        ''' discharge minus charge summed over all storage units in hour t (MW) '''
        return sum(self.discharge[s][t] - self.charge[s][t] for s in self.discharge)

    def series(self, kind):
        '''
        The mapping unit -> hour -> value for a SolutionKind (or its string value)
        '''
        kind = SolutionKind(kind)
        if kind == SolutionKind.PRICE:
            return {'system': dict(self.prices)} if self.prices is not None else {}
        return getattr(self, kind.value)

    def to_dataframe(self, kinds=None):
        '''
        Long-form (tidy) table of the solution with the columns
        unit, kind, hour, value; one row per unit, kind and hour.

        Parameters
        ----------
        kinds : iterable of SolutionKind or str (optional)
            Restrict the table to these kinds. Default is every kind.

        Returns
        -------
            pandas.DataFrame
        '''
        if kinds is None:
            kinds = _GENERATOR_KINDS + _STORAGE_KINDS + (SolutionKind.PRICE,)
        rows = list()
        for kind in kinds:
            kind = SolutionKind(kind)
            for unit, series in self.series(kind).items():
                for hour, val in series.items():
                    rows.append((unit, kind.value, hour, val))
        return pd.DataFrame(rows, columns=['unit', 'kind', 'hour', 'value'])

    def to_wide(self, kind):
        '''
        Table of one kind of result with one row per hour and one column per unit

        Returns
        -------
            pandas.DataFrame
        '''
        series = self.series(kind)
        return pd.DataFrame({unit: pd.Series(dict(vals)) for unit, vals in series.items()},
                            index=pd.Index(self.time_periods, name='hour'))

    def __repr__(self):
        return 'Solution(status={}, objective={}, mip_gap={})'.format(
                self.status.name, self.objective, self.mip_gap)
