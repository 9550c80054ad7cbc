#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

import pytest
from pyomo.opt import TerminationCondition

from ucstorage.models.solution import Solution
from ucstorage.model_library.defn import SolveStatus, SolutionKind

def _solution(**kwargs):
    data = dict(objective=1234.,
                mip_gap=0.,
                time_periods=[1, 2],
                demand=[100., 150.],
                generation={'G1': {1: 110., 2: 100.}},
                commitment={'G1': {1: 1, 2: 1}},
                startup={'G1': {1: 0, 2: 0}},
                shutdown={'G1': {1: 0, 2: 0}},
                charge={'S1': {1: 10., 2: 0.}},
                discharge={'S1': {1: 0., 2: 50.}},
                soc={'S1': {1: 58.4, 2: 0.}},
                )
    data.update(kwargs)
    return Solution(SolveStatus.OPTIMAL, TerminationCondition.optimal, **data)

def test_accessors():
    s = _solution()
    assert s.is_feasible
    assert s.termination_condition == 'optimal'
    assert s.time_periods == (1, 2)
    assert s.total_generation(1) == 110.
    assert s.net_storage(1) == -10.
    assert s.net_storage(2) == 50.
    assert s.series('generation') is s.generation
    assert s.series(SolutionKind.SOC)['S1'][1] == 58.4

def test_read_only():
    s = _solution()
    with pytest.raises(TypeError):
        s.generation['G1'][1] = 0.
    with pytest.raises(TypeError):
        s.generation['G2'] = {}
    with pytest.raises(AttributeError):
        s.objective = 0.

def test_prices():
    s = _solution()
    assert s.series(SolutionKind.PRICE) == {}
    assert not s.prices_valid

    s = _solution(prices={1: 20., 2: 60.}, prices_valid=True)
    assert s.prices[2] == 60.
    assert s.series('price') == {'system': {1: 20., 2: 60.}}

def test_to_dataframe():
    df = _solution(prices={1: 20., 2: 60.}, prices_valid=True).to_dataframe()
    assert list(df.columns) == ['unit', 'kind', 'hour', 'value']
    assert len(df) == 2*(4 + 3 + 1)
    row = df[(df.unit == 'S1') & (df.kind == 'discharge') & (df.hour == 2)]
    assert row['value'].iloc[0] == 50.

    df = _solution().to_dataframe(kinds=['generation', SolutionKind.CHARGE])
    assert set(df.kind) == {'generation', 'charge'}
    assert len(df) == 4

def test_to_wide():
    wide = _solution().to_wide('generation')
    assert list(wide.index) == [1, 2]
    assert wide.index.name == 'hour'
    assert wide.loc[2, 'G1'] == 100.

def test_no_solution():
    s = Solution(SolveStatus.INFEASIBLE, TerminationCondition.infeasible,
                 time_periods=[1], demand=[10.])
    assert not s.is_feasible
    assert s.objective is None
    assert len(s.generation) == 0
    assert s.to_dataframe().empty
    assert 'INFEASIBLE' in repr(s)

def test_unknown_kind():
    with pytest.raises(ValueError):
        _solution().series('reserves')
