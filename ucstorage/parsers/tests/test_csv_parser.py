#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
csv parser tester
'''
import io
import os

import pytest

from ucstorage.parsers.csv_parser import read_generators, read_demand, create_system_data
from ucstorage.data.system_data import InputValidationError

current_dir = os.path.dirname(os.path.abspath(__file__))
instance_dir = os.path.join(current_dir, 'csv_test_instances')
uc_instance_dir = os.path.join(current_dir, '..', '..', 'models', 'tests', 'uc_test_instances')

def _instance(name):
    return os.path.join(instance_dir, name)

def test_read_generators_with_aliases():
    generators, storage_units = read_generators(_instance('generators_aliases.csv'))

    assert [g.name for g in generators] == ['NUC1', 'CCGT1']
    nuc, ccgt = generators
    assert nuc.bus == 'north'
    assert nuc.fuel == 'Nuclear'
    assert nuc.variable_cost == 8.
    assert nuc.startup_cost == 5000.
    assert nuc.min_up_time == 8
    assert nuc.min_down_time == 1
    assert nuc.ramp_up == 100.
    assert nuc.ramp_down is None
    assert nuc.initial_status == 1

    assert ccgt.startup_cost == 0.
    assert ccgt.min_up_time == 1
    assert ccgt.initial_status is None

    assert [s.name for s in storage_units] == ['PHS1', 'PHS2']
    phs1, phs2 = storage_units
    assert phs1.existing_cap_mw == 150.
    assert phs1.energy_cap_mwh == 600.
    assert phs1.charge_eff == 0.9
    assert phs1.start_charge == 300.

    ## falls back to p_max and the default efficiency
    assert phs2.existing_cap_mw == 80.
    assert phs2.charge_eff == 0.84
    assert phs2.start_charge == 160.

def test_read_generators_from_buffer():
    table = io.StringIO('name,p_min,p_max,variable_cost\nG1,0,1000,50\n')
    generators, storage_units = read_generators(table)
    assert len(generators) == 1
    assert generators[0].p_max == 1000.
    assert storage_units == []

def test_read_generators_other_separator():
    table = io.StringIO('id;p_min;p_max;var_cost\nG1;0;10;5\n')
    generators, _ = read_generators(table, sep=';')
    assert generators[0].variable_cost == 5.

def test_missing_required_column():
    with pytest.raises(InputValidationError) as excinfo:
        read_generators(_instance('generators_missing_pmax.csv'))
    assert excinfo.value.field == 'p_max'

def test_missing_cost_column():
    with pytest.raises(InputValidationError) as excinfo:
        read_generators(io.StringIO('id,p_min,p_max\nG1,0,10\n'))
    assert excinfo.value.field == 'variable_cost'

def test_inconsistent_generator_row():
    with pytest.raises(InputValidationError) as excinfo:
        read_generators(_instance('generators_bad_pmin.csv'))
    assert excinfo.value.field == 'G1.p_min'

def test_read_demand_sorts_hours():
    assert read_demand(_instance('demand_unsorted.csv')) == [100., 200., 300.]

def test_read_demand_gap():
    with pytest.raises(InputValidationError) as excinfo:
        read_demand(_instance('demand_gap.csv'))
    assert excinfo.value.field == 'hour'

@pytest.mark.parametrize('table', [
    'hour,demand\n1,100\n2.7,200\n',
    'hour,demand\n1,100\ntwo,200\n',
])
def test_read_demand_non_integer_hour(table):
    with pytest.raises(InputValidationError) as excinfo:
        read_demand(io.StringIO(table))
    assert excinfo.value.field == 'hour'

def test_read_demand_missing_column():
    with pytest.raises(InputValidationError):
        read_demand(io.StringIO('hour,price\n1,20\n'))

def test_negative_demand_rejected_by_system_data():
    ## the demand reader only checks the hour index
    assert read_demand(_instance('demand_negative.csv')) == [100., -5.]
    with pytest.raises(InputValidationError) as excinfo:
        create_system_data(_instance('generators_aliases.csv'), _instance('demand_negative.csv'))
    assert excinfo.value.field == 'demand[2]'

def test_create_system_data():
    sd = create_system_data(os.path.join(uc_instance_dir, 'generators.csv'),
                            os.path.join(uc_instance_dir, 'demand.csv'))
    assert sd.num_time_periods == 24
    assert sorted(sd.generators) == ['COAL1', 'GAS1', 'OIL1']
    assert list(sd.storage) == ['PHS1']
    assert sd.storage_unit('PHS1').start_charge == 200.
    assert sd.generator('COAL1').ramp_up == 300.
    assert sd.generator('OIL1').initial_status is None
    assert max(sd.demand) == 1200.
