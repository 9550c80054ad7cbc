#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
unit commitment formulation tester; these tests build models but do not solve them
'''

import pytest
import pyomo.environ as pe
from pyomo.environ import value

from ucstorage.data.system_data import SystemData, create_generator, create_storage_unit
from ucstorage.model_library.unit_commitment.uc_model_generator import UCFormulation, generate_model
from ucstorage.model_library.unit_commitment import params, uptime_downtime

formulation_3bin = UCFormulation(status_vars='garver_3bin_vars',
                                 power_vars='basic_power_vars',
                                 generation_limits='CA_generation_limits',
                                 uptime_downtime='rajan_takriti_UT_DT',
                                 ramping_limits='startup_shutdown_ramping',
                                 storage='storage_services',
                                 power_balance='copperplate_power_balance',
                                 objective='basic_objective',
                                 )

formulation_2bin = formulation_3bin._replace(status_vars='garver_2bin_vars')

T = 6

def _system_data(storage=True):
    generators = [create_generator('BASE', 100., 500., 20., startup_cost=1000.,
                                   min_up_time=3, min_down_time=2, ramp_up=150., ramp_down=150.,
                                   initial_status=1, fuel='Coal'),
                  create_generator('PEAK', 0., 200., 80., startup_cost=50.),
                  create_generator('FLEX', 20., 100., 60., ramp_up=1000., initial_status=0),
                  ]
    storage_units = [create_storage_unit('PHS', 50., start_charge=60.)] if storage else []
    return SystemData(generators, storage_units, [300., 350., 400., 450., 400., 350.])

def _count(component):
    return len(list(component.values()))

@pytest.fixture
def model():
    return generate_model(_system_data(), formulation_3bin)

def test_formulation_tags(model):
    assert model.name == 'UnitCommitmentStorage'
    assert model.data_loader == 'load_params'
    assert model.status_vars == 'garver_3bin_vars'
    assert model.storage_service == 'storage_services'
    assert model.objective == 'basic_objective'

def test_params(model):
    assert list(model.TimePeriods) == list(range(1, T+1))
    assert value(model.InitialTime) == 1
    assert value(model.NumTimePeriods) == T
    assert value(model.Demand[4]) == 450.
    assert list(model.ThermalGenerators) == ['BASE', 'PEAK', 'FLEX']
    assert set(model.GeneratorsWithInitialStatus) == {'BASE', 'FLEX'}
    assert value(model.UnitOnT0['BASE']) == 1
    assert set(model.GeneratorsWithRampUpLimit) == {'BASE', 'FLEX'}
    assert set(model.GeneratorsWithRampDownLimit) == {'BASE'}
    assert value(model.MaximumEnergyStorage['PHS']) == 200.
    assert value(model.StorageSocOnT0['PHS']) == 60.
    assert value(model.EndPointSocStorage['PHS']) == 60.
    assert value(model.InputEfficiencyEnergy['PHS']) == 0.84

def test_min_up_time_truncated_to_horizon():
    gens = [create_generator('G', 0., 10., 1., min_up_time=48, min_down_time=30)]
    m = generate_model(SystemData(gens, [], [1.]*4), formulation_3bin)
    assert value(m.ScaledMinimumUpTime['G']) == 4
    assert value(m.ScaledMinimumDownTime['G']) == 4

def test_binary_domains(model):
    assert model.UnitOn['BASE', 1].is_binary()
    assert model.UnitStart['PEAK', 3].is_binary()
    assert model.UnitStop['FLEX', 6].is_binary()
    assert not model.PowerGenerated['BASE', 1].is_binary()
    assert model.PowerGenerated['PEAK', 2].ub == 200.
    assert model.PowerGenerated['PEAK', 2].lb == 0.

def test_relaxed_domains():
    m = generate_model(_system_data(), formulation_3bin, relax_binaries=True)
    for v in m.component_data_objects(pe.Var):
        assert not v.is_binary()
    assert m.UnitOn['BASE', 1].bounds == (0, 1)

def test_status_logic(model):
    ## no transition into the first period for generators without an initial status
    assert _count(model.Logical) == 3*T - 1
    assert ('PEAK', 1) not in model.Logical
    assert model.UnitStart['PEAK', 1].fixed
    assert model.UnitStop['PEAK', 1].fixed
    assert value(model.UnitStart['PEAK', 1]) == 0
    assert not model.UnitStart['BASE', 1].fixed
    assert _count(model.StartStopExclusion) == 3*T

def test_2bin_status_logic():
    m = generate_model(_system_data(), formulation_2bin)
    assert isinstance(m.UnitStop, pe.Expression)
    assert value(m.UnitStop['PEAK', 1]) == 0
    assert m.UnitStart['PEAK', 1].fixed
    assert hasattr(m, 'StartRequiresOn')
    assert hasattr(m, 'StartRequiresPreviouslyOff')
    assert not hasattr(m, 'StartStopExclusion')

def test_uptime_downtime(model):
    ## PEAK and FLEX have one hour minimums, which the status logic already enforces
    assert _count(model.UpTime) == T
    assert _count(model.DownTime) == T
    assert ('PEAK', 3) not in model.UpTime
    ## windows are truncated at the first time period
    body = str(model.UpTime['BASE', 1].body)
    assert 'UnitStart[BASE,1]' in body
    assert 'UnitStart[BASE,2]' not in body
    body = str(model.UpTime['BASE', 4].body)
    for t in (2, 3, 4):
        assert 'UnitStart[BASE,{}]'.format(t) in body
    assert 'UnitStart[BASE,1]' not in body

def test_ramping(model):
    ## FLEX can ramp its full range, so only BASE is limited
    assert _count(model.EnforceRampUpLimits) == T - 1
    assert _count(model.EnforceRampDownLimits) == T - 1
    assert ('BASE', 1) not in model.EnforceRampUpLimits
    assert ('FLEX', 2) not in model.EnforceRampUpLimits

def test_no_ramping_no_ut_dt():
    m = generate_model(_system_data(),
                       formulation_3bin._replace(uptime_downtime='no_UT_DT', ramping_limits='no_ramping'))
    assert not hasattr(m, 'UpTime')
    assert not hasattr(m, 'EnforceRampUpLimits')

def test_storage(model):
    assert _count(model.EnergyConservation) == T
    assert _count(model.EnforceEndPointSocStorage) == 1
    assert model.SocStorage['PHS', 3].ub == 200.
    assert model.PowerInputStorage['PHS', 3].ub == 50.
    assert model.PowerOutputStorage['PHS', 3].ub == 50.
    assert not hasattr(model, 'InputStorage')

    model.PowerInputStorage['PHS', 1].value = 10.
    model.PowerOutputStorage['PHS', 1].value = 0.
    assert value(model.NetStorageOutput['PHS', 1]) == -10.
    ## the first period starts from the initial stored energy
    model.SocStorage['PHS', 1].value = 60. + 10.*0.84
    con = model.EnergyConservation['PHS', 1]
    assert value(con.body) - value(con.upper) == pytest.approx(0.)

def test_storage_complementarity():
    m = generate_model(_system_data(), formulation_3bin._replace(storage='storage_services_complementarity'))
    assert m.InputStorage['PHS', 1].is_binary()
    assert _count(m.InputOutputComplementarity) == T
    assert _count(m.EnforceStorageInputLimits) == T
    assert _count(m.EnforceStorageOutputLimits) == T

def test_no_storage():
    m = generate_model(_system_data(storage=False), formulation_3bin)
    assert len(m.Storage) == 0
    assert _count(m.EnergyConservation) == 0
    assert _count(m.PowerBalance) == T

def test_power_balance_and_objective(model):
    for g in model.ThermalGenerators:
        for t in model.TimePeriods:
            model.PowerGenerated[g,t].value = 0.
            model.UnitStart[g,t].value = 0
    for t in model.TimePeriods:
        model.PowerGenerated['BASE',t].value = value(model.Demand[t])
        model.PowerInputStorage['PHS',t].value = 0.
        model.PowerOutputStorage['PHS',t].value = 0.
    model.UnitStart['PEAK', 2].value = 1

    assert _count(model.PowerBalance) == T
    for t in model.TimePeriods:
        con = model.PowerBalance[t]
        assert value(con.body) - value(con.upper) == pytest.approx(0.)

    assert value(model.TotalProductionCost) == pytest.approx(20.*sum(_system_data().demand))
    assert value(model.TotalStartupCost) == pytest.approx(50.)
    assert value(model.TotalCostObjective) == pytest.approx(20.*2250. + 50.)

def test_component_out_of_order_warns():
    m = pe.ConcreteModel()
    params.load_params(m, _system_data())
    with pytest.warns(UserWarning, match='requires some status_vars'):
        uptime_downtime.no_UT_DT(m)
    with pytest.warns(UserWarning, match='Model already has'):
        uptime_downtime.no_UT_DT(m)
