#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## loads input unit commitment data onto the model as pyomo sets and params
from pyomo.environ import *

import ucstorage.model_library.decl as decl
from .uc_utils import add_model_attr

from ucstorage.common.log import logger

component_name = 'data_loader'

def _load_time_params(model, system_data):

    ################################################
    # the hours of the horizon, numbered from one. #
    ################################################

    decl.declare_set('TimePeriods', model, system_data.time_periods)

    decl.declare_param('InitialTime', model, None, model.TimePeriods.first(), within=PositiveIntegers)
    decl.declare_param('NumTimePeriods', model, None, len(model.TimePeriods), within=PositiveIntegers)

    ## demand, in MW, at each time period
    demand = {t: d for t, d in zip(model.TimePeriods, system_data.demand)}
    decl.declare_param('Demand', model, model.TimePeriods, demand, within=NonNegativeReals)

def _load_generator_params(model, system_data):
    gen_attrs = system_data.attributes('generator')
    num_time_periods = value(model.NumTimePeriods)

    decl.declare_set('ThermalGenerators', model, gen_attrs['names'])

    ####################################################################
    # minimum and maximum generation levels, for each thermal generator. #
    # units are MW. the minimum level only applies when committed.       #
    ####################################################################

    decl.declare_param('MinimumPowerOutput', model, model.ThermalGenerators,
                       gen_attrs['p_min'], within=NonNegativeReals)

    def maximum_power_output_validator(m, v, g):
        return v >= value(m.MinimumPowerOutput[g])

    decl.declare_param('MaximumPowerOutput', model, model.ThermalGenerators,
                       gen_attrs['p_max'], within=NonNegativeReals,
                       validate=maximum_power_output_validator)

    ##########################################
    # linear production and startup costs.   #
    ##########################################

    decl.declare_param('ProductionCostCoefficient', model, model.ThermalGenerators,
                       gen_attrs['variable_cost'], within=Reals)
    decl.declare_param('StartupCost', model, model.ThermalGenerators,
                       gen_attrs['startup_cost'], within=NonNegativeReals)

    ####################################################################
    # minimum up/down times, in hours. anything longer than the horizon #
    # is truncated to the horizon.                                      #
    ####################################################################

    decl.declare_param('ScaledMinimumUpTime', model, model.ThermalGenerators,
                       {g: min(ut, num_time_periods) for g, ut in gen_attrs['min_up_time'].items()},
                       within=PositiveIntegers)
    decl.declare_param('ScaledMinimumDownTime', model, model.ThermalGenerators,
                       {g: min(dt, num_time_periods) for g, dt in gen_attrs['min_down_time'].items()},
                       within=PositiveIntegers)

    ###########################################################
    # ramp limits, in MW/h. generators without a limit given  #
    # are left out of these sets.                             #
    ###########################################################

    ramp_up = {g: r for g, r in gen_attrs['ramp_up'].items() if r is not None}
    ramp_down = {g: r for g, r in gen_attrs['ramp_down'].items() if r is not None}

    decl.declare_set('GeneratorsWithRampUpLimit', model, ramp_up.keys())
    decl.declare_set('GeneratorsWithRampDownLimit', model, ramp_down.keys())
    decl.declare_param('NominalRampUpLimit', model, model.GeneratorsWithRampUpLimit,
                       ramp_up, within=PositiveReals)
    decl.declare_param('NominalRampDownLimit', model, model.GeneratorsWithRampDownLimit,
                       ramp_down, within=PositiveReals)

    ##################################################################
    # commitment state before the first time period, when supplied.  #
    ##################################################################

    initial_status = {g: s for g, s in gen_attrs['initial_status'].items() if s is not None}
    decl.declare_set('GeneratorsWithInitialStatus', model, initial_status.keys())
    decl.declare_param('UnitOnT0', model, model.GeneratorsWithInitialStatus,
                       initial_status, within=Binary)

def _load_storage_params(model, system_data):
    storage_attrs = system_data.attributes('storage')

    decl.declare_set('Storage', model, storage_attrs['names'])

    ####################################################################
    # charge/discharge power rating (MW) and energy rating (MWh), for  #
    # each storage unit.                                               #
    ####################################################################

    decl.declare_param('MaximumPowerStorage', model, model.Storage,
                       storage_attrs['existing_cap_mw'], within=PositiveReals)
    decl.declare_param('MaximumEnergyStorage', model, model.Storage,
                       storage_attrs['energy_cap_mwh'], within=PositiveReals)

    ########################################################
    # one-way efficiencies for each storage unit, in (0,1]. #
    ########################################################

    decl.declare_param('InputEfficiencyEnergy', model, model.Storage,
                       storage_attrs['charge_eff'], within=PercentFraction)
    decl.declare_param('OutputEfficiencyEnergy', model, model.Storage,
                       storage_attrs['discharge_eff'], within=PercentFraction)

    ###############################################################
    # stored energy (MWh) at the start of the horizon; the same   #
    # amount must be in storage at the end of the horizon.        #
    ###############################################################

    decl.declare_param('StorageSocOnT0', model, model.Storage,
                       storage_attrs['start_charge'], within=NonNegativeReals)
    decl.declare_param('EndPointSocStorage', model, model.Storage,
                       storage_attrs['start_charge'], within=NonNegativeReals)

@add_model_attr(component_name)
def load_params(model, system_data):
    '''
    This loads unit commitment params from a SystemData object
    '''
    model.system_data = system_data

    _load_time_params(model, system_data)
    _load_generator_params(model, system_data)
    _load_storage_params(model, system_data)

    logger.debug('Loaded {} generators, {} storage units and {} time periods'.format(
                 len(model.ThermalGenerators), len(model.Storage), len(model.TimePeriods)))
