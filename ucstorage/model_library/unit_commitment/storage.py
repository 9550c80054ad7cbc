#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for storage variables and constraints
from pyomo.environ import *

from .uc_utils import add_model_attr, is_relaxed
component_name = 'storage_service'

def _add_storage_mode_vars(model):
    # binary variables for storage mode, so a unit is never charging
    # and discharging in the same time period
    if is_relaxed(model):
        model.InputStorage = Var(model.Storage, model.TimePeriods, within=UnitInterval)
        model.OutputStorage = Var(model.Storage, model.TimePeriods, within=UnitInterval)
    else:
        model.InputStorage = Var(model.Storage, model.TimePeriods, within=Binary)
        model.OutputStorage = Var(model.Storage, model.TimePeriods, within=Binary)

    def input_output_complementarity_rule(m,s,t):
        return m.InputStorage[s,t] + m.OutputStorage[s,t] <= 1
    model.InputOutputComplementarity = Constraint(model.Storage, model.TimePeriods, rule=input_output_complementarity_rule)

    def enforce_storage_input_limits_rule(m, s, t):
        return m.PowerInputStorage[s,t] <= m.MaximumPowerStorage[s] * m.InputStorage[s,t]
    model.EnforceStorageInputLimits = Constraint(model.Storage, model.TimePeriods, rule=enforce_storage_input_limits_rule)

    def enforce_storage_output_limits_rule(m, s, t):
        return m.PowerOutputStorage[s,t] <= m.MaximumPowerStorage[s] * m.OutputStorage[s,t]
    model.EnforceStorageOutputLimits = Constraint(model.Storage, model.TimePeriods, rule=enforce_storage_output_limits_rule)

def _storage_services(model, complementarity):

    ##############################
    # Storage decision variables #
    ##############################

    # amount of output power of each storage unit, at each time period, on the grid side
    def power_storage_bounds_rule(m, s, t):
        return (0, m.MaximumPowerStorage[s])
    model.PowerOutputStorage = Var(model.Storage, model.TimePeriods, within=NonNegativeReals, bounds=power_storage_bounds_rule)

    # amount of input power of each storage unit, at each time period, on the grid side
    model.PowerInputStorage = Var(model.Storage, model.TimePeriods, within=NonNegativeReals, bounds=power_storage_bounds_rule)

    # stored energy (MWh) of each storage unit, at the end of each time period
    def soc_storage_bounds_rule(m, s, t):
        return (0, m.MaximumEnergyStorage[s])
    model.SocStorage = Var(model.Storage, model.TimePeriods, within=NonNegativeReals, bounds=soc_storage_bounds_rule)

    if complementarity:
        _add_storage_mode_vars(model)

    ##########################################
    # storage energy conservation constraint #
    ##########################################

    def energy_conservation_rule(m, s, t):
        # storage s, time t; time periods are one hour long
        if t == value(m.InitialTime):
            previous_soc = m.StorageSocOnT0[s]
        else:
            previous_soc = m.SocStorage[s, t-1]
        return m.SocStorage[s, t] == previous_soc + \
                m.PowerInputStorage[s,t]*m.InputEfficiencyEnergy[s] - m.PowerOutputStorage[s, t]/m.OutputEfficiencyEnergy[s]
    model.EnergyConservation = Constraint(model.Storage, model.TimePeriods, rule=energy_conservation_rule)

    ##################################
    # storage end-point constraints  #
    ##################################

    def storage_end_point_soc_rule(m, s):
        # storage s, last time period
        return m.SocStorage[s, m.TimePeriods.last()] == m.EndPointSocStorage[s]
    model.EnforceEndPointSocStorage = Constraint(model.Storage, rule=storage_end_point_soc_rule)

    ## net injection of each storage unit into the system
    def net_storage_output_rule(m, s, t):
        return m.PowerOutputStorage[s,t] - m.PowerInputStorage[s,t]
    model.NetStorageOutput = Expression(model.Storage, model.TimePeriods, rule=net_storage_output_rule)

@add_model_attr(component_name, requires = {'data_loader': None})
def storage_services(model):
    '''
    Defines a storage component with continuous charge and discharge.
    Charging and discharging in the same time period is not explicitly
    forbidden; with efficiencies below one it is never cheaper than
    curtailing either flow, but it is feasible.
    '''
    _storage_services(model, complementarity=False)

@add_model_attr(component_name, requires = {'data_loader': None})
def storage_services_complementarity(model):
    '''
    Defines a storage component with a binary charge and discharge mode for
    each time period, InputStorage + OutputStorage <= 1, so that a storage
    unit never charges and discharges at the same time.
    '''
    _storage_services(model, complementarity=True)
