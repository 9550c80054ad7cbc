#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for ramping constraints
from pyomo.environ import *

from .uc_utils import add_model_attr
component_name = 'ramping_limits'

def _ramp_up_binding(m, g):
    return value(m.NominalRampUpLimit[g]) < value(m.MaximumPowerOutput[g])

def _ramp_down_binding(m, g):
    return value(m.NominalRampDownLimit[g]) < value(m.MaximumPowerOutput[g])

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': ['garver_3bin_vars', 'garver_2bin_vars'],
                                            'power_vars': None,
                                            })
def startup_shutdown_ramping(model):
    '''
    Hour-to-hour ramping limits for generators with a ramp rate given. A unit
    that starts up may jump to max(MinimumPowerOutput, ramp limit) and a unit
    must be at or below max(MinimumPowerOutput, ramp limit) in the period
    before it shuts down.

    Ramping into the first time period is not limited, since the output
    before the horizon is not known.
    '''

    initial_time = value(model.InitialTime)

    def enforce_ramp_up_rule(m, g, t):
        if t == initial_time or not _ramp_up_binding(m, g):
            return Constraint.Skip
        ru = value(m.NominalRampUpLimit[g])
        su = max(value(m.MinimumPowerOutput[g]), ru)
        return m.PowerGenerated[g,t] - m.PowerGenerated[g,t-1] <= \
                ru*(m.UnitOn[g,t] - m.UnitStart[g,t]) + su*m.UnitStart[g,t] \
                - m.MinimumPowerOutput[g]*m.UnitStop[g,t]

    model.EnforceRampUpLimits = Constraint(model.GeneratorsWithRampUpLimit, model.TimePeriods, rule=enforce_ramp_up_rule)

    def enforce_ramp_down_rule(m, g, t):
        if t == initial_time or not _ramp_down_binding(m, g):
            return Constraint.Skip
        rd = value(m.NominalRampDownLimit[g])
        sd = max(value(m.MinimumPowerOutput[g]), rd)
        return m.PowerGenerated[g,t-1] - m.PowerGenerated[g,t] <= \
                rd*m.UnitOn[g,t] - m.MinimumPowerOutput[g]*m.UnitStart[g,t] \
                + sd*m.UnitStop[g,t]

    model.EnforceRampDownLimits = Constraint(model.GeneratorsWithRampDownLimit, model.TimePeriods, rule=enforce_ramp_down_rule)

@add_model_attr(component_name, requires = {'data_loader': None})
def no_ramping(model):
    '''
    Ignores ramping limits.
    '''
    pass
