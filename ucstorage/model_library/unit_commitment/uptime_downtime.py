#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for minimum uptime/downtime constraints
from pyomo.environ import *

from .uc_utils import add_model_attr, linear_summation, time_window
component_name = 'uptime_downtime'

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': ['garver_3bin_vars', 'garver_2bin_vars']})
def rajan_takriti_UT_DT(model):
    '''
    Uptime/downtime constraints (3) and (4) from

    D. Rajan and S. Takriti. Minimum up/down polytopes of the unit commitment
    problem with start-up costs. IBM Res. Rep, 2005.

    The windows are truncated at the first time period, since the time
    a unit has already spent on (off) before the horizon is not known.
    '''

    #######################
    # up-time constraints #
    #######################

    def uptime_rule(m,g,t):
        if value(m.ScaledMinimumUpTime[g]) <= 1:
            return Constraint.Skip
        linear_vars = [m.UnitStart[g,i] for i in time_window(m, t, value(m.ScaledMinimumUpTime[g]))]
        linear_coefs = [1.]*len(linear_vars)
        linear_vars.append(m.UnitOn[g,t])
        linear_coefs.append(-1.)
        return (None, linear_summation(linear_vars, linear_coefs), 0.)

    model.UpTime = Constraint(model.ThermalGenerators, model.TimePeriods, rule=uptime_rule)

    #########################
    # down-time constraints #
    #########################

    def downtime_rule(m,g,t):
        if value(m.ScaledMinimumDownTime[g]) <= 1:
            return Constraint.Skip
        linear_vars = [m.UnitStop[g,i] for i in time_window(m, t, value(m.ScaledMinimumDownTime[g]))]
        linear_coefs = [1.]*len(linear_vars)
        linear_vars.append(m.UnitOn[g,t])
        linear_coefs.append(1.)
        return (None, linear_summation(linear_vars, linear_coefs), 1.)

    model.DownTime = Constraint(model.ThermalGenerators, model.TimePeriods, rule=downtime_rule)

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': None})
def no_UT_DT(model):
    '''
    Ignores minimum up and down times.
    '''
    pass
