#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## functions for adding the basic status variables
from pyomo.environ import *

from .uc_utils import add_model_attr, is_relaxed, linear_summation
component_name = 'status_vars'

def _binary_domain(model):
    if is_relaxed(model):
        return UnitInterval
    return Binary

def _add_unit_on_vars(model):
    # indicator variables for each generator, at each time period.
    model.UnitOn = Var(model.ThermalGenerators, model.TimePeriods, within=_binary_domain(model))

def _add_unit_start_vars(model):
    # unit start
    model.UnitStart = Var(model.ThermalGenerators, model.TimePeriods, within=_binary_domain(model))

def _add_unit_stop_vars(model):
    # unit stop
    model.UnitStop = Var(model.ThermalGenerators, model.TimePeriods, within=_binary_domain(model))

def _fix_free_initial_transitions(model, fix_stop=True):
    ## without an initial status there is no transition into the
    ## first time period, so no start (or stop) is counted there
    initial_time = value(model.InitialTime)
    for g in model.ThermalGenerators:
        if g in model.GeneratorsWithInitialStatus:
            continue
        model.UnitStart[g, initial_time].fix(0)
        if fix_stop:
            model.UnitStop[g, initial_time].fix(0)

def _3bin_logic(model):

    initial_time = value(model.InitialTime)
    def logical_rule(m,g,t):
        if t == initial_time:
            if g not in m.GeneratorsWithInitialStatus:
                return Constraint.Skip
            return (linear_summation(
                        linear_vars=[m.UnitOn[g,t], m.UnitStart[g,t], m.UnitStop[g,t]],
                        linear_coefs=[1., -1., 1.],
                        ), m.UnitOnT0[g])
        return (linear_summation(
                    linear_vars=[m.UnitOn[g,t], m.UnitOn[g,t-1], m.UnitStart[g,t], m.UnitStop[g,t]],
                    linear_coefs=[1., -1., -1., 1.],
                    ), 0.)

    model.Logical = Constraint(model.ThermalGenerators, model.TimePeriods, rule=logical_rule)

    ## a unit cannot start and stop in the same time period
    def start_stop_exclusion_rule(m,g,t):
        return m.UnitStart[g,t] + m.UnitStop[g,t] <= 1
    model.StartStopExclusion = Constraint(model.ThermalGenerators, model.TimePeriods, rule=start_stop_exclusion_rule)

def _2bin_logic(model):

    initial_time = value(model.InitialTime)
    def logical_rule(m,g,t):
        if t == initial_time:
            if g not in m.GeneratorsWithInitialStatus:
                return Constraint.Skip
            return (None, linear_summation([m.UnitOn[g,t], m.UnitStart[g,t]], [1.,-1.]), m.UnitOnT0[g])
        return (None, linear_summation([m.UnitOn[g,t], m.UnitOn[g,t-1], m.UnitStart[g,t]], [1.,-1.,-1.]), 0.)

    model.Logical = Constraint(model.ThermalGenerators, model.TimePeriods, rule=logical_rule)

    ## keeps the projected stop expression in {0,1}
    def start_requires_on_rule(m,g,t):
        return m.UnitStart[g,t] <= m.UnitOn[g,t]
    model.StartRequiresOn = Constraint(model.ThermalGenerators, model.TimePeriods, rule=start_requires_on_rule)

    def start_requires_previously_off_rule(m,g,t):
        if t == initial_time:
            if g not in m.GeneratorsWithInitialStatus:
                return Constraint.Skip
            return m.UnitStart[g,t] <= 1 - m.UnitOnT0[g]
        return m.UnitStart[g,t] <= 1 - m.UnitOn[g,t-1]
    model.StartRequiresPreviouslyOff = Constraint(model.ThermalGenerators, model.TimePeriods, rule=start_requires_previously_off_rule)

@add_model_attr(component_name, requires = {'data_loader': None} )
def garver_3bin_vars(model):
    '''
    This add the common 3-binary variables per generator per time period.
    One for start, one for stop, and one for on, as originally proposed in

    L. L. Garver. Power generation scheduling by integer programming-development
    of theory. Power Apparatus and Systems, Part III. Transactions of the
    American Institute of Electrical Engineers, 81(3): 730–734, April 1962. ISSN
    0097-2460.

    The variables are linked by UnitOn[t] - UnitOn[t-1] = UnitStart[t] - UnitStop[t].
    '''

    _add_unit_on_vars(model)
    _add_unit_start_vars(model)
    _add_unit_stop_vars(model)

    _3bin_logic(model)
    _fix_free_initial_transitions(model)

@add_model_attr(component_name, requires = {'data_loader': None} )
def garver_2bin_vars(model):
    '''
    This adds the unit start and unit on variables, and causes the
    unit stop variable to be projected out.
    '''

    _add_unit_on_vars(model)
    _add_unit_start_vars(model)

    initial_time = value(model.InitialTime)
    # unit stop
    def unit_stop_expr_rule(m, g, t):
        if t == initial_time:
            if g not in m.GeneratorsWithInitialStatus:
                return 0.
            return m.UnitOnT0[g] - m.UnitOn[g,t] + m.UnitStart[g,t]
        return m.UnitOn[g,t-1] - m.UnitOn[g,t] + m.UnitStart[g,t]
    model.UnitStop = Expression(model.ThermalGenerators, model.TimePeriods, rule=unit_stop_expr_rule)

    _2bin_logic(model)
    _fix_free_initial_transitions(model, fix_stop=False)
