#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the cost expressions and the objective
from pyomo.environ import *

from .uc_utils import add_model_attr, linear_summation
component_name = 'objective'

def _add_production_costs(model):

    def production_cost_rule(m, g, t):
        return m.ProductionCostCoefficient[g]*m.PowerGenerated[g,t]
    model.ProductionCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=production_cost_rule)

def _add_startup_costs(model):

    def startup_cost_rule(m, g, t):
        return m.StartupCost[g]*m.UnitStart[g,t]
    model.StartupCostIncurred = Expression(model.ThermalGenerators, model.TimePeriods, rule=startup_cost_rule)

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': None,
                                            'power_vars': None,
                                            'generation_limits': None,
                                            'storage_service': None,
                                            'power_balance': None,
                                            })
def basic_objective(model):
    '''
    Minimize variable production cost plus startup cost over all
    generators and time periods. Storage has no cost of its own.
    '''

    _add_production_costs(model)
    _add_startup_costs(model)

    def compute_total_production_cost_rule(m):
        return sum(m.ProductionCost[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
    model.TotalProductionCost = Expression(rule=compute_total_production_cost_rule)

    def compute_total_startup_cost_rule(m):
        return sum(m.StartupCostIncurred[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
    model.TotalStartupCost = Expression(rule=compute_total_startup_cost_rule)

    model.TotalCostObjective = Objective(expr=linear_summation([model.TotalProductionCost, model.TotalStartupCost], [1., 1.]),
                                         sense=minimize)
