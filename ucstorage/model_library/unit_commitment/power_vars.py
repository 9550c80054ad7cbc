#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the power output variables
from pyomo.environ import *

import ucstorage.model_library.decl as decl
from .uc_utils import add_model_attr
component_name = 'power_vars'

@add_model_attr(component_name, requires = {'data_loader': None} )
def basic_power_vars(model):
    '''
    Real power output of each thermal generator at each time period, in MW,
    bounded by [0, MaximumPowerOutput]. The commitment-dependent limits are
    added by the generation_limits component.
    '''
    bounds = {(g,t): (0., value(model.MaximumPowerOutput[g]))
                for g in model.ThermalGenerators for t in model.TimePeriods}
    decl.declare_var('PowerGenerated', model, (model.ThermalGenerators, model.TimePeriods),
                     within=NonNegativeReals, bounds=bounds, initialize=0.)
