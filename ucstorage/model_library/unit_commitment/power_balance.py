#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## system-wide energy balance
from pyomo.environ import *

from .uc_utils import add_model_attr
component_name = 'power_balance'

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'power_vars': None,
                                            'storage_service': None,
                                            })
def copperplate_power_balance(model):
    '''
    Single-node (copperplate) energy balance at each time period: thermal
    generation plus net storage output equals demand. There are no losses
    and no network.

    The dual of PowerBalance[t] is the system energy price, and is only a
    valid price when the model has no integer variables (see
    ucstorage.models.unit_commitment.UnitCommitmentStorageModel.solve).
    '''

    def power_balance_rule(m, t):
        return sum(m.PowerGenerated[g,t] for g in m.ThermalGenerators) \
                + sum(m.NetStorageOutput[s,t] for s in m.Storage) \
                == m.Demand[t]

    model.PowerBalance = Constraint(model.TimePeriods, rule=power_balance_rule)
