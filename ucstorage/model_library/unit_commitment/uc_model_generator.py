#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
Helpers for constructing unit commitment models
'''

from ucstorage.model_library.unit_commitment import \
        params, status_vars, power_vars, generation_limits, \
        uptime_downtime, ramping_limits, storage, \
        power_balance, objective
from collections import namedtuple
import pyomo.environ as pe

import logging
logger = logging.getLogger('ucstorage.model_library.unit_commitment.uc_model_generator')

## tools for generating models

UCFormulation = namedtuple('UCFormulation',
                            ['status_vars',
                             'power_vars',
                             'generation_limits',
                             'uptime_downtime',
                             'ramping_limits',
                             'storage',
                             'power_balance',
                             'objective',
                             ]
                            )

def generate_model( system_data, uc_formulation, relax_binaries=False ):
    """
    returns a UC uc_formulation as a concrete model with the 
    components specified in a UCFormulation, with the option
    to relax the binary variables.

    Parameters
    ----------
    system_data : ucstorage.data.system_data.SystemData
    uc_formulation : ucstorage.model_library.unit_commitment.uc_model_generator.UCFormulation
        The named tuple with the specified formulation
    relax_binaries : bool, optional
        Relaxes all binary variables in the constructed model, resulting in a continuous problem.
        Default is False.

    Returns
    -------
        pyomo.environ.ConcreteModel : The unit commitment formulation specified with the data
                                      from system_data
    """
    return _generate_model( system_data, *_get_formulation_from_UCFormulation( uc_formulation ), relax_binaries )

def _generate_model( system_data,
                    _status_vars,
                    _power_vars,
                    _generation_limits,
                    _uptime_downtime,
                    _ramping_limits,
                    _storage,
                    _power_balance,
                    _objective,
                    _relax_binaries = False,
                    ):

    model = pe.ConcreteModel()

    model.name = "UnitCommitmentStorage"

    ## to relax binaries
    model.relax_binaries = _relax_binaries

    params.load_params(model, system_data)
    getattr(status_vars, _status_vars)(model)
    getattr(power_vars, _power_vars)(model)
    getattr(generation_limits, _generation_limits)(model)
    getattr(uptime_downtime, _uptime_downtime)(model)
    getattr(ramping_limits, _ramping_limits)(model)
    getattr(storage, _storage)(model)
    getattr(power_balance, _power_balance)(model)
    getattr(objective, _objective)(model)

    logger.debug('Built {} with {} variables and {} constraints'.format(model.name,
                 sum(1 for _ in model.component_data_objects(pe.Var)),
                 sum(1 for _ in model.component_data_objects(pe.Constraint))))

    return model

def _get_formulation_from_UCFormulation( uc_formulation ):
    return [  uc_formulation.status_vars,
              uc_formulation.power_vars,
              uc_formulation.generation_limits,
              uc_formulation.uptime_downtime,
              uc_formulation.ramping_limits,
              uc_formulation.storage,
              uc_formulation.power_balance,
              uc_formulation.objective,
            ]
