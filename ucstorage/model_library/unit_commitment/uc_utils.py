#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________


"""
This module contains several helper functions that are useful when
working with unit commitment models
"""

## some useful functions and function decorators for building these dynamic models
from functools import wraps
from pyomo.environ import quicksum

import warnings

import logging
logger = logging.getLogger('ucstorage.model_library.unit_commitment.uc_utils')

def add_model_attr(attr, requires = {}):
    '''
    Tags the model with the name of the formulation component that was
    added (e.g., model.status_vars = 'garver_3bin_vars'), and warns when a
    component is added twice or before the components it depends on.
    '''
    def actual_decorator(func):
        @wraps(func)
        def wrapper(*args, **kwds):
            ## tag this function in the model with the appropriate attribute
            model = args[0]
            if hasattr(model, attr):
                msg = "Warning: adding %s! Model already has %s %s! You may only add one type of %s!"%(func.__name__, attr, getattr(model,attr), attr)
                logger.warning(msg)
                warnings.warn(msg)
            # this checks to see if the required components were already added
            for base_attr in requires:
                if (not hasattr(model, base_attr)) or (getattr(model, base_attr) is None):
                    msg = "Warning: adding %s! %s requires some %s to be added first!"%(func.__name__, func.__name__, base_attr)
                    logger.warning(msg)
                    warnings.warn(msg)
                    continue
                ## None in this context means there is no specific requirement
                if requires[base_attr] is None:
                    continue
                if getattr(model, base_attr) not in requires[base_attr]:
                    msg = "Warning: adding %s! %s requires one of: "%(func.__name__, func.__name__) + ", ".join(requires[base_attr]) + ", to be added first."
                    logger.warning(msg)
                    warnings.warn(msg)
            setattr(model, attr, func.__name__)
            return func(*args, **kwds)
        return wrapper
    return actual_decorator

def is_relaxed(model):
    return bool(getattr(model, 'relax_binaries', False))

def linear_summation(linear_vars, linear_coefs, constant=0.):
    return quicksum((c*v for c,v in zip(linear_coefs, linear_vars)), start=constant)

def time_window(m, t, length):
    '''
    The time periods in the window of the given length ending at t,
    truncated at the start of the horizon
    '''
    first = max(m.TimePeriods.first(), t-length+1)
    return range(first, t+1)
