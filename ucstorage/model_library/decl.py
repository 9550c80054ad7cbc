#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module has a number of utilities to assist in writing declarations for
sets, parameters and variables on unit commitment models
"""
import pyomo.environ as pe

def declare_set(setname, model, index_set, **kwargs):
    # transform the index set into a Pyomo Set
    if 'ordered' not in kwargs:
        # add ordered=True if the user did not specify anything
        kwargs['ordered'] = True
    pyomo_index_set = pe.Set(initialize=list(index_set), **kwargs)
    model.add_component(setname, pyomo_index_set)
    return pyomo_index_set

def declare_param(paramname, model, index_set, values, **kwargs):
    # values is either a scalar or a dictionary keyed like index_set
    if index_set is None:
        model.add_component(paramname, pe.Param(initialize=values, **kwargs))
    else:
        model.add_component(paramname, pe.Param(index_set, initialize=values, **kwargs))
    return getattr(model, paramname)

def declare_var(varname, model, index_set, **kwargs):
    # if user provides bounds as dict of tuple, translate it
    # into something that Pyomo understands
    if kwargs and 'bounds' in kwargs and isinstance(kwargs['bounds'], dict):
        d = kwargs['bounds']
        bounds_rule = lambda m, *k: d[k[0] if len(k) == 1 else k]
        kwargs['bounds'] = bounds_rule

    if index_set is None:
        model.add_component(varname, pe.Var(**kwargs))
    elif isinstance(index_set, (tuple, list)) and all(isinstance(s, pe.Set) for s in index_set):
        # product of existing pyomo sets, e.g., (generators, time periods)
        model.add_component(varname, pe.Var(*index_set, **kwargs))
    else:
        pyomo_index_set = declare_set("_var_{}_index_set".format(varname), model, index_set)
        model.add_component(varname, pe.Var(pyomo_index_set, **kwargs))
    return getattr(model, varname)
