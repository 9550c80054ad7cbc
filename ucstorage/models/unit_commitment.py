#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
This module provides the unit commitment with storage model: a builder
that turns a SystemData object into a self-contained pyomo model, and the
functions that solve it and return a Solution.

Energy prices (duals of the energy balance) are only meaningful for a
continuous model. For the mixed-integer model they are computed by fixing
every integer decision at its MILP value, relaxing integrality and
re-solving the resulting LP; they are never read off the MILP itself.
'''

import logging

import pyomo.environ as pe
from pyomo.environ import value

from ucstorage.common.solver_interface import _solve_model, achieved_gap, \
        find_available_solver, SolverError
from ucstorage.data.system_data import SystemData
from ucstorage.model_library.defn import SolveStatus
from ucstorage.model_library.unit_commitment.uc_model_generator \
        import UCFormulation, generate_model
from ucstorage.models.solution import Solution

logger = logging.getLogger('ucstorage.models.unit_commitment')

DEFAULT_MIPGAP = 0.01

## tried in this order when no solver is given
DEFAULT_SOLVERS = ('appsi_highs', 'cbc', 'glpk', 'gurobi', 'cplex')

DEFAULT_FORMULATION = UCFormulation(status_vars='garver_3bin_vars',
                                    power_vars='basic_power_vars',
                                    generation_limits='CA_generation_limits',
                                    uptime_downtime='rajan_takriti_UT_DT',
                                    ramping_limits='startup_shutdown_ramping',
                                    storage='storage_services',
                                    power_balance='copperplate_power_balance',
                                    objective='basic_objective',
                                    )

def create_unit_commitment_storage_model(system_data,
                                         formulation=None,
                                         relaxed=False,
                                         storage_complementarity=False):
    '''
    Create a new unit commitment with storage model

    Parameters
    ----------
    system_data : ucstorage.data.system_data.SystemData
        The generators, storage units and demand
    formulation : UCFormulation (optional)
        The formulation components to use. Default is DEFAULT_FORMULATION.
    relaxed : bool (optional)
        If True, creates a model with the binary variables relaxed to [0,1].
        Default is False.
    storage_complementarity : bool (optional)
        If True, adds binary charge/discharge mode variables so no storage
        unit charges and discharges in the same hour. Default is False.

    Returns
    -------
        pyomo.environ.ConcreteModel unit commitment model
    '''
    if formulation is None:
        formulation = DEFAULT_FORMULATION
    if storage_complementarity:
        formulation = formulation._replace(storage='storage_services_complementarity')
    return generate_model(system_data, formulation, relax_binaries=relaxed)

def _resolve_solver(solver):
    if solver is not None:
        return solver
    solver = find_available_solver(DEFAULT_SOLVERS)
    if solver is None:
        raise SolverError('No MILP solver found; tried {}'.format(', '.join(DEFAULT_SOLVERS)))
    logger.debug('Using solver {}'.format(solver))
    return solver

def _series(m, var, index_set):
    return {k: {t: value(var[k,t]) for t in m.TimePeriods} for k in index_set}

def _rounded_series(m, var, index_set):
    return {k: {t: int(round(value(var[k,t]))) for t in m.TimePeriods} for k in index_set}

def _fix_integer_decisions(m):
    ## fixes every discrete variable at its (rounded) current value and
    ## makes it continuous, which leaves an LP with the same dispatch
    for v in m.component_data_objects(pe.Var, descend_into=True):
        if not (v.is_binary() or v.is_integer()):
            continue
        val = 0 if v.value is None else int(round(v.value))
        v.domain = pe.Reals
        v.setlb(None)
        v.setub(None)
        v.fix(val)

def _energy_prices(m):
    return {t: value(m.dual[m.PowerBalance[t]]) for t in m.TimePeriods}

def _compute_fixed_commitment_prices(m, solver, solver_tee, symbolic_solver_labels, solver_options):
    lp = m.clone()
    _fix_integer_decisions(lp)
    lp.dual = pe.Suffix(direction=pe.Suffix.IMPORT)

    lp, results, status, has_solution = _solve_model(lp, solver, mipgap=None, timelimit=None,
                                                     solver_tee=solver_tee,
                                                     symbolic_solver_labels=symbolic_solver_labels,
                                                     solver_options=solver_options)
    if status != SolveStatus.OPTIMAL or not has_solution:
        logger.warning('Fixed-commitment LP for energy prices terminated with {}; '
                       'no prices reported'.format(status.name))
        return None
    return _energy_prices(lp)

def _save_uc_results(m, results, status, has_solution, relaxed, prices=None):
    system_data = m.system_data
    time_periods = list(m.TimePeriods)

    if not has_solution:
        return Solution(status, results.solver.termination_condition,
                        time_periods=time_periods, demand=system_data.demand)

    if relaxed:
        commitment = _series(m, m.UnitOn, m.ThermalGenerators)
        startup = _series(m, m.UnitStart, m.ThermalGenerators)
        shutdown = _series(m, m.UnitStop, m.ThermalGenerators)
    else:
        commitment = _rounded_series(m, m.UnitOn, m.ThermalGenerators)
        startup = _rounded_series(m, m.UnitStart, m.ThermalGenerators)
        shutdown = _rounded_series(m, m.UnitStop, m.ThermalGenerators)

    return Solution(status, results.solver.termination_condition,
                    objective=value(m.TotalCostObjective),
                    mip_gap=achieved_gap(results),
                    time_periods=time_periods,
                    demand=system_data.demand,
                    generation=_series(m, m.PowerGenerated, m.ThermalGenerators),
                    commitment=commitment,
                    startup=startup,
                    shutdown=shutdown,
                    charge=_series(m, m.PowerInputStorage, m.Storage),
                    discharge=_series(m, m.PowerOutputStorage, m.Storage),
                    soc=_series(m, m.SocStorage, m.Storage),
                    prices=prices,
                    prices_valid=prices is not None,
                    )


class UnitCommitmentStorageModel(object):
    '''
    Builds a unit commitment model with storage from a SystemData object.

    The pyomo model is constructed once, in the constructor, and is never
    modified afterwards: every call to solve works on its own copy, so
    repeated solves are independent of each other.

    Parameters
    ----------
    system_data : ucstorage.data.system_data.SystemData
        The generators, storage units and demand
    formulation : UCFormulation (optional)
        The formulation components to use. Default is DEFAULT_FORMULATION.
    relaxed : bool (optional)
        If True, relaxes the binary variables to [0,1]. Default is False.
    storage_complementarity : bool (optional)
        If True, forbids simultaneous charging and discharging with binary
        mode variables. Default is False.
    '''
    def __init__(self, system_data, formulation=None, relaxed=False, storage_complementarity=False):
        if not isinstance(system_data, SystemData):
            raise TypeError('system_data must be a SystemData object, got {}'.format(type(system_data).__name__))
        self.system_data = system_data
        self.relaxed = relaxed
        self.model = create_unit_commitment_storage_model(system_data,
                                                          formulation=formulation,
                                                          relaxed=relaxed,
                                                          storage_complementarity=storage_complementarity)

    def solve(self,
              solver=None,
              mipgap=DEFAULT_MIPGAP,
              timelimit=None,
              solver_tee=False,
              symbolic_solver_labels=False,
              solver_options=None,
              compute_prices=False,
              return_model=False,
              return_results=False):
        '''
        Solve a copy of the model once

        Parameters
        ----------
        solver : str or pyomo.opt.base.solvers.OptSolver (optional)
            Either a string specifying a pyomo solver name, or an instantiated
            pyomo solver. Default of None uses the first available solver of
            DEFAULT_SOLVERS.
        mipgap : float (optional)
            Relative optimality gap at which the solver may stop; default is 0.01
        timelimit : float (optional)
            Time limit in seconds. Default of None results in no time limit
            being set -- runs until mipgap is satisfied
        solver_tee : bool (optional)
            Display solver log. Default is False.
        symbolic_solver_labels : bool (optional)
            Use symbolic solver labels. Useful for debugging; default is False.
        solver_options : dict (optional)
            Other options to pass into the solver. Default is dict().
        compute_prices : bool (optional)
            If True, reports energy prices; for the mixed-integer model this
            re-solves the LP with all integer decisions fixed. Default is False.
        return_model : bool (optional)
            If True, returns the solved pyomo model object
        return_results : bool (optional)
            If True, returns the pyomo results object

        Returns
        -------
            ucstorage.models.solution.Solution (and the model and/or results
            if requested)
        '''
        solver = _resolve_solver(solver)
        m = self.model.clone()

        if self.relaxed and compute_prices:
            m.dual = pe.Suffix(direction=pe.Suffix.IMPORT)

        m, results, status, has_solution = _solve_model(m, solver, mipgap=mipgap, timelimit=timelimit,
                                                        solver_tee=solver_tee,
                                                        symbolic_solver_labels=symbolic_solver_labels,
                                                        solver_options=solver_options)

        prices = None
        if compute_prices and has_solution:
            if self.relaxed:
                prices = _energy_prices(m)
            else:
                prices = _compute_fixed_commitment_prices(m, solver, solver_tee,
                                                          symbolic_solver_labels, solver_options)

        solution = _save_uc_results(m, results, status, has_solution, self.relaxed, prices)

        if solution.is_feasible:
            logger.info('Unit commitment terminated with {}: total cost {:.2f}, gap {}'.format(
                        status.name, solution.objective, solution.mip_gap))
        else:
            logger.info('Unit commitment terminated with {} ({}); no solution available'.format(
                        status.name, solution.termination_condition))

        if return_model and return_results:
            return solution, m, results
        elif return_model:
            return solution, m
        elif return_results:
            return solution, results
        return solution


def solve_unit_commitment(system_data,
                          solver=None,
                          mipgap=DEFAULT_MIPGAP,
                          timelimit=None,
                          solver_tee=False,
                          symbolic_solver_labels=False,
                          solver_options=None,
                          formulation=None,
                          relaxed=False,
                          storage_complementarity=False,
                          compute_prices=False,
                          return_model=False,
                          return_results=False):
    '''
    Create and solve a new unit commitment model with storage

    Parameters
    ----------
    system_data : ucstorage.data.system_data.SystemData
        The generators, storage units and demand
    solver : str or pyomo.opt.base.solvers.OptSolver (optional)
        Either a string specifying a pyomo solver name, or an instantiated
        pyomo solver. Default of None uses the first available solver.
    mipgap : float (optional)
        Mipgap to use for unit commitment solve; default is 0.01
    timelimit : float (optional)
        Time limit for unit commitment run. Default of None results in no time
        limit being set -- runs until mipgap is satisfied
    solver_tee : bool (optional)
        Display solver log. Default is False.
    symbolic_solver_labels : bool (optional)
        Use symbolic solver labels. Useful for debugging; default is False.
    solver_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    formulation : UCFormulation (optional)
        Formulation components for the model. Default is DEFAULT_FORMULATION.
    relaxed : bool (optional)
        If True, solves the LP relaxation of the unit commitment model
    storage_complementarity : bool (optional)
        If True, forbids simultaneous charging and discharging
    compute_prices : bool (optional)
        If True, reports energy prices from a continuous model
    return_model : bool (optional)
        If True, returns the pyomo model object
    return_results : bool (optional)
        If True, returns the pyomo results object
    '''

    uc = UnitCommitmentStorageModel(system_data,
                                    formulation=formulation,
                                    relaxed=relaxed,
                                    storage_complementarity=storage_complementarity)
    return uc.solve(solver=solver,
                    mipgap=mipgap,
                    timelimit=timelimit,
                    solver_tee=solver_tee,
                    symbolic_solver_labels=symbolic_solver_labels,
                    solver_options=solver_options,
                    compute_prices=compute_prices,
                    return_model=return_model,
                    return_results=return_results)

def solve(generators, storage_units, demand_series, mip_gap=DEFAULT_MIPGAP, solver=None, **kwargs):
    '''
    Solve one day of unit commitment with storage

    Parameters
    ----------
    generators : iterable of ucstorage.data.system_data.Generator
        Non-empty set of generators
    storage_units : iterable of ucstorage.data.system_data.StorageUnit
        Zero or more storage units
    demand_series : sequence of float
        Demand (MW) for each hour
    mip_gap : float (optional)
        Relative optimality gap; default is 0.01
    solver : str or pyomo solver (optional)
        Default of None uses the first available solver
    kwargs : dictionary (optional)
        Additional arguments for solve_unit_commitment

    Returns
    -------
        ucstorage.models.solution.Solution
    '''
    system_data = SystemData(generators, storage_units, demand_series)
    return solve_unit_commitment(system_data, solver=solver, mipgap=mip_gap, **kwargs)


if __name__ == '__main__':
    import os
    from ucstorage.parsers.csv_parser import create_system_data

    instance_dir = os.path.join(os.path.dirname(__file__), 'tests', 'uc_test_instances')
    sd = create_system_data(os.path.join(instance_dir, 'generators.csv'),
                            os.path.join(instance_dir, 'demand.csv'))
    print(solve_unit_commitment(sd))
