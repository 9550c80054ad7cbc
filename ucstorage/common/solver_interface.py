#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This file includes the solver interfaces for ucstorage.
"""
import math
import logging

import pyomo.opt as po
from pyomo.solvers.plugins.solvers.persistent_solver import PersistentSolver

from ucstorage.model_library.defn import SolveStatus

logger = logging.getLogger('ucstorage.common.solver_interface')


class SolverError(RuntimeError):
    '''
    Raised when the solver is unavailable or fails in a way that is not an
    ordinary solve outcome (e.g., an internal error or a licensing problem).
    '''
    pass


## termination conditions which come with a solution that can be loaded
_solution_termination_conditions = {
                                   po.TerminationCondition.globallyOptimal : SolveStatus.OPTIMAL,
                                   po.TerminationCondition.locallyOptimal : SolveStatus.OPTIMAL,
                                   po.TerminationCondition.optimal : SolveStatus.OPTIMAL,
                                   po.TerminationCondition.feasible : SolveStatus.FEASIBLE,
                                   po.TerminationCondition.other : SolveStatus.FEASIBLE,
                                   po.TerminationCondition.maxTimeLimit : SolveStatus.LIMIT_REACHED,
                                   po.TerminationCondition.maxIterations : SolveStatus.LIMIT_REACHED,
                                   po.TerminationCondition.maxEvaluations : SolveStatus.LIMIT_REACHED,
                                   po.TerminationCondition.minFunctionValue : SolveStatus.LIMIT_REACHED,
                                   po.TerminationCondition.minStepLength : SolveStatus.LIMIT_REACHED,
                                  }

## termination conditions which are ordinary outcomes, but with no solution
_no_solution_termination_conditions = {
                                   po.TerminationCondition.infeasible : SolveStatus.INFEASIBLE,
                                   po.TerminationCondition.infeasibleOrUnbounded : SolveStatus.INFEASIBLE,
                                   po.TerminationCondition.unbounded : SolveStatus.UNBOUNDED,
                                  }


def _set_options(solver, mipgap=None, timelimit=None, other_options=None, solver_name=None):
    '''
    Create options

    Parameters
    ----------
    solver : pyomo solver
        An instantiated pyomo solver
    mipgap : float (optional)
        Relative mipgap to use for unit commitment solve
    timelimit : float (optional)
        Time limit for unit commitment run. Default of None results in no time
        limit being set -- runs until mipgap is satisfied
    other_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    solver_name : str (optional)
        Name used to pick the option names; defaults to solver.name
    '''

    if solver_name is None:
        solver_name = getattr(solver, 'name', '')
    solver_name = str(solver_name).lower()

    if 'gurobi' in solver_name:
        if mipgap is not None:
            solver.options.MIPGap = mipgap
        if timelimit is not None:
            solver.options.TimeLimit = timelimit
    elif 'cplex' in solver_name:
        if mipgap is not None:
            solver.options.mip_tolerances_mipgap = mipgap
        if timelimit is not None:
            solver.options.timelimit = timelimit
    elif 'glpk' in solver_name:
        if mipgap is not None:
            solver.options.mipgap = mipgap
        if timelimit is not None:
            solver.options.tmlim = timelimit
    elif 'cbc' in solver_name:
        if mipgap is not None:
            solver.options.ratioGap = mipgap
        if timelimit is not None:
            solver.options.sec = timelimit
    elif 'xpress' in solver_name:
        if mipgap is not None:
            solver.options.mipgap = mipgap
        if timelimit is not None:
            solver.options.maxtime = timelimit
    elif 'highs' in solver_name:
        if mipgap is not None:
            solver.options['mip_rel_gap'] = mipgap
        if timelimit is not None:
            solver.options['time_limit'] = timelimit
    else:
        logger.warning('Solver {} not recognized; mipgap and timelimit are not set'.format(solver_name))

    if other_options is not None:
        for key, opt in other_options.items():
            solver.options[key] = opt

def _get_solver(solver):
    if isinstance(solver, str):
        solver_name = solver
        solver = po.SolverFactory(solver)
    elif hasattr(solver, 'solve'):
        solver_name = getattr(solver, 'name', type(solver).__name__)
    else:
        raise SolverError('solver must be string or an instantiated pyomo solver')

    try:
        available = solver.available(exception_flag=False)
    except Exception as e:
        raise SolverError('Solver {} is not available: {}'.format(solver_name, e)) from e
    if not available:
        raise SolverError('Solver {} is not available'.format(solver_name))
    return solver, solver_name

def classify_termination(results, has_solution=None):
    '''
    Maps the termination condition of a pyomo results object onto a
    SolveStatus. Raises SolverError for conditions that are not an ordinary
    solve outcome.

    Returns
    -------
        tuple : (SolveStatus, bool) the status and whether a solution is available
    '''
    termination_condition = results.solver.termination_condition
    if has_solution is None:
        has_solution = len(results.solution) > 0

    if termination_condition in _solution_termination_conditions:
        status = _solution_termination_conditions[termination_condition]
        if status == SolveStatus.FEASIBLE and not has_solution:
            raise SolverError('Problem encountered during solve, termination_condition {}'.format(termination_condition))
        return status, has_solution
    if termination_condition in _no_solution_termination_conditions:
        return _no_solution_termination_conditions[termination_condition], False
    raise SolverError('Problem encountered during solve, termination_condition {}'.format(termination_condition))

def achieved_gap(results):
    '''
    Relative gap between the incumbent (upper bound) and the best bound
    (lower bound) of a minimization, or None if either is not reported.
    '''
    try:
        ub = float(results.problem.upper_bound)
        lb = float(results.problem.lower_bound)
    except (TypeError, ValueError, AttributeError, IndexError):
        return None
    if not (math.isfinite(ub) and math.isfinite(lb)):
        return None
    return abs(ub - lb) / max(abs(ub), 1e-10)

def _solve_model(model,
                 solver,
                 mipgap=None,
                 timelimit = None,
                 solver_tee = True,
                 symbolic_solver_labels = False,
                 solver_options = None,
                 solve_method_options = None,
                 return_solver = False,
                 set_instance = True):
    '''
    Solve a ucstorage unit commitment model

    Parameters
    ----------
    model : pyomo.environ.ConcreteModel
        A pyomo ConcreteModel object.
    solver : str or pyomo.opt.base.solvers.OptSolver
        Either a string specifying a pyomo solver name, or an instantiated pyomo solver
    mipgap : float (optional)
        Relative mipgap to use for unit commitment solve
    timelimit : float (optional)
        Time limit for unit commitment run. Default of None results in no time
        limit being set -- runs until mipgap is satisfied
    solver_tee : bool (optional)
        Display solver log. Default is True.
    symbolic_solver_labels : bool (optional)
        Use symbolic solver labels. Useful for debugging; default is False.
    solver_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    solve_method_options : dict (optional)
        Other options to pass into the pyomo solve method. Default is dict().
    return_solver : bool (optional)
        Returns the solver object
    set_instance : bool
        When the solver is persistent, this controls whether set_instance
        is called. Default is True

    Returns
    -------
        tuple : (model, results, status, has_solution) or
                (model, results, status, has_solution, solver)
                where status is a ucstorage.model_library.defn.SolveStatus
                and has_solution tells whether a solution was loaded
    '''

    solver, solver_name = _get_solver(solver)

    _set_options(solver, mipgap, timelimit, solver_options, solver_name=solver_name)

    if solve_method_options is None:
        solve_method_options = dict()

    logger.debug('Solving {} with {}'.format(model.name, solver_name))

    if isinstance(solver, PersistentSolver):
        if set_instance:
            solver.set_instance(model, symbolic_solver_labels=symbolic_solver_labels)
        results = solver.solve(model, tee=solver_tee, load_solutions=False, save_results=False, **solve_method_options)
    else:
        results = solver.solve(model, tee=solver_tee, \
                              symbolic_solver_labels=symbolic_solver_labels, load_solutions=False,
                              **solve_method_options)

    if isinstance(solver, PersistentSolver):
        ## persistent solvers do not save the solution on the results object
        has_solution = (results.solver.termination_condition in _solution_termination_conditions) and \
                (achieved_gap(results) is not None or
                 _solution_termination_conditions[results.solver.termination_condition] != SolveStatus.LIMIT_REACHED)
    else:
        has_solution = None
    status, has_solution = classify_termination(results, has_solution)
    logger.debug('Solver {} terminated with {} ({})'.format(solver_name,
                 results.solver.termination_condition, status.name))

    if has_solution:
        if isinstance(solver, PersistentSolver):
            solver.load_vars()
            if hasattr(model, "dual"):
                solver.load_duals()
        else:
            model.solutions.load_from(results)

    if return_solver:
        return model, results, status, has_solution, solver
    return model, results, status, has_solution

def find_available_solver(candidates):
    '''
    Returns the name of the first solver in candidates that pyomo can use,
    or None if none of them are available.
    '''
    for name in candidates:
        try:
            if po.SolverFactory(name).available(exception_flag=False):
                return name
        except Exception:
            logger.debug('Solver {} could not be checked for availability'.format(name), exc_info=True)
            continue
    return None
