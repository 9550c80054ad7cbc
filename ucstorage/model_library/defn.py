#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

from enum import Enum

class SolveStatus(Enum):
    '''
    OPTIMAL: optimal to within the requested relative gap
    FEASIBLE: a feasible solution was found, optimality not reported
    LIMIT_REACHED: a time or iteration limit was hit; the best incumbent,
                   if any, is returned along with its gap
    INFEASIBLE: no commitment and dispatch satisfies the constraints
    UNBOUNDED: the objective is unbounded below
    '''
    OPTIMAL = 1
    FEASIBLE = 2
    LIMIT_REACHED = 3
    INFEASIBLE = 4
    UNBOUNDED = 5

class SolutionKind(Enum):
    GENERATION = 'generation'
    COMMITMENT = 'commitment'
    STARTUP = 'startup'
    SHUTDOWN = 'shutdown'
    CHARGE = 'charge'
    DISCHARGE = 'discharge'
    SOC = 'soc'
    PRICE = 'price'
