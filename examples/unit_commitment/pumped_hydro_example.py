#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## Example of solving a day of unit commitment with a pumped hydro
## storage unit, from the csv test instance library
import os

from ucstorage.parsers.csv_parser import create_system_data
from ucstorage.models.unit_commitment import solve_unit_commitment
from ucstorage.model_library.defn import SolutionKind

this_module_path = os.path.dirname(os.path.abspath(__file__))
instance_path = os.path.join(this_module_path, '..', '..', 'ucstorage', 'models',
                             'tests', 'uc_test_instances')

## Create a SystemData object from a generator table and an hourly
## demand table; storage units are the rows flagged is_storage
print('Creating and solving the pumped hydro instance')
system_data = create_system_data(os.path.join(instance_path, 'generators.csv'),
                                 os.path.join(instance_path, 'demand.csv'))

## solve the unit commitment instance using solver cbc -- could use 'appsi_highs',
## 'gurobi', 'cplex', or any valid Pyomo solver name, provided its available.
## compute_prices re-solves the LP with the commitment fixed to get energy prices
solution = solve_unit_commitment(system_data, 'cbc', mipgap=0.01, timelimit=300,
                                 solver_tee=True, compute_prices=True)
print('Solved!')

## print the objective value to the screen
print('Objective value:', solution.objective)

## hourly storage schedule and prices
print(solution.to_wide(SolutionKind.SOC).join(solution.to_wide(SolutionKind.PRICE)))

## write the solution to a csv file
solution.to_dataframe().to_csv(os.path.join(this_module_path, 'pumped_hydro_solution.csv'), index=False)
print('Wrote solution to pumped_hydro_solution.csv')
