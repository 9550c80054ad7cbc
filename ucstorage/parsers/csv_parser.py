#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Parser for delimited text (csv) input tables.

Two tables are read:

* a generator table, one row per generator, where storage units are rows
  flagged with a truthy ``is_storage`` column
* an hourly demand table with ``hour`` and ``demand`` columns

Column names are stripped and lower-cased on load, so ``P_Max`` and
``p_max`` are the same column.
"""
import logging
import pandas as pd

from ucstorage.data.system_data import SystemData, InputValidationError, \
        create_generator, create_storage_unit

logger = logging.getLogger('ucstorage.parsers.csv_parser')

## first alias found wins
_ID_COLUMNS = ['id', 'r_id', 'name', 'resource']
_BUS_COLUMNS = ['bus', 'zone']
_VARIABLE_COST_COLUMNS = ['variable_cost', 'var_cost', 'var_om_cost_per_mwh']
_STARTUP_COST_COLUMNS = ['startup_cost', 'start_cost']

_REQUIRED_GENERATOR_COLUMNS = ['p_min', 'p_max']

_TRUE_STRINGS = {'1', 'true', 't', 'yes', 'y'}


def _normalize_columns(df):
    df.columns = [str(c).strip().lower() for c in df.columns]
    return df

def _find_column(df, aliases, required=True):
    for alias in aliases:
        if alias in df.columns:
            return alias
    if required:
        raise InputValidationError(aliases[0], 'missing required column (accepted names: {})'.format(', '.join(aliases)))
    return None

def _row_value(row, column, default=None):
    if column is None or column not in row.index:
        return default
    value = row[column]
    if pd.isna(value):
        return default
    return value

def _is_truthy(value):
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)

def read_generators(generators_file, **read_csv_kwargs):
    '''
    Read a generator table

    Parameters
    ----------
    generators_file : str or file-like
        Path to (or buffer holding) a delimited text table with a header row
    read_csv_kwargs : dictionary (optional)
        Additional arguments for pandas.read_csv (e.g., sep)

    Returns
    -------
        tuple : (list of Generator, list of StorageUnit)
    '''
    gen_df = _normalize_columns(pd.read_csv(generators_file, **read_csv_kwargs))

    id_col = _find_column(gen_df, _ID_COLUMNS)
    bus_col = _find_column(gen_df, _BUS_COLUMNS, required=False)
    vc_col = _find_column(gen_df, _VARIABLE_COST_COLUMNS)
    sc_col = _find_column(gen_df, _STARTUP_COST_COLUMNS, required=False)
    for col in _REQUIRED_GENERATOR_COLUMNS:
        _find_column(gen_df, [col])

    generators = list()
    storage_units = list()
    for _, row in gen_df.iterrows():
        name = row[id_col]
        if pd.isna(name):
            raise InputValidationError(id_col, 'generator row without an id')
        bus = _row_value(row, bus_col)

        if _is_truthy(_row_value(row, 'is_storage')):
            cap = _row_value(row, 'existing_cap_mw')
            if cap is None:
                cap = _row_value(row, 'p_max')
            storage_units.append(create_storage_unit(name, cap,
                                     battery_eff=_row_value(row, 'battery_eff'),
                                     start_charge=_row_value(row, 'start_charge'),
                                     bus=bus))
            continue

        generators.append(create_generator(name,
                              p_min=_row_value(row, 'p_min'),
                              p_max=_row_value(row, 'p_max'),
                              variable_cost=_row_value(row, vc_col),
                              startup_cost=_row_value(row, sc_col, 0.),
                              bus=bus,
                              min_up_time=_row_value(row, 'min_up_time', 1),
                              min_down_time=_row_value(row, 'min_down_time', 1),
                              ramp_up=_row_value(row, 'ramp_up'),
                              ramp_down=_row_value(row, 'ramp_down'),
                              initial_status=_row_value(row, 'initial_status'),
                              fuel=_row_value(row, 'fuel', 'Other')))

    logger.debug('Read {} generators and {} storage units from {}'.format(
                 len(generators), len(storage_units), generators_file))
    return generators, storage_units

def read_demand(demand_file, **read_csv_kwargs):
    '''
    Read an hourly demand table

    Parameters
    ----------
    demand_file : str or file-like
        Path to (or buffer holding) a delimited text table with ``hour`` and
        ``demand`` columns. Hours must be consecutive integers starting at 1;
        rows may appear in any order.
    read_csv_kwargs : dictionary (optional)
        Additional arguments for pandas.read_csv (e.g., sep)

    Returns
    -------
        list : demand (MW) for hours 1..T
    '''
    demand_df = _normalize_columns(pd.read_csv(demand_file, **read_csv_kwargs))
    hour_col = _find_column(demand_df, ['hour', 'time_index', 't'])
    demand_col = _find_column(demand_df, ['demand', 'load', 'demand_mw'])

    if demand_df[hour_col].isna().any():
        raise InputValidationError(hour_col, 'missing hour index')
    demand_df = demand_df.sort_values(by=hour_col)
    hours = list()
    for h in demand_df[hour_col]:
        try:
            hour = int(h)
        except (TypeError, ValueError):
            raise InputValidationError(hour_col, 'hour index must be an integer, got {!r}'.format(h))
        if hour != h:
            raise InputValidationError(hour_col, 'hour index must be an integer, got {!r}'.format(h))
        hours.append(hour)
    if hours != list(range(1, len(hours)+1)):
        raise InputValidationError(hour_col, 'hours must be consecutive starting at 1, got {}'.format(hours))

    return [float(d) for d in demand_df[demand_col]]

def create_system_data(generators_file, demand_file, **read_csv_kwargs):
    '''
    Create a SystemData object from a generator table and a demand table

    Parameters
    ----------
    generators_file : str or file-like
        Generator table (see read_generators)
    demand_file : str or file-like
        Demand table (see read_demand)
    read_csv_kwargs : dictionary (optional)
        Additional arguments for pandas.read_csv, applied to both tables

    Returns
    -------
        ucstorage.data.system_data.SystemData
    '''
    generators, storage_units = read_generators(generators_file, **read_csv_kwargs)
    demand = read_demand(demand_file, **read_csv_kwargs)
    return SystemData(generators, storage_units, demand)
