#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
The data used for building unit commitment models in ucstorage is held in a
:py:class:`SystemData` object. It is a thin, read-only container around three
pieces of input:

* ``generators`` -- a dictionary mapping the generator name to a
  :py:class:`Generator` record
* ``storage`` -- a dictionary mapping the storage unit name to a
  :py:class:`StorageUnit` record
* ``demand`` -- a tuple with one (MW) demand value per hour

Records are validated when they are created with :py:func:`create_generator`
or :py:func:`create_storage_unit`, and validated again when a
:py:class:`SystemData` is built (records may also come straight from the
namedtuple constructors), so a model builder can assume the invariants below
hold:

* ``0 <= p_min <= p_max`` for every generator
* variable costs are finite, startup costs are non-negative
* storage power capacity is strictly positive, the energy capacity is
  ``STORAGE_DURATION_HOURS`` times the power capacity, and the starting
  charge lies within ``[0, energy_cap_mwh]``
* the demand series is non-empty, finite and non-negative

Any violation raises :py:class:`InputValidationError` naming the offending
field.
"""
import math
from collections import namedtuple

from ucstorage.common.log import logger

STORAGE_DURATION_HOURS = 4.
DEFAULT_STORAGE_EFFICIENCY = 0.84
DEFAULT_START_CHARGE_FRACTION = 0.5


class InputValidationError(ValueError):
    '''
    Raised for malformed or inconsistent input data, before any
    optimization model is constructed.
    '''
    def __init__(self, field, msg):
        self.field = field
        super().__init__('{}: {}'.format(field, msg))


Generator = namedtuple('Generator',
                       ['name',
                        'bus',
                        'p_min',
                        'p_max',
                        'variable_cost',
                        'startup_cost',
                        'min_up_time',
                        'min_down_time',
                        'ramp_up',
                        'ramp_down',
                        'initial_status',
                        'fuel',
                        ]
                       )


StorageUnit = namedtuple('StorageUnit',
                         ['name',
                          'bus',
                          'existing_cap_mw',
                          'energy_cap_mwh',
                          'charge_eff',
                          'discharge_eff',
                          'start_charge',
                          ]
                         )


def _as_float(field, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InputValidationError(field, 'expected a number, got {!r}'.format(value))
    if math.isnan(value):
        raise InputValidationError(field, 'value is missing (NaN)')
    return value

def _is_missing(value):
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False

def _as_hours(field, value):
    if _is_missing(value):
        return 1
    value = _as_float(field, value)
    if value < 1 or value != int(value):
        raise InputValidationError(field, 'must be a whole number of hours >= 1, got {}'.format(value))
    return int(value)

def _as_ramp(field, value):
    if _is_missing(value):
        return None
    value = _as_float(field, value)
    if value <= 0:
        raise InputValidationError(field, 'ramp rate must be positive, got {}'.format(value))
    return value

def create_generator(name, p_min, p_max, variable_cost,
                     startup_cost=0.,
                     bus=None,
                     min_up_time=1,
                     min_down_time=1,
                     ramp_up=None,
                     ramp_down=None,
                     initial_status=None,
                     fuel='Other'):
    '''
    Create a validated Generator record

    Parameters
    ----------
    name : str
        Unique generator identifier
    p_min : float
        Minimum stable output when committed (MW)
    p_max : float
        Maximum output (MW)
    variable_cost : float
        Cost of energy produced ($/MWh)
    startup_cost : float (optional)
        Cost per start ($). Default is 0.
    bus : str (optional)
        Location label; informational only in a copperplate model
    min_up_time : int (optional)
        Minimum number of hours a unit stays on once started. Default is 1.
    min_down_time : int (optional)
        Minimum number of hours a unit stays off once stopped. Default is 1.
    ramp_up : float (optional)
        Maximum hour-to-hour increase in output (MW/h). Default of None
        means no ramping limit.
    ramp_down : float (optional)
        Maximum hour-to-hour decrease in output (MW/h). Default of None
        means no ramping limit.
    initial_status : int (optional)
        Commitment state (0 or 1) in the hour before the horizon. Default of
        None leaves the first hour's commitment free of start/stop accounting.
    fuel : str (optional)
        Fuel label used when plotting.

    Returns
    -------
        Generator
    '''
    name = str(name)
    p_min = _as_float('{}.p_min'.format(name), p_min)
    p_max = _as_float('{}.p_max'.format(name), p_max)
    if p_min < 0:
        raise InputValidationError('{}.p_min'.format(name), 'negative capacity {}'.format(p_min))
    if p_max < 0:
        raise InputValidationError('{}.p_max'.format(name), 'negative capacity {}'.format(p_max))
    if p_min > p_max:
        raise InputValidationError('{}.p_min'.format(name),
                                   'p_min={} exceeds p_max={}'.format(p_min, p_max))

    variable_cost = _as_float('{}.variable_cost'.format(name), variable_cost)
    if math.isinf(variable_cost):
        raise InputValidationError('{}.variable_cost'.format(name), 'must be finite')

    if _is_missing(startup_cost):
        startup_cost = 0.
    startup_cost = _as_float('{}.startup_cost'.format(name), startup_cost)
    if startup_cost < 0 or math.isinf(startup_cost):
        raise InputValidationError('{}.startup_cost'.format(name),
                                   'must be finite and non-negative, got {}'.format(startup_cost))

    if not _is_missing(initial_status):
        initial_status = _as_float('{}.initial_status'.format(name), initial_status)
        if initial_status not in (0., 1.):
            raise InputValidationError('{}.initial_status'.format(name),
                                       'must be 0 or 1, got {}'.format(initial_status))
        initial_status = int(initial_status)
    else:
        initial_status = None

    return Generator(name=name,
                     bus=None if _is_missing(bus) else str(bus),
                     p_min=p_min,
                     p_max=p_max,
                     variable_cost=variable_cost,
                     startup_cost=startup_cost,
                     min_up_time=_as_hours('{}.min_up_time'.format(name), min_up_time),
                     min_down_time=_as_hours('{}.min_down_time'.format(name), min_down_time),
                     ramp_up=_as_ramp('{}.ramp_up'.format(name), ramp_up),
                     ramp_down=_as_ramp('{}.ramp_down'.format(name), ramp_down),
                     initial_status=initial_status,
                     fuel='Other' if _is_missing(fuel) else str(fuel),
                     )

def create_storage_unit(name, existing_cap_mw,
                        battery_eff=DEFAULT_STORAGE_EFFICIENCY,
                        start_charge=None,
                        bus=None):
    '''
    Create a validated StorageUnit record

    The energy capacity is fixed at STORAGE_DURATION_HOURS times the power
    capacity, and battery_eff is used as both the charging and the
    discharging (one-way) efficiency, so the round trip efficiency is
    battery_eff**2.

    Parameters
    ----------
    name : str
        Unique storage identifier
    existing_cap_mw : float
        Charge and discharge power capacity (MW), strictly positive
    battery_eff : float (optional)
        One-way efficiency in (0, 1]. Default is 0.84.
    start_charge : float (optional)
        Stored energy at the start of the horizon (MWh), which is also the
        required stored energy at the end of the horizon. Default is half
        the energy capacity.
    bus : str (optional)
        Location label; informational only

    Returns
    -------
        StorageUnit
    '''
    record = _build_storage_unit(name, existing_cap_mw, battery_eff, start_charge, bus)
    if record.start_charge in (0., record.energy_cap_mwh):
        logger.warning('Storage unit {} starts and must end the horizon at a bound '
                       'of its energy capacity ({} MWh)'.format(record.name, record.start_charge))
    return record

def _build_storage_unit(name, existing_cap_mw, battery_eff, start_charge, bus):
    name = str(name)
    existing_cap_mw = _as_float('{}.existing_cap_mw'.format(name), existing_cap_mw)
    if existing_cap_mw <= 0 or math.isinf(existing_cap_mw):
        raise InputValidationError('{}.existing_cap_mw'.format(name),
                                   'storage power capacity must be positive and finite, got {}'.format(existing_cap_mw))
    energy_cap_mwh = STORAGE_DURATION_HOURS * existing_cap_mw

    if _is_missing(battery_eff):
        battery_eff = DEFAULT_STORAGE_EFFICIENCY
    battery_eff = _as_float('{}.battery_eff'.format(name), battery_eff)
    if not (0. < battery_eff <= 1.):
        raise InputValidationError('{}.battery_eff'.format(name),
                                   'efficiency must be in (0, 1], got {}'.format(battery_eff))

    if _is_missing(start_charge):
        start_charge = DEFAULT_START_CHARGE_FRACTION * energy_cap_mwh
    start_charge = _as_float('{}.start_charge'.format(name), start_charge)
    if start_charge < 0 or start_charge > energy_cap_mwh:
        raise InputValidationError('{}.start_charge'.format(name),
                                   'must be within [0, {}], got {}'.format(energy_cap_mwh, start_charge))

    return StorageUnit(name=name,
                       bus=None if _is_missing(bus) else str(bus),
                       existing_cap_mw=existing_cap_mw,
                       energy_cap_mwh=energy_cap_mwh,
                       charge_eff=battery_eff,
                       discharge_eff=battery_eff,
                       start_charge=start_charge,
                       )

def validate_generator(record):
    '''
    Re-run the checks of create_generator on an existing Generator record,
    e.g., one built directly with the namedtuple constructor. Returns the
    normalized record.
    '''
    return create_generator(**record._asdict())

def validate_storage_unit(record):
    '''
    Re-run the checks of create_storage_unit on an existing StorageUnit
    record. Additionally, the charging and discharging efficiencies must be
    equal and the energy capacity must be STORAGE_DURATION_HOURS times the
    power capacity. Returns the normalized record.
    '''
    name = str(record.name)
    charge_eff = _as_float('{}.charge_eff'.format(name), record.charge_eff)
    discharge_eff = _as_float('{}.discharge_eff'.format(name), record.discharge_eff)
    if charge_eff != discharge_eff:
        raise InputValidationError('{}.discharge_eff'.format(name),
                                   'charge_eff={} and discharge_eff={} must be equal'.format(charge_eff, discharge_eff))

    validated = _build_storage_unit(name, record.existing_cap_mw, charge_eff,
                                    record.start_charge, record.bus)

    energy_cap_mwh = _as_float('{}.energy_cap_mwh'.format(name), record.energy_cap_mwh)
    if not math.isclose(energy_cap_mwh, validated.energy_cap_mwh, rel_tol=1e-9, abs_tol=1e-9):
        raise InputValidationError('{}.energy_cap_mwh'.format(name),
                                   'expected {} h of existing_cap_mw ({} MWh), got {}'.format(
                                       STORAGE_DURATION_HOURS, validated.energy_cap_mwh, energy_cap_mwh))
    return validated


class SystemData(object):
    '''
    Read-only collection of the generators, storage units and hourly demand
    for one unit commitment solve.

    Parameters
    ----------
    generators : iterable of Generator
        Must be non-empty, names must be unique
    storage_units : iterable of StorageUnit (optional)
        Zero or more storage units, names unique across all units
    demand : sequence of float
        Demand in MW for hours 1..T, T >= 1
    '''
    def __init__(self, generators, storage_units=(), demand=()):
        self._generators = self._map_by_name('generators', generators, Generator,
                                             validate_generator)
        self._storage = self._map_by_name('storage_units', storage_units, StorageUnit,
                                          validate_storage_unit, taken=self._generators)
        if not self._generators:
            raise InputValidationError('generators', 'at least one generator is required')
        self._demand = self._validate_demand(demand)

    @staticmethod
    def _map_by_name(field, records, record_type, validate, taken=None):
        mapping = dict()
        for record in records:
            if not isinstance(record, record_type):
                raise InputValidationError(field, 'expected {} records, got {!r}'.format(record_type.__name__, record))
            record = validate(record)
            if record.name in mapping or (taken is not None and record.name in taken):
                raise InputValidationError(field, 'duplicate id {}'.format(record.name))
            mapping[record.name] = record
        return mapping

    @staticmethod
    def _validate_demand(demand):
        if demand is None:
            raise InputValidationError('demand', 'a demand series is required')
        values = tuple(demand)
        if len(values) == 0:
            raise InputValidationError('demand', 'the demand series must cover at least one hour')
        validated = list()
        for t, d in enumerate(values, start=1):
            d = _as_float('demand[{}]'.format(t), d)
            if d < 0 or math.isinf(d):
                raise InputValidationError('demand[{}]'.format(t),
                                           'demand must be finite and non-negative, got {}'.format(d))
            validated.append(d)
        return tuple(validated)

    @property
    def generators(self):
        return dict(self._generators)

    @property
    def storage(self):
        return dict(self._storage)

    @property
    def demand(self):
        return self._demand

    @property
    def time_periods(self):
        return range(1, len(self._demand)+1)

    @property
    def num_time_periods(self):
        return len(self._demand)

    def generator(self, name):
        return self._generators[name]

    def storage_unit(self, name):
        return self._storage[name]

    def attributes(self, element_type):
        '''
        Returns a dictionary of attribute -> {name: value}, along with a
        'names' key holding the ordered element names; handy for building
        indexed pyomo params.
        '''
        if element_type == 'generator':
            records = self._generators
            fields = Generator._fields
        elif element_type == 'storage':
            records = self._storage
            fields = StorageUnit._fields
        else:
            raise ValueError('Unrecognized element_type {}'.format(element_type))
        attrs = {'names': list(records.keys())}
        for field in fields:
            if field == 'name':
                continue
            attrs[field] = {name: getattr(rec, field) for name, rec in records.items()}
        return attrs

    def total_capacity(self):
        return sum(g.p_max for g in self._generators.values())

    def __repr__(self):
        return 'SystemData(generators={}, storage_units={}, hours={})'.format(
                len(self._generators), len(self._storage), len(self._demand))
