import os
from collections import namedtuple, defaultdict

import matplotlib as mpl
## catch when we're running linux without X
if os.name == 'posix' and 'DISPLAY' not in os.environ:
    mpl.use('Agg')

import matplotlib.pyplot as plt
import matplotlib.ticker as ticker
import seaborn as sns
import numpy as np

from ucstorage.model_library.defn import SolutionKind

# Seaborn/matplotlib plot settings
sns.set()
sns.set_context('paper', font_scale=2.00)


font = {'family' : 'sans-serif',
        'weight' : 'regular',
        'size'   : 14
        }
mpl.rc('font', **font)


GenerationType = namedtuple('GenerationType',
                            [
                           'label',
                           'color',
                            ]
                           )


GENERATION_TYPES = {
    'P': GenerationType('Pumped Hydro', '#42F1F4'),
    'N': GenerationType('Nuclear', '#b22222'),
    'B': GenerationType('Biomass', '#A3BFA8'),
    'C': GenerationType('Coal', '#333333'),
    'G': GenerationType('Gas', '#6e8b3d'),
    'O': GenerationType('Oil', '#eea2ad'),
    'H': GenerationType('Hydro', '#add8e6'),
    'W': GenerationType('Wind', '#4f94cd'),
    'S': GenerationType('Solar', '#ffb90f'),
    'Other': GenerationType('Other', '#886688'),
}


FUEL_TO_CODE = defaultdict(lambda: 'Other')


BUILT_IN_FUEL_CODES = [
    ('Oil', 'O'),
    ('Coal', 'C'),
    ('Lignite', 'C'),
    ('Gas', 'G'),
    ('NG', 'G'),
    ('CCGT', 'G'),
    ('Solar', 'S'),
    ('PV', 'S'),
    ('Wind', 'W'),
    ('Nuclear', 'N'),
    ('Hydro', 'H'),
    ('Biomass', 'B'),
    ('Storage', 'P'),
    ('Pumped Hydro', 'P'),
    # To accomodate data that uses the codes directly
    ('P', 'P'),
    ('N', 'N'),
    ('B', 'B'),
    ('C', 'C'),
    ('G', 'G'),
    ('O', 'O'),
    ('H', 'H'),
    ('W', 'W'),
    ('S', 'S'),
]


for fuel_name, fuel_code in BUILT_IN_FUEL_CODES:
    FUEL_TO_CODE[fuel_name] = fuel_code


GENERATION_TYPE_SORT_KEY = {
    'Nuclear': 0,
    'Coal': 1,
    'Hydro': 2,
    'Gas': 3,
    'Oil': 5,
    'Wind': 7,
    'Solar': 8,
    'Biomass': 9,
    'Pumped Hydro': 11,
    'Other': 999,
}

INDIVIDUAL_GEN_PLOT_UPPER_LIMIT = 5

STORAGE_LABEL = GENERATION_TYPES['P'].label
STORAGE_COLOR = GENERATION_TYPES['P'].color


def _series_to_array(series, time_periods):
    return np.array([float(series[t]) for t in time_periods])

def _generation_type(generator, system_data):
    if system_data is None:
        return GENERATION_TYPES['Other']
    return GENERATION_TYPES[FUEL_TO_CODE[system_data.generator(generator).fuel]]

def generate_stack_graph(solution,
                         system_data=None,
                         bar_width=0.9,
                         x_tick_frequency=1,
                         title='',
                         plot_individual_generators=False,
                         show_individual_components=False,
                         save_fig=None):
    '''
    Creates a stack graph from a Solution returned by
    ucstorage.models.unit_commitment.solve_unit_commitment().

    Thermal generation is stacked above zero, followed by the storage
    discharge; storage charging is drawn below zero. The demand is drawn
    as a step line.

    Parameters
    ----------
    solution : ucstorage.models.solution.Solution
        A solution with a feasible point
    system_data : ucstorage.data.system_data.SystemData (optional)
        Used to group generators by fuel. Without it, every generator is 'Other'.
    bar_width : float
        The width of each bar stack in the time series in (0, 1]; default is 0.9
    x_tick_frequency : int
        Indicates the frequency of labeling the time axis; default is 1
    title : str (optional)
        Title to put on the resulting graph; default is ''
    plot_individual_generators : bool (optional)
        If True, individual generator output will be plotted and labeled. Raises a ValueError if there are more than 5 generators in the model. Raises a ValueError if show_individual_components is simultaneously True; default is False
    show_individual_components : bool (optional)
        If True, individual generator output within a generation type will be discretely indicated. Raises a ValueError if plot_individual_generators is simultaneously True; default is False
    save_fig : str (optional)
        If provided, the path to save the figure, if not provided, the subplots will be returned

    Returns
    -------
    (fig, ax) matplotlib.pyplot subplots if save_fig not provided, None otherwise.
    '''
    if plot_individual_generators and show_individual_components:
        raise ValueError('plot_individual_generators and show_individual_components cannot be simultaneously True.')
    if not solution.is_feasible:
        raise ValueError('Cannot plot a solution with status {}; it has no dispatch.'.format(solution.status.name))
    if plot_individual_generators and len(solution.generation) > INDIVIDUAL_GEN_PLOT_UPPER_LIMIT:
        raise ValueError('There are too many generators in the system to support plotting output individually. (maximum: {0})'.format(INDIVIDUAL_GEN_PLOT_UPPER_LIMIT))

    time_periods = solution.time_periods

    def _plot_generation_stack_components():
        bottom = np.zeros(len(indices))

        if plot_individual_generators:
            for generator, series in solution.series(SolutionKind.GENERATION).items():
                pg_array = _series_to_array(series, time_periods)
                if not sum(pg_array) > 0.0:
                    continue
                ax.bar(indices, pg_array, bar_width, bottom=bottom, label=generator,
                       edgecolor='#FFFFFF', linewidth=0.5)
                bottom += pg_array
        else:
            generation_by_type = {}
            for generator, series in solution.series(SolutionKind.GENERATION).items():
                pg_array = _series_to_array(series, time_periods)
                if not sum(pg_array) > 0.0:
                    continue
                generation_type = _generation_type(generator, system_data)
                generation_by_type.setdefault(generation_type, []).append(pg_array)

            sorted_generation_by_type = sorted(generation_by_type.items(), key=lambda x: GENERATION_TYPE_SORT_KEY.get(x[0].label, 1e3))

            for generation_type, output_levels in sorted_generation_by_type:
                if show_individual_components:
                    component_label = generation_type.label
                    for output_level_array in output_levels:
                        ax.bar(indices, output_level_array, bar_width, bottom=bottom,
                               color=generation_type.color,
                               label=component_label,
                               edgecolor='#FFFFFF', linewidth=0.5
                               )
                        ## label each generation type only once
                        component_label = ''
                        bottom += output_level_array
                else:
                    component_values = np.sum(output_levels, axis=0)
                    ax.bar(indices, component_values, bar_width, bottom=bottom,
                           color=generation_type.color,
                           label=generation_type.label,
                           linewidth=0
                           )
                    bottom += component_values
        return bottom

    def _plot_storage_components(bottom):
        discharge = np.zeros(len(indices))
        charge = np.zeros(len(indices))
        for storage in solution.discharge:
            discharge += _series_to_array(solution.discharge[storage], time_periods)
            charge += _series_to_array(solution.charge[storage], time_periods)

        if sum(discharge) > 0.0:
            ax.bar(indices, discharge, bar_width, bottom=bottom, color=STORAGE_COLOR,
                   label=STORAGE_LABEL + ' (discharge)', linewidth=0)
            bottom += discharge
        if sum(charge) > 0.0:
            ax.bar(indices, -charge, bar_width, color=STORAGE_COLOR,
                   label=STORAGE_LABEL + ' (charge)', hatch='//', linewidth=0)
        return bottom, -charge

    fig, ax = plt.subplots(figsize=(16, 8))

    time_labels = [str(t) for t in time_periods]
    indices = np.arange(len(time_labels))

    # Plot generation dispatch/output, then storage.
    bottom = _plot_generation_stack_components()
    bottom, below_zero = _plot_storage_components(bottom)
    y_min_lim = min(min(below_zero), 0.)

    # Plot demand.
    demand_by_hour = np.array(solution.demand, dtype=float)

    ## This is to make it so the step graph covers the total dispatch levels as expected.
    demand_indices = np.arange(len(time_labels)+1) - 1/2
    demand_by_hour = np.append(demand_by_hour, demand_by_hour[-1])

    ax.step(demand_indices, demand_by_hour, linewidth=3, color='#000000', where='post', label='Demand')

    # Labels and such.
    plt.xticks(indices[::x_tick_frequency], time_labels[::x_tick_frequency], rotation=0)
    ticks_loc = ax.get_yticks().tolist()
    ax.yaxis.set_major_locator(ticker.FixedLocator(ticks_loc))
    ax.set_yticklabels(['{:,}'.format(int(x)) for x in ticks_loc])

    # Put legend outside on the right.
    box = ax.get_position()
    ax.set_position([box.x0, box.y0, box.width * 0.8, box.height])
    ax.legend(loc='center left', bbox_to_anchor=(1, 0.5))

    # Explicitly set y-axis limits.
    y_max = max(max(bottom), max(demand_by_hour))
    ax.set_ylim(1.05*y_min_lim, 1.05*y_max)

    ax.set_title(title)
    ax.set_ylabel('Power [MW]')
    ax.set_xlabel('Hour')
    ax.yaxis.grid(True)

    if save_fig is None:
        return fig, ax
    else:
        plt.savefig(save_fig)
        plt.close()

def main():
    from ucstorage.models.unit_commitment import solve_unit_commitment
    from ucstorage.parsers.csv_parser import create_system_data

    current_dir = os.path.dirname(os.path.abspath(__file__))
    instance_dir = os.path.join(current_dir, '..', 'models', 'tests', 'uc_test_instances')

    system_data = create_system_data(os.path.join(instance_dir, 'generators.csv'),
                                     os.path.join(instance_dir, 'demand.csv'))
    solution = solve_unit_commitment(system_data)

    fig, ax = generate_stack_graph(solution, system_data,
                                   title='Unit commitment with pumped hydro storage',
                                   show_individual_components=True)
    plt.show()

if __name__ == '__main__':
    main()
