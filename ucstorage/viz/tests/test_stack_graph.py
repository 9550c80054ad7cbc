import os
import unittest

try:
    import matplotlib
    import seaborn
except (ImportError, ModuleNotFoundError):
    viz_packages_installed = False
else:
    viz_packages_installed = True

    from ucstorage.viz.generate_graphs import generate_stack_graph

from pyomo.opt import TerminationCondition
from ucstorage.models.solution import Solution
from ucstorage.model_library.defn import SolveStatus
from ucstorage.data.system_data import SystemData, create_generator, create_storage_unit


def _system_data(num_generators=3):
    fuels = ['Coal', 'Gas', 'Gas', 'Oil', 'Wind', 'Solar']
    generators = [create_generator('G{}'.format(i), 0., 500., 10.*i, fuel=fuels[i % len(fuels)])
                  for i in range(num_generators)]
    return SystemData(generators, [create_storage_unit('PHS', 100.)], [300., 600., 900., 500.])

def _solution(system_data):
    time_periods = list(system_data.time_periods)
    names = list(system_data.generators)
    ## split the demand evenly; the storage charges in hour 1 and discharges in hour 3
    generation = {g: {t: system_data.demand[t-1]/len(names) for t in time_periods} for g in names}
    charge = {'PHS': {1: 50., 2: 0., 3: 0., 4: 0.}}
    discharge = {'PHS': {1: 0., 2: 0., 3: 35., 4: 0.}}
    generation[names[0]][1] += 50.
    generation[names[0]][3] -= 35.
    return Solution(SolveStatus.OPTIMAL, TerminationCondition.optimal,
                    objective=1., time_periods=time_periods, demand=system_data.demand,
                    generation=generation,
                    commitment={g: {t: 1 for t in time_periods} for g in names},
                    charge=charge, discharge=discharge,
                    soc={'PHS': {1: 242., 2: 242., 3: 200., 4: 200.}})


@unittest.skipUnless(viz_packages_installed, "matplotlib and seaborn packages are both required to run and test the visualization capabilities.")
class TestStackGraph(unittest.TestCase):
    """Test class for generating stack graphs from unit commitment solutions."""
    def setUp(self):
        self.system_data = _system_data()
        self.solution = _solution(self.system_data)

    def tearDown(self):
        import matplotlib.pyplot as plt
        plt.close('all')

    def test_standard_stack_graph(self):
        """Tests standard stack graph generation."""
        fig, ax = generate_stack_graph(self.solution, self.system_data,
                                       title='standard',
                                       show_individual_components=False,
                                       plot_individual_generators=False)
        _, labels = ax.get_legend_handles_labels()
        self.assertIn('Coal', labels)
        self.assertIn('Gas', labels)
        self.assertEqual(labels.count('Gas'), 1)
        self.assertIn('Pumped Hydro (discharge)', labels)
        self.assertIn('Pumped Hydro (charge)', labels)
        self.assertIn('Demand', labels)
        self.assertEqual(ax.get_title(), 'standard')
        ## charging is drawn below zero
        self.assertLess(ax.get_ylim()[0], 0.)

    def test_without_system_data(self):
        """Tests that generators are grouped as 'Other' without fuel information."""
        fig, ax = generate_stack_graph(self.solution)
        _, labels = ax.get_legend_handles_labels()
        self.assertIn('Other', labels)
        self.assertNotIn('Coal', labels)

    def test_individual_component_stack_graph(self):
        """Tests stack graph generation when breaking out individual components per generation type."""
        fig, ax = generate_stack_graph(self.solution, self.system_data,
                                       show_individual_components=True,
                                       plot_individual_generators=False)
        _, labels = ax.get_legend_handles_labels()
        self.assertEqual(labels.count('Gas'), 1)

    def test_individual_generator_stack_graph(self):
        """Tests stack graph generation when plotting individual generators."""
        fig, ax = generate_stack_graph(self.solution, self.system_data,
                                       show_individual_components=False,
                                       plot_individual_generators=True)
        _, labels = ax.get_legend_handles_labels()
        for g in self.system_data.generators:
            self.assertIn(g, labels)

    def test_individual_generator_stack_graph_too_many(self):
        """Tests for stack graph generation to fail when there are too many generators to plot individually."""
        system_data = _system_data(num_generators=6)
        with self.assertRaises(ValueError):
            generate_stack_graph(_solution(system_data), system_data,
                                 plot_individual_generators=True)

    def test_individual_generator_stack_graph_exception(self):
        """Tests for stack graph generation to fail when both 'show_individual_components' and 'plot_individual_generators' are simultaneously True."""
        with self.assertRaises(ValueError):
            # You cannot set both options to True simultaneously.
            generate_stack_graph(self.solution, self.system_data,
                                 show_individual_components=True,
                                 plot_individual_generators=True)

    def test_no_solution(self):
        """Tests that a solution without a dispatch cannot be plotted."""
        solution = Solution(SolveStatus.INFEASIBLE, TerminationCondition.infeasible,
                            time_periods=[1], demand=[1.])
        with self.assertRaises(ValueError):
            generate_stack_graph(solution)

    def test_save_fig(self):
        """Tests saving the stack graph to a file."""
        import tempfile
        with tempfile.TemporaryDirectory() as tmpdir:
            file_name = os.path.join(tmpdir, 'stack.png')
            self.assertIsNone(generate_stack_graph(self.solution, self.system_data, save_fig=file_name))
            self.assertTrue(os.path.exists(file_name))


if __name__ == '__main__':
    unittest.main()
