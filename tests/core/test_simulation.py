"""Tests for the Simulation class."""

from lifegrid.core.grid import Cell, Grid
from lifegrid.core.simulation import Simulation


class TestSimulation:
    """Test cases for the Simulation class."""

    def test_initialization(self):
        """Test simulation initialization."""
        grid = Grid(10, 10)
        simulation = Simulation(grid)

        assert simulation.grid is grid
        assert simulation.generation == 0
        assert simulation.population == 0
        assert simulation.population_history == [0]
        assert not simulation.cycle_detected
        assert simulation.cycle_length == 0

    def test_step_ticks_grid(self):
        """Test that each step advances the grid one generation."""
        grid = Grid(5, 5)
        grid.set_cells([(2, 1), (2, 2), (2, 3)])
        simulation = Simulation(grid)

        simulation.step()

        assert simulation.generation == 1
        assert grid.get_cell(1, 2) is Cell.ALIVE
        assert grid.get_cell(2, 1) is Cell.DEAD

    def test_run(self):
        """Test running several generations at once."""
        simulation = Simulation(Grid(5, 5))
        simulation.run(7)
        assert simulation.generation == 7
        assert len(simulation.population_history) == 8

    def test_still_life_cycle(self):
        """Test that a block is detected as a period-1 cycle."""
        grid = Grid(10, 10)
        grid.set_cells([(4, 4), (5, 4), (4, 5), (5, 5)])
        simulation = Simulation(grid)

        generation, reason = simulation.run_until_stable(max_generations=50)

        assert reason == "cycle"
        assert simulation.cycle_length == 1
        assert simulation.cycle_start_generation == 0
        assert generation == 2

    def test_blinker_cycle(self):
        """Test that a blinker is detected as a period-2 cycle."""
        grid = Grid(5, 5)
        grid.set_cells([(2, 1), (2, 2), (2, 3)])
        simulation = Simulation(grid)

        _, reason = simulation.run_until_stable(max_generations=50)

        assert reason == "cycle"
        assert simulation.cycle_length == 2

    def test_extinction(self):
        """Test that a dying pattern ends with extinction."""
        grid = Grid(10, 10)
        grid.set_cells([(1, 1), (7, 7)])
        simulation = Simulation(grid)

        generation, reason = simulation.run_until_stable()

        assert reason == "extinction"
        assert generation == 1

    def test_max_generations(self):
        """Test that a long-lived pattern stops at the limit."""
        grid = Grid(20, 20)
        grid.set_cells([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        simulation = Simulation(grid)

        generation, reason = simulation.run_until_stable(max_generations=10)

        assert reason == "max_generations"
        assert generation == 10

    def test_reset(self):
        """Test resetting the simulation."""
        grid = Grid(5, 5)
        grid.set_cells([(2, 1), (2, 2), (2, 3)])
        simulation = Simulation(grid)
        simulation.run_until_stable(max_generations=10)

        simulation.reset()

        assert simulation.generation == 0
        assert simulation.population == 0
        assert simulation.population_history == [0]
        assert not simulation.cycle_detected

    def test_reset_keep_grid(self):
        """Test resetting without clearing cells."""
        grid = Grid(5, 5)
        grid.set_cells([(0, 0), (1, 1)])
        simulation = Simulation(grid)

        simulation.reset(clear_grid=False)

        assert simulation.population == 2

    def test_load_decoded_grid(self):
        """Test swapping in a grid decoded from RLE."""
        simulation = Simulation(Grid(5, 5))
        simulation.run(3)

        simulation.load(Grid.from_rle("x = 3, y = 3\nbo$2bo$3o!"))

        assert simulation.generation == 0
        assert simulation.population == 5
        assert simulation.grid.shape == (3, 3)

    def test_tracked_states_bounded(self):
        """Test that old states are forgotten past the tracking limit."""
        grid = Grid(20, 20)
        grid.set_cells([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        simulation = Simulation(grid, max_tracked_states=5)

        simulation.run(30)

        assert len(simulation._seen_states) <= 5
        assert not simulation.cycle_detected

    def test_population_change_rate(self):
        """Test the population change rate."""
        grid = Grid(10, 10)
        grid.set_cells([(1, 1), (7, 7)])
        simulation = Simulation(grid)

        assert simulation.get_population_change_rate() == 0.0

        simulation.step()
        assert simulation.get_population_change_rate() == -2.0

    def test_statistics(self):
        """Test the statistics dictionary."""
        grid = Grid(10, 10)
        grid.set_cells([(2, 3), (3, 3), (4, 3)])
        simulation = Simulation(grid)

        stats = simulation.get_statistics()

        assert stats["generation"] == 0
        assert stats["population"] == 3
        assert stats["grid_size"] == (10, 10)
        assert stats["population_density"] == 0.03
        assert stats["bounding_box"] == (2, 3, 4, 3)
        assert stats["bounding_box_size"] == (3, 1)
        assert stats["bounding_box_area"] == 3

    def test_statistics_empty(self):
        """Test statistics for an empty grid."""
        stats = Simulation(Grid(4, 4)).get_statistics()

        assert stats["bounding_box"] is None
        assert stats["bounding_box_area"] == 0
