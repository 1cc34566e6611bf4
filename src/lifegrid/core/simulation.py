"""Generation-by-generation driver around a grid."""

import logging
from collections import deque
from typing import Any, Deque, Dict, Tuple

import numpy as np

from .grid import Grid

logger = logging.getLogger(__name__)


class Simulation:
    """Runs a grid forward and tracks generation, population and cycles.

    Cycle detection hashes the cell buffer of every generation it has seen;
    a repeat of an earlier buffer means the pattern is periodic from then on.
    """

    def __init__(self, grid: Grid, history_size: int = 100, max_tracked_states: int = 1000) -> None:
        """Initialize the simulation with a grid.

        Args:
            grid: The grid to simulate
            history_size: Number of population counts to keep
            max_tracked_states: Number of past generations remembered for cycle detection
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._state_history: Deque[bytes] = deque()
        self._max_tracked_states = max_tracked_states
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self.grid.tick()
        self._generation += 1
        self._update_population_history()

    def run(self, generations: int) -> None:
        """Advance the simulation by ``generations`` steps."""
        for _ in range(generations):
            self.step()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _state_key(self) -> bytes:
        # Dimensions are part of the key so resized grids never collide
        return bytes(f"{self.grid.width}x{self.grid.height}:", "ascii") + self.grid.cells.tobytes()

    def _check_for_cycles(self) -> None:
        """Record the current buffer, flagging a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = self._state_key()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                f"Cycle of length {self._cycle_length} detected at generation {self._generation}"
            )
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

        if len(self._state_history) > self._max_tracked_states:
            oldest = self._state_history.popleft()
            self._seen_states.pop(oldest, None)

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget seen states. Call after editing the grid by hand."""
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def load(self, grid: Grid) -> None:
        """Replace the simulated grid, e.g. with one decoded from RLE, and start over."""
        self.grid = grid
        self.reset(clear_grid=False)

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it dies out or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the last ``window_size`` entries."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics.

        Returns:
            Dictionary with generation, population and bounding-box figures
        """
        bbox = self.grid.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
            "population_density": self.population / (self.grid.width * self.grid.height),
        }

        if bbox:
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box"] = bbox
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
