"""Tests for snapshot export."""

import json

import numpy as np

from broth.core.cellstate import CellState
from broth.core.grid import Grid
from broth.core.rules import ElementaryRule
from broth.core.universe import Universe
from broth.export import SnapshotRecorder, format_grid, grid_to_rows, state_name


class TestRendering:
    """Test cases for row and text rendering."""

    def test_state_name(self):
        """Test binary states are named, others stringified."""
        assert state_name(CellState.ALIVE) == "Alive"
        assert state_name(CellState.DEAD) == "Dead"
        assert state_name(3) == "3"
        assert state_name(True) == "True"

    def test_state_name_numeric(self):
        """Test 0 and 1 from numeric buffers are named like CellState."""
        assert state_name(np.int8(1)) == "Alive"
        assert state_name(np.uint8(0)) == "Dead"
        assert state_name(1) == "Alive"
        assert state_name(np.int8(2)) == "2"

    def test_grid_to_rows_numeric_buffer(self):
        """Test a grid over an int8 buffer exports state names."""
        grid = Grid(2, 1, buffer=np.zeros(2, dtype=np.int8))
        grid.set(0, 0, CellState.ALIVE)

        assert grid_to_rows(grid) == [["Alive", "Dead"]]

    def test_recorder_numeric_universe(self):
        """Test snapshots of a universe stepping an int8 buffer."""
        grid = Grid(3, 1, buffer=np.zeros(3, dtype=np.int8))
        grid.set(1, 0, CellState.ALIVE)
        universe = Universe(grid, ElementaryRule(30))
        recorder = SnapshotRecorder()

        recorder.record(universe.current())
        universe.step()
        recorder.record(universe.current())

        assert recorder.states == [[["Dead", "Alive", "Dead"]], [["Alive", "Alive", "Alive"]]]

    def test_grid_to_rows(self):
        """Test rows are produced in row-major order."""
        grid = Grid(3, 2)
        grid.set(2, 0, CellState.ALIVE)

        assert grid_to_rows(grid) == [["Dead", "Dead", "Alive"], ["Dead", "Dead", "Dead"]]

    def test_grid_to_rows_formatter(self):
        """Test a custom formatter."""
        grid = Grid(2, 2, initializer=lambda x, y: x + 2 * y)
        assert grid_to_rows(grid, formatter=lambda v: f"<{v}>") == [["<0>", "<1>"], ["<2>", "<3>"]]

    def test_format_grid(self):
        """Test text rendering with the default characters."""
        grid = Grid(3, 2)
        grid.set(1, 0, CellState.ALIVE)
        assert format_grid(grid) == "xox\nxxx"
        assert format_grid(grid, alive="#", dead=" ") == " # \n   "


class TestSnapshotRecorder:
    """Test cases for JSON snapshot recording."""

    def test_records_generations(self):
        """Test recording rule 30 on a ring of three."""
        grid = Grid(3, 1)
        grid.set(1, 0, CellState.ALIVE)
        universe = Universe(grid, ElementaryRule(30))
        recorder = SnapshotRecorder("simulating rule 30")

        recorder.record(universe.current())
        universe.run(3, callback=lambda u: recorder.record(u.current()))

        assert len(recorder) == 4
        assert recorder.to_dict() == {
            "note": "simulating rule 30",
            "states": [
                [["Dead", "Alive", "Dead"]],
                [["Alive", "Alive", "Alive"]],
                [["Dead", "Dead", "Dead"]],
                [["Dead", "Dead", "Dead"]],
            ],
        }

    def test_snapshots_are_not_live(self):
        """Test a recorded snapshot doesn't change after a step."""
        grid = Grid(3, 1)
        grid.set(1, 0, CellState.ALIVE)
        universe = Universe(grid, ElementaryRule(30))
        recorder = SnapshotRecorder()

        recorder.record(universe.current())
        universe.step()

        assert recorder.states[0] == [["Dead", "Alive", "Dead"]]

    def test_to_json(self):
        """Test JSON text output."""
        recorder = SnapshotRecorder("note")
        recorder.record(Grid(1, 1))
        assert json.loads(recorder.to_json()) == {"note": "note", "states": [[["Dead"]]]}

    def test_save(self, tmp_path):
        """Test writing the JSON file."""
        recorder = SnapshotRecorder("saved")
        recorder.record(Grid(2, 1))

        path = recorder.save(tmp_path / "simulation.json")

        with open(path) as f:
            data = json.load(f)
        assert data == {"note": "saved", "states": [[["Dead", "Dead"]]]}
