import random
import unittest

from scratch_game.exceptions import ConfigurationException
from scratch_game.models import CellProbability
from scratch_game.tests.factories import ScriptedRandom, bonus_symbols, build_config
from scratch_game.utils.matrix_generator import MatrixGenerator

STANDARD_WEIGHTS = {"A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6}
BONUS_WEIGHTS = {"10x": 1, "5x": 2, "+1000": 3, "+500": 4, "MISS": 5}


class TestMatrixGenerator(unittest.TestCase):

    def test_grid_dimensions_and_catalog(self):
        config = build_config(
            rows=4, columns=2,
            standard_probabilities=[CellProbability(0, 0, STANDARD_WEIGHTS)],
            bonus_probabilities=BONUS_WEIGHTS,
        )
        generator = MatrixGenerator(config)
        rng = random.Random(7)
        for _ in range(50):
            grid = generator.generate(rng)
            self.assertEqual(len(grid), 4)
            for row in grid:
                self.assertEqual(len(row), 2)
                for symbol in row:
                    self.assertIn(symbol, config.symbols)

    def test_bonus_overlay_count_is_at_most_two(self):
        config = build_config(
            standard_probabilities=[CellProbability(0, 0, STANDARD_WEIGHTS)],
            bonus_probabilities=BONUS_WEIGHTS,
        )
        generator = MatrixGenerator(config)
        rng = random.Random(11)
        bonus_names = set(bonus_symbols())
        seen_counts = set()
        for _ in range(500):
            grid = generator.generate(rng)
            count = sum(1 for row in grid for symbol in row if symbol in bonus_names)
            seen_counts.add(count)
        self.assertTrue(seen_counts <= {0, 1, 2})
        self.assertIn(0, seen_counts)
        self.assertIn(2, seen_counts)

    def test_unlisted_cells_use_first_table(self):
        config = build_config(
            standard_probabilities=[
                CellProbability(0, 0, {"A": 1}),
                CellProbability(1, 1, {"B": 1}),
            ]
        )
        grid = MatrixGenerator(config).generate(random.Random(3))
        self.assertEqual(grid, [["A", "A", "A"], ["A", "B", "A"], ["A", "A", "A"]])

    def test_first_table_for_a_cell_wins(self):
        config = build_config(
            standard_probabilities=[
                CellProbability(0, 0, {"A": 1}),
                CellProbability(2, 2, {"C": 1}),
                CellProbability(2, 2, {"D": 1}),
            ]
        )
        with self.assertLogs('scratch_game.utils.matrix_generator', level='WARNING') as logs:
            generator = MatrixGenerator(config)
        self.assertIn("duplicates cell 2:2", logs.output[0])
        self.assertEqual(generator.generate(random.Random(5))[2][2], "C")

    def test_out_of_grid_table_is_only_a_fallback(self):
        config = build_config(
            rows=2, columns=2,
            standard_probabilities=[
                CellProbability(5, 5, {"E": 1}),
                CellProbability(0, 0, {"A": 1}),
            ]
        )
        with self.assertLogs('scratch_game.utils.matrix_generator', level='WARNING') as logs:
            generator = MatrixGenerator(config)
        self.assertIn("outside the 2x2 grid", logs.output[0])
        self.assertEqual(generator.generate(random.Random(1)), [["A", "E"], ["E", "E"]])

    def test_bonus_overlays_are_placed_from_the_random_source(self):
        config = build_config(
            rows=2, columns=2,
            standard_probabilities=[CellProbability(0, 0, {"A": 1})],
            bonus_probabilities={"10x": 1, "MISS": 1},
        )
        rng = ScriptedRandom(
            # four cells, then one bonus draw per overlay
            floats=[0.0, 0.0, 0.0, 0.0, 0.0, 0.9],
            # overlay count, then (row, column) per overlay
            ints=[2, 1, 0, 0, 1],
        )
        grid = MatrixGenerator(config).generate(rng)
        self.assertEqual(grid, [["A", "MISS"], ["10x", "A"]])

    def test_later_overlay_on_same_cell_wins(self):
        config = build_config(
            rows=1, columns=1,
            standard_probabilities=[CellProbability(0, 0, {"A": 1})],
            bonus_probabilities={"10x": 1, "+500": 1},
        )
        rng = ScriptedRandom(floats=[0.0, 0.0, 0.9], ints=[2, 0, 0, 0, 0])
        self.assertEqual(MatrixGenerator(config).generate(rng), [["+500"]])

    def test_no_bonus_section_draws_no_overlays(self):
        config = build_config(
            standard_probabilities=[CellProbability(0, 0, {"A": 1})],
            bonus_probabilities=None,
        )
        generator = MatrixGenerator(config)
        self.assertIsNone(generator.bonus_selector)
        # randrange is never called: the scripted int queue is empty
        grid = generator.generate(ScriptedRandom(floats=[0.5] * 9))
        self.assertEqual(grid, [["A"] * 3] * 3)

    def test_invalid_table_fails_at_construction(self):
        config = build_config(
            standard_probabilities=[CellProbability(0, 0, {"A": 1}), CellProbability(0, 1, {"A": 0})]
        )
        with self.assertRaises(ConfigurationException) as ctx:
            MatrixGenerator(config)
        self.assertIn("standard_symbols[1]", ctx.exception.details["table"])

    def test_table_naming_symbol_outside_catalog_is_rejected(self):
        with self.assertRaises(ConfigurationException) as ctx:
            build_config(standard_probabilities=[CellProbability(0, 0, {"A": 1, "Z": 1})])
        self.assertEqual(ctx.exception.details, {"table": "standard_symbols[0] (0:0)", "symbol": "Z"})

    def test_invalid_bonus_table_fails_at_construction(self):
        config = build_config(bonus_probabilities={"10x": -1})
        with self.assertRaises(ConfigurationException):
            MatrixGenerator(config)


if __name__ == '__main__':
    unittest.main()
