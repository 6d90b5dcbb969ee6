import random
import unittest

from scratch_game.exceptions import ConfigurationException
from scratch_game.tests.factories import ScriptedRandom
from scratch_game.utils.probability import ProbabilitySelector


class TestProbabilitySelector(unittest.TestCase):

    def setUp(self):
        self.weights = {"A": 1, "B": 2, "C": 3}

    def test_total_weight(self):
        selector = ProbabilitySelector(self.weights)
        self.assertEqual(selector.total_weight, 6)

    def test_select_walks_insertion_order(self):
        selector = ProbabilitySelector(self.weights)
        # 0.0 -> 0.0, 0.2 -> 1.2, 0.5 -> 3.0, 0.99 -> 5.94 on a total of 6
        rng = ScriptedRandom(floats=[0.0, 0.2, 0.5, 0.99])
        self.assertEqual([selector.select(rng) for _ in range(4)], ["A", "B", "C", "C"])

    def test_cumulative_boundary_belongs_to_next_symbol(self):
        selector = ProbabilitySelector({"A": 1, "B": 1})
        self.assertEqual(selector.select(ScriptedRandom(floats=[0.5])), "B")

    def test_zero_weight_symbol_is_never_selected(self):
        selector = ProbabilitySelector({"A": 0, "B": 5})
        rng = ScriptedRandom(floats=[0.0, 0.5, 0.999])
        self.assertEqual({selector.select(rng) for _ in range(3)}, {"B"})

    def test_fixed_seed_is_reproducible(self):
        selector = ProbabilitySelector(self.weights)
        first = [selector.select(random.Random(99)) for _ in range(5)]
        rng_a, rng_b = random.Random(2024), random.Random(2024)
        draws_a = [selector.select(rng_a) for _ in range(200)]
        draws_b = [selector.select(rng_b) for _ in range(200)]
        self.assertEqual(draws_a, draws_b)
        self.assertEqual(len(set(first)), 1)

    def test_frequencies_converge_to_weights(self):
        selector = ProbabilitySelector(self.weights)
        rng = random.Random(42)
        draws = 60000
        counts = {"A": 0, "B": 0, "C": 0}
        for _ in range(draws):
            counts[selector.select(rng)] += 1
        for symbol, weight in self.weights.items():
            self.assertAlmostEqual(counts[symbol] / draws, weight / 6, delta=0.01)

    def test_weights_are_copied(self):
        weights = {"A": 1}
        selector = ProbabilitySelector(weights)
        weights["B"] = 100
        self.assertNotIn("B", selector.weights)


class TestProbabilitySelectorValidation(unittest.TestCase):

    def test_empty_table_rejected(self):
        with self.assertRaises(ConfigurationException) as ctx:
            ProbabilitySelector({}, name="bonus_symbols")
        self.assertEqual(ctx.exception.details["table"], "bonus_symbols")

    def test_zero_total_rejected(self):
        with self.assertRaises(ConfigurationException) as ctx:
            ProbabilitySelector({"A": 0, "B": 0}, name="cell 0:0")
        self.assertEqual(ctx.exception.details["total_weight"], 0)

    def test_negative_weight_rejected(self):
        with self.assertRaises(ConfigurationException) as ctx:
            ProbabilitySelector({"A": 5, "B": -1})
        self.assertEqual(ctx.exception.details["symbol"], "B")

    def test_non_integer_weight_rejected(self):
        for bad_weight in (1.5, "3", None, True):
            with self.assertRaises(ConfigurationException):
                ProbabilitySelector({"A": bad_weight})


if __name__ == '__main__':
    unittest.main()
