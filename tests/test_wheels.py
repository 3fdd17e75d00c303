"""Tests for the wheel database."""
import sys
sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[1]))

import unittest

from alphabet_and_permutation import Alphabet, Permutation
from errors import ConfigurationError
from wheels import ALPHA26, FIXED, REFLECTORS, ROTORS, cycles_from_wiring, historical_catalog


class TestCyclesFromWiring(unittest.TestCase):
    def test_rotor_i(self):
        cycles = cycles_from_wiring(ROTORS["I"][0], Alphabet(ALPHA26))
        self.assertEqual(cycles, ["AELTPHQXRU", "BKNW", "CMOY", "DFG", "IV", "JZ", "S"])

    def test_reproduces_wiring(self):
        alpha = Alphabet(ALPHA26)
        for name, wiring in [(n, w) for n, (w, _) in ROTORS.items()] + list(FIXED.items()):
            perm = Permutation(cycles_from_wiring(wiring, alpha), alpha)
            with self.subTest(name=name):
                self.assertEqual("".join(perm.permute_symbol(ch) for ch in ALPHA26), wiring)

    def test_not_a_permutation(self):
        with self.assertRaises(ConfigurationError):
            cycles_from_wiring("AACD", Alphabet("ABCD"))
        with self.assertRaises(ConfigurationError):
            cycles_from_wiring("ABC", Alphabet("ABCD"))


class TestCatalog(unittest.TestCase):
    def test_contents(self):
        catalog = historical_catalog()
        self.assertEqual(set(catalog), set(ROTORS) | set(FIXED) | set(REFLECTORS))
        for name in ROTORS:
            self.assertTrue(catalog[name].rotates())
        for name in FIXED:
            self.assertFalse(catalog[name].rotates())
            self.assertFalse(catalog[name].reflecting())
        for name in REFLECTORS:
            self.assertTrue(catalog[name].reflecting())
            self.assertTrue(catalog[name].permutation.derangement())

    def test_reflectors_are_involutions(self):
        catalog = historical_catalog()
        for name in REFLECTORS:
            perm = catalog[name].permutation
            with self.subTest(name=name):
                self.assertTrue(all(len(c) == 2 for c in perm.cycles))

    def test_fresh_each_call(self):
        self.assertIsNot(historical_catalog()["I"], historical_catalog()["I"])


if __name__ == "__main__":
    unittest.main()
