import unittest

from testbridge.engine import annotations


def add(a, b):
    return a + b


@annotations.test(suite_name="Calculator", test_name="arithmetic", groups=["fast"])
class AdditionTests(unittest.TestCase):
    def test_small_numbers(self) -> None:
        self.assertEqual(add(2, 3), 5)

    @annotations.test(groups=["slow"])
    def test_large_numbers(self) -> None:
        self.assertEqual(add(10**12, 10**12), 2 * 10**12)


class NegativeAdditionTests(AdditionTests):
    def test_negative(self) -> None:
        self.assertEqual(add(-2, -3), -5)
