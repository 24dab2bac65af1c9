import unittest

from markov_pipeline.interner import Interner


class InternerTests(unittest.TestCase):
    def test_equal_text_returns_same_object(self) -> None:
        interner = Interner()
        first = interner.intern("".join(["ca", "t"]))
        second = interner.intern("".join(["c", "at"]))

        self.assertEqual(first, "cat")
        self.assertIs(first, second)
        self.assertEqual(len(interner), 1)

    def test_lookup_does_not_store(self) -> None:
        interner = Interner()
        self.assertIsNone(interner.lookup("dog"))
        self.assertNotIn("dog", interner)

        stored = interner.intern("dog")
        self.assertIs(interner.lookup("dog"), stored)
        self.assertIn("dog", interner)

    def test_iterates_in_first_seen_order_and_clears(self) -> None:
        interner = Interner()
        for text in ["b", "a", "b", "c"]:
            interner.intern(text)

        self.assertListEqual(list(interner), ["b", "a", "c"])

        interner.clear()
        self.assertEqual(len(interner), 0)
        self.assertListEqual(list(interner), [])


if __name__ == "__main__":
    unittest.main()
