import unittest

from markov_pipeline.errors import InvariantViolation
from markov_pipeline.graph import AccumulatingNode, RawGraph, build_from_stream
from markov_pipeline.probability import Bucket, ResolvedNode, freeze, resolve_node
from markov_pipeline.tokenizer import tokenize

SAMPLE_TEXT = """
It was the best of times, it was the worst of times, it was the age of
wisdom, it was the age of foolishness, it was the epoch of belief, it was
the epoch of incredulity, it was the season of Light, it was the season of
Darkness, it was the spring of hope, it was the winter of despair.
"""


def _node(counts):
    node = AccumulatingNode()
    for neighbour, frequency in counts.items():
        for _ in range(frequency):
            node.add(neighbour)
    return node


class ResolveNodeTests(unittest.TestCase):
    def test_buckets_follow_frequency_shares(self) -> None:
        resolved = resolve_node(_node({"x": 1, "y": 3}))

        self.assertTupleEqual(
            resolved.buckets,
            (Bucket(0.0, 0.25, "x"), Bucket(0.25, 1.0, "y")),
        )

    def test_consistent_counts_end_at_one_without_clamping(self) -> None:
        resolved = resolve_node(_node({"a": 1, "b": 1, "c": 1}))

    def test_clamp_extends_last_bucket_when_total_exceeds_counts(self) -> None:
        node = _node({"a": 1, "b": 1})
        node.total = 3
        resolved = resolve_node(node)

        self.assertAlmostEqual(resolved.buckets[0].upper, 1 / 3)
        self.assertEqual(resolved.buckets[-1].upper, 1.0)
        self.assertEqual(resolved.select(0.9), "b")
        self.assertEqual(resolved.select(0.999999), "b")

        self.assertEqual(len(resolved), 3)
        self.assertEqual(resolved.buckets[-1].upper, 1.0)
        self.assertAlmostEqual(resolved.buckets[0].width, 1 / 3)

    def test_node_without_edges_is_rejected(self) -> None:
        with self.assertRaises(InvariantViolation):
            resolve_node(AccumulatingNode())

    def test_inconsistent_distinct_count_is_rejected(self) -> None:
        node = _node({"a": 2})
        node.unique = 2
        with self.assertRaises(InvariantViolation):
            resolve_node(node)


class SelectTests(unittest.TestCase):
    def setUp(self) -> None:
        self.node = resolve_node(_node({"x": 1, "y": 3}))

    def test_upper_bound_is_inclusive(self) -> None:
        self.assertEqual(self.node.select(0.0), "x")
        self.assertEqual(self.node.select(0.25), "x")
        self.assertEqual(self.node.select(0.2500001), "y")
        self.assertEqual(self.node.select(0.999999), "y")
        self.assertEqual(self.node.select(1.0), "y")

    def test_out_of_range_values_raise(self) -> None:
        for value in (-0.1, 1.5):
            with self.subTest(value=value):
                with self.assertRaises(InvariantViolation):
                    self.node.select(value)

    def test_single_neighbour_ignores_the_draw(self) -> None:
        node = resolve_node(_node({"only": 4}))
        for value in (0.0, 0.3, 0.5, 0.999999):
            with self.subTest(value=value):
                self.assertEqual(node.select(value), "only")

    def test_empty_node_cannot_be_sampled(self) -> None:
        with self.assertRaises(InvariantViolation):
            ResolvedNode(()).select(0.5)


class FreezeTests(unittest.TestCase):
    def test_every_node_partitions_unit_interval(self) -> None:
        graph = build_from_stream(tokenize(SAMPLE_TEXT))
        distinct = {source: node.unique for source, node in graph.nodes.items()}
        resolved = freeze(graph)

        self.assertSetEqual(set(resolved), set(distinct))
        for source, node in resolved.items():
            with self.subTest(source=source):
                buckets = node.buckets
                self.assertEqual(len(buckets), distinct[source])
                self.assertEqual(buckets[0].lower, 0.0)
                self.assertGreaterEqual(buckets[-1].upper, 1.0)
                self.assertAlmostEqual(sum(bucket.width for bucket in buckets), 1.0, delta=1e-5)
                for previous, current in zip(buckets, buckets[1:]):
                    self.assertEqual(previous.upper, current.lower)
                    self.assertLess(current.lower, current.upper)

    def test_freeze_discards_counts_and_runs_once(self) -> None:
        graph = RawGraph()
        graph.record_edge("a", "b")
        resolved = freeze(graph)

        self.assertTrue(graph.frozen)
        self.assertDictEqual(graph.nodes, {})
        self.assertIs(resolved["a"].buckets[0].neighbour, graph.interner.lookup("b"))
        with self.assertRaises(InvariantViolation):
            freeze(graph)

    def test_empty_graph_freezes_to_nothing(self) -> None:
        self.assertDictEqual(freeze(RawGraph()), {})


if __name__ == "__main__":
    unittest.main()
