"""Tests for flattening decoded trees into dependency graphs."""

import sys

from buildtools.pipenv.flatten import direct_imports, flatten, transitive_packages
from buildtools.pipenv.tree import decode
from graph.models import Ecosystem, Identity, ImportEdge, PackageRecord, TreeNode


def node(name, version, target="", children=()):
    return TreeNode(name, version, target, tuple(children))


def ident(name, version):
    return Identity(Ecosystem.PYTHON, name, version)


def edges(*pairs):
    return tuple(ImportEdge(ident(n, v)) for n, v in pairs)


class TestDirectImports:

    def test_one_edge_per_root_with_root_target(self):
        roots = [
            node("A", "1.0", "^1.0", [node("B", "2.0", ">=2")]),
            node("C", "3.0", ""),
        ]
        assert direct_imports(roots) == [
            ImportEdge(ident("A", "1.0"), "^1.0"),
            ImportEdge(ident("C", "3.0"), ""),
        ]

    def test_duplicates_kept_verbatim(self):
        roots = [node("A", "1.0", "*"), node("B", "1.0"), node("A", "1.0", "==1.0")]
        direct = direct_imports(roots)
        assert [e.resolved.name for e in direct] == ["A", "B", "A"]
        assert [e.target for e in direct] == ["*", "", "==1.0"]

    def test_empty_forest(self):
        dep_graph = flatten([])
        assert dep_graph.direct == []
        assert dep_graph.transitive == {}


class TestTransitivePackages:

    def test_simple_example(self):
        raw = (
            '[{"package_name": "A", "installed_version": "1.0", "required_version": "^1.0", '
            '"dependencies": [{"package_name": "B", "installed_version": "2.0", '
            '"required_version": "", "dependencies": []}]}]'
        )
        dep_graph = flatten(decode(raw))

        assert dep_graph.direct == [ImportEdge(ident("A", "1.0"), "^1.0")]
        assert dep_graph.transitive == {
            ident("A", "1.0"): PackageRecord(ident("A", "1.0"), edges(("B", "2.0"))),
            ident("B", "2.0"): PackageRecord(ident("B", "2.0"), ()),
        }

    def test_no_repeats_covers_every_node(self, requests_tree):
        dep_graph = flatten(decode(requests_tree))

        assert set(dep_graph.transitive) == {
            ident("requests", "2.31.0"),
            ident("certifi", "2023.7.22"),
            ident("charset-normalizer", "3.3.0"),
            ident("idna", "3.4"),
            ident("urllib3", "2.0.6"),
            ident("flask", "3.0.0"),
            ident("click", "8.1.7"),
            ident("colorama", "0.4.6"),
            ident("itsdangerous", "2.1.2"),
        }
        assert dep_graph.transitive[ident("flask", "3.0.0")].imports == edges(
            ("click", "8.1.7"), ("itsdangerous", "2.1.2"),
        )
        assert dep_graph.transitive[ident("click", "8.1.7")].imports == edges(("colorama", "0.4.6"))

    def test_transitive_edges_carry_no_target(self, requests_tree):
        dep_graph = flatten(decode(requests_tree))
        for record in dep_graph.packages():
            assert all(e.target == "" for e in record.imports)

    def test_closure_holds_without_early_stop(self, requests_tree):
        dep_graph = flatten(decode(requests_tree))
        for record in dep_graph.packages():
            for edge in record.imports:
                assert edge.resolved in dep_graph.transitive

    def test_shared_subtree_recorded_once(self):
        roots = [
            node("A", "1.0", children=[node("B", "2.0", children=[node("D", "4.0")])]),
            node("C", "1.0", children=[node("B", "2.0", children=[node("D", "4.0")])]),
        ]
        graph = transitive_packages(roots)

        assert list(graph) == [ident("A", "1.0"), ident("B", "2.0"), ident("D", "4.0"), ident("C", "1.0")]
        assert graph[ident("C", "1.0")].imports == edges(("B", "2.0"))

    def test_descendant_first_occurrence_wins(self):
        roots = [
            node("A", "1.0", children=[node("B", "2.0", children=[node("X", "1.0")])]),
            node("C", "1.0", children=[node("B", "2.0", children=[node("Y", "1.0")])]),
        ]
        graph = transitive_packages(roots)

        assert graph[ident("B", "2.0")].imports == edges(("X", "1.0"))
        # Y sits only below the skipped occurrence of B
        assert ident("Y", "1.0") not in graph

    def test_first_occurrence_is_preorder_left_to_right(self):
        roots = [
            node("A", "1.0", children=[
                node("P", "1.0", children=[node("B", "2.0", children=[node("deep", "1.0")])]),
                node("B", "2.0", children=[node("shallow", "1.0")]),
            ]),
        ]
        graph = transitive_packages(roots)

        assert graph[ident("B", "2.0")].imports == edges(("deep", "1.0"))
        assert ident("shallow", "1.0") not in graph

    def test_root_occurrence_last_wins(self):
        roots = [
            node("A", "1.0", children=[node("X", "1.0")]),
            node("A", "1.0", children=[node("Y", "1.0")]),
        ]
        graph = transitive_packages(roots)

        assert graph[ident("A", "1.0")].imports == edges(("Y", "1.0"))
        assert ident("X", "1.0") in graph
        assert ident("Y", "1.0") in graph

    def test_root_overwrites_record_from_earlier_descendant(self):
        roots = [
            node("A", "1.0", children=[node("B", "2.0", children=[node("X", "1.0")])]),
            node("B", "2.0", children=[node("Y", "1.0")]),
        ]
        graph = transitive_packages(roots)

        assert graph[ident("B", "2.0")].imports == edges(("Y", "1.0"))
        assert ident("X", "1.0") in graph
        assert ident("Y", "1.0") in graph

    def test_descendant_with_root_identity_is_skipped(self):
        roots = [node("A", "1.0", children=[node("A", "1.0", children=[node("Z", "1.0")])])]
        graph = transitive_packages(roots)

        assert graph[ident("A", "1.0")].imports == edges(("A", "1.0"))
        assert ident("Z", "1.0") not in graph

    def test_same_name_different_versions_are_distinct(self):
        roots = [
            node("A", "1.0", children=[node("six", "1.15.0")]),
            node("B", "1.0", children=[node("six", "1.16.0")]),
        ]
        graph = transitive_packages(roots)
        assert ident("six", "1.15.0") in graph
        assert ident("six", "1.16.0") in graph

    def test_deep_tree_does_not_hit_recursion_limit(self):
        depth = sys.getrecursionlimit() * 2
        leaf = node("pkg0", "1.0")
        for i in range(1, depth):
            leaf = node(f"pkg{i}", "1.0", children=[leaf])

        graph = transitive_packages([leaf])
        assert len(graph) == depth


class TestDeterminism:

    def test_flatten_twice_is_identical(self, requests_tree):
        roots = decode(requests_tree)
        first = flatten(roots)
        second = flatten(roots)

        assert first == second
        assert list(first.transitive) == list(second.transitive)

    def test_calls_do_not_share_mapping(self):
        roots = [node("A", "1.0")]
        first = flatten(roots)
        second = flatten([node("B", "1.0")])
        assert list(first.transitive) == [ident("A", "1.0")]
        assert list(second.transitive) == [ident("B", "1.0")]
