# tests/unit/compiler/test_resolver.py
"""Tests for trigger selection and dependency resolution."""

from pipeforge.compiler.resolver import resolve_dependencies, select_trigger
from tests.fixtures.factories import edge_doc, job_doc, make_graph, trigger_doc


class TestSelectTrigger:
    def test_no_trigger(self) -> None:
        graph = make_graph([job_doc("j1", "Lint", "lint")])

        assert select_trigger(graph) is None

    def test_first_trigger_in_node_order_wins(self) -> None:
        graph = make_graph(
            [
                job_doc("j1", "Lint", "lint"),
                trigger_doc("t2", label="Second", branch="dev"),
                trigger_doc("t1", label="First"),
            ]
        )

        trigger = select_trigger(graph)

        assert trigger is not None
        assert trigger.id == "t2"

    def test_unknown_trigger_block_type_still_counts(self) -> None:
        graph = make_graph([trigger_doc("t1", block_type="trigger_webhook", trigger="repository_dispatch")])

        trigger = select_trigger(graph)

        assert trigger is not None
        assert trigger.config.trigger == "repository_dispatch"


class TestResolveDependencies:
    def test_job_to_job_edge(self) -> None:
        graph = make_graph(
            [job_doc("a", "Build App", "node_build"), job_doc("b", "Deploy", "deploy_aws")],
            [edge_doc("a", "b")],
        )

        assert resolve_dependencies(graph, graph.nodes[1]) == ["build_app"]
        assert resolve_dependencies(graph, graph.nodes[0]) == []

    def test_trigger_sources_are_excluded(self) -> None:
        graph = make_graph(
            [trigger_doc("t1"), job_doc("j1", "Lint", "lint")],
            [edge_doc("t1", "j1")],
        )

        assert resolve_dependencies(graph, graph.nodes[1]) == []

    def test_second_trigger_sources_are_excluded_too(self) -> None:
        graph = make_graph(
            [trigger_doc("t1"), trigger_doc("t2"), job_doc("j1", "Lint", "lint")],
            [edge_doc("t2", "j1")],
        )

        assert resolve_dependencies(graph, graph.nodes[2]) == []

    def test_dangling_source_is_skipped(self) -> None:
        graph = make_graph([job_doc("j1", "Lint", "lint")], [edge_doc("ghost", "j1")])

        assert resolve_dependencies(graph, graph.nodes[0]) == []

    def test_edge_order_is_kept_and_duplicates_are_not_removed(self) -> None:
        graph = make_graph(
            [
                job_doc("a", "Alpha", "lint"),
                job_doc("b", "Beta", "node_test"),
                job_doc("c", "Gamma", "node_build"),
            ],
            [edge_doc("b", "c"), edge_doc("a", "c"), edge_doc("b", "c")],
        )

        assert resolve_dependencies(graph, graph.nodes[2]) == ["beta", "alpha", "beta"]

    def test_self_edge_yields_own_id(self) -> None:
        graph = make_graph([job_doc("a", "Loop", "lint")], [edge_doc("a", "a")])

        assert resolve_dependencies(graph, graph.nodes[0]) == ["loop"]
