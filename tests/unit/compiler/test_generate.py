# tests/unit/compiler/test_generate.py
"""Tests for the compiler entry points."""

from __future__ import annotations

import pytest

from pipeforge.compiler import (
    EMPTY_CANVAS_PLACEHOLDER,
    compile_pipeline,
    download_name,
    generate,
    generate_yaml,
    output_path,
)
from pipeforge.compiler.emitters import EMITTERS, GitHubActionsEmitter, GitLabCIEmitter, get_emitter
from pipeforge.contracts.enums import OutputFormat
from pipeforge.core.catalog import TEMPLATES, create_node, get_template
from pipeforge.core.graph.models import PipelineEdge
from tests.fixtures.factories import edge_doc, job_doc, make_graph, trigger_doc


class TestGenerateYaml:
    @pytest.mark.parametrize("fmt", ["github", "gitlab"])
    def test_empty_inputs_give_placeholder_only(self, fmt: str) -> None:
        assert generate_yaml([], [], fmt) == "# Drag blocks onto the canvas to start building your pipeline"
        assert generate_yaml([], [], fmt) == EMPTY_CANVAS_PLACEHOLDER

    def test_accepts_models_and_mappings(self) -> None:
        nodes = [create_node("trigger_push", "t1"), job_doc("j1", "Lint Code", "lint")]
        edges = [PipelineEdge(source="t1", target="j1")]

        text = generate_yaml(nodes, edges, "github")

        assert "  lint_code:\n" in text

    def test_dependency_rendering(self) -> None:
        text = generate_yaml(
            [job_doc("a", "A Job", "lint"), job_doc("b", "B Job", "node_build")],
            [edge_doc("a", "b")],
            OutputFormat.GITHUB,
        )

        assert "    needs: [a_job]\n" in text

    def test_trigger_edges_never_become_needs(self) -> None:
        text = generate_yaml(
            [trigger_doc("t1"), trigger_doc("t2"), job_doc("j1", "Lint", "lint")],
            [edge_doc("t1", "j1"), edge_doc("t2", "j1")],
            "gitlab",
        )

        assert "needs" not in text

    def test_default_format_is_github(self) -> None:
        assert generate_yaml([job_doc("j1", "Lint", "lint")], []).startswith("name: My Pipeline")

    def test_numeric_ids_are_matched_as_text(self) -> None:
        text = generate_yaml(
            [{"id": 1, "type": "job", "blockType": "lint", "label": "One"}, {"id": 2, "type": "job", "blockType": "lint", "label": "Two"}],
            [{"source": 1, "target": 2}],
        )

        assert "    needs: [one]\n" in text


class TestGenerate:
    @pytest.mark.parametrize("fmt", ["github", "gitlab"])
    def test_wrongly_typed_options_still_compile(self, fmt: str) -> None:
        nodes = [trigger_doc(), job_doc("j1", "Lint", "lint", checkout="maybe", command=["npm", "test"])]

        text = generate_yaml(nodes, [], fmt)

        assert text == generate_yaml([trigger_doc(), job_doc("j1", "Lint", "lint")], [], fmt)

    def test_string_false_keeps_checkout(self) -> None:
        text = generate_yaml([trigger_doc(), job_doc("j1", "Lint", "lint", checkout="false")], [], "github")

        assert "actions/checkout@v4" in text

    @pytest.mark.parametrize("name", list(TEMPLATES))
    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_repeated_calls_are_identical(self, name: str, fmt: OutputFormat) -> None:
        graph = get_template(name)

        assert generate(graph, fmt) == generate(graph, fmt)

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported output format: 'jenkins'"):
            generate(get_template("nodejs"), "jenkins")


class TestOutputLocations:
    def test_output_paths(self) -> None:
        assert output_path("github") == ".github/workflows/ci.yml"
        assert output_path(OutputFormat.GITLAB) == ".gitlab-ci.yml"

    def test_download_names(self) -> None:
        assert download_name("github") == "ci.yml"
        assert download_name("gitlab") == ".gitlab-ci.yml"


class TestEmitterRegistry:
    def test_every_format_has_an_emitter(self) -> None:
        assert set(EMITTERS) == set(OutputFormat)

    def test_get_emitter(self) -> None:
        assert isinstance(get_emitter("github"), GitHubActionsEmitter)
        assert isinstance(get_emitter(OutputFormat.GITLAB), GitLabCIEmitter)

    def test_plan_is_shared_between_dialects(self) -> None:
        graph = get_template("python")

        github_plan = get_emitter("github").plan(graph)
        gitlab_plan = get_emitter("gitlab").plan(graph)

        assert [job.job_id for job in github_plan.jobs] == [job.job_id for job in gitlab_plan.jobs]
        assert [job.needs for job in github_plan.jobs] == [job.needs for job in gitlab_plan.jobs]


class TestCompilePipeline:
    def test_bundles_text_path_and_warnings(self) -> None:
        graph = get_template("docker")

        compiled = compile_pipeline(graph, "gitlab")

        assert compiled.format == OutputFormat.GITLAB
        assert compiled.text == generate(graph, "gitlab")
        assert compiled.path == ".gitlab-ci.yml"
        assert compiled.warnings == ()

    def test_warnings_do_not_block_generation(self) -> None:
        graph = make_graph([job_doc("a", "A", "lint")], [edge_doc("a", "a")])

        compiled = compile_pipeline(graph)

        assert compiled.warnings
        assert "    needs: [a]\n" in compiled.text
