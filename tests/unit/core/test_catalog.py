# tests/unit/core/test_catalog.py
"""Tests for the block catalog and starter templates."""

from __future__ import annotations

import pytest

from pipeforge.contracts.enums import BlockCategory, BlockType, NodeRole
from pipeforge.core.catalog import (
    BLOCK_CATALOG,
    TEMPLATES,
    blocks_by_category,
    create_node,
    default_config,
    get_block,
    get_template,
    list_blocks,
)
from pipeforge.core.graph.blocks import DockerJobConfig, NodeJobConfig, TriggerConfig


class TestCatalog:
    def test_every_block_type_is_catalogued(self) -> None:
        assert set(BLOCK_CATALOG) == set(BlockType)
        assert len(list_blocks()) == 16

    def test_roles(self) -> None:
        triggers = {spec.block_type for spec in list_blocks() if spec.is_trigger}

        assert triggers == {BlockType.TRIGGER_PUSH, BlockType.TRIGGER_PR, BlockType.TRIGGER_SCHEDULE}

    def test_categories_in_palette_order(self) -> None:
        grouped = blocks_by_category()

        assert list(grouped) == list(BlockCategory)
        assert [spec.block_type for spec in grouped[BlockCategory.DEPLOY]] == [
            BlockType.DEPLOY_VERCEL,
            BlockType.DEPLOY_AWS,
            BlockType.DEPLOY_GCP,
            BlockType.NOTIFY_SLACK,
        ]

    def test_get_block_unknown(self) -> None:
        assert get_block("nope") is None

    def test_labels(self) -> None:
        spec = get_block("node_test")

        assert spec is not None
        assert spec.label == "Node.js Tests"
        assert spec.role == NodeRole.JOB

    def test_checkout_disabled_for_cache_and_slack(self) -> None:
        assert default_config("cache")["checkout"] is False
        assert default_config("notify_slack")["checkout"] is False

    def test_schedule_default_cron(self) -> None:
        assert default_config("trigger_schedule") == {"trigger": "schedule", "cron": "0 0 * * *"}

    def test_default_config_is_a_fresh_copy(self) -> None:
        first = default_config("node_test")
        first["nodeVersion"] = "16"

        assert default_config("node_test")["nodeVersion"] == "20"

    def test_catalog_defaults_are_read_only(self) -> None:
        spec = get_block("lint")
        assert spec is not None

        with pytest.raises(TypeError):
            spec.defaults["checkout"] = False  # type: ignore[index]

    def test_default_config_unknown_is_empty(self) -> None:
        assert default_config("nope") == {}


class TestCreateNode:
    def test_defaults_applied(self) -> None:
        node = create_node(BlockType.NODE_BUILD, "n1")

        assert node.label == "Node.js Build"
        assert isinstance(node.config, NodeJobConfig)
        assert node.config.node_version == "20"
        assert node.config.checkout is True

    def test_overrides(self) -> None:
        node = create_node("docker_build", "d1", label="Image", imageName="api")

        assert node.label == "Image"
        assert isinstance(node.config, DockerJobConfig)
        assert node.config.image_name == "api"

    def test_trigger(self) -> None:
        node = create_node("trigger_pr", "t1")

        assert node.is_trigger
        assert isinstance(node.config, TriggerConfig)
        assert node.config.trigger == "pull_request"

    def test_unknown_block_type(self) -> None:
        with pytest.raises(KeyError, match="Unknown block type: 'nope'"):
            create_node("nope", "x")


class TestTemplates:
    def test_names(self) -> None:
        assert list(TEMPLATES) == ["nodejs", "python", "docker", "fullstack"]

    @pytest.mark.parametrize("name", list(TEMPLATES))
    def test_template_has_one_trigger_first(self, name: str) -> None:
        graph = get_template(name)

        assert graph.nodes[0].is_trigger
        assert len(graph.trigger_nodes) == 1

    @pytest.mark.parametrize("name", list(TEMPLATES))
    def test_edges_reference_existing_nodes(self, name: str) -> None:
        graph = get_template(name)
        ids = {node.id for node in graph.nodes}

        assert all(edge.source in ids and edge.target in ids for edge in graph.edges)

    def test_fullstack_wiring(self) -> None:
        graph = get_template("fullstack")

        assert graph.nodes[0].block_type == BlockType.TRIGGER_PR
        assert len(graph.nodes) == 7
        assert len(graph.edges) == 8

    def test_each_call_builds_a_new_graph(self) -> None:
        assert get_template("docker") == get_template("docker")
        assert get_template("docker") is not get_template("docker")

    def test_unknown_template_lists_available(self) -> None:
        with pytest.raises(KeyError, match="nodejs, python, docker, fullstack"):
            get_template("rust")
