"""
Unit tests for the static registries.
"""

import pytest

from project_generator.core.constants import REQUIRED_MCP_IDS
from project_generator.registries.features import (
    get_all_feature_ids,
    get_feature_definition,
    get_features_by_category,
    get_recommended_features,
    map_features_to_project_features,
    validate_feature_dependencies,
)
from project_generator.registries.mcp_servers import (
    LAUNCH_SPECS,
    MCP_REGISTRY,
    get_mcp_by_id,
    get_mcps_by_category,
    get_required_mcps,
    search_mcps,
)
from project_generator.registries.templates import (
    QUICK_START_TEMPLATES,
    get_category_counts,
    get_popular_templates,
    get_template_by_id,
    get_templates_by_category,
    get_templates_by_tag,
    template_to_project_config,
)


class TestFeatureRegistry:
    def test_map_feature_ids(self) -> None:
        features = map_features_to_project_features(["auth", {"id": "database"}, "unknown"])

        assert [f.id for f in features] == ["auth", "database"]
        assert features[0].category == "authentication"
        assert features[1].category == "database"
        assert all(f.required for f in features)

    def test_lookup(self) -> None:
        assert get_feature_definition("payment").name == "Payment Integration"
        assert get_feature_definition("nope") is None
        assert "testing" in get_all_feature_ids()

    def test_by_category(self) -> None:
        ids = {d.id for d in get_features_by_category("database")}
        assert "database" in ids

    def test_dependency_validation(self) -> None:
        result = validate_feature_dependencies(["api"])
        assert result["valid"] is False
        assert result["missingDependencies"] == ["API Routes requires Database"]

        assert validate_feature_dependencies(["api", "database"])["valid"] is True

    def test_recommended(self) -> None:
        assert "payment" in get_recommended_features("saas")
        assert get_recommended_features("unknown-kind") == []


class TestMCPRegistry:
    def test_required_servers(self) -> None:
        required = get_required_mcps()
        assert [m.id for m in required] == list(REQUIRED_MCP_IDS)
        assert all(m.required for m in required)
        assert [m.id for m in MCP_REGISTRY if m.required] == list(REQUIRED_MCP_IDS)

    def test_lookup(self) -> None:
        assert get_mcp_by_id("supabase").name
        assert get_mcp_by_id("missing") is None

    def test_category_and_search(self) -> None:
        assert get_mcp_by_id("supabase") in get_mcps_by_category("database")
        assert get_mcp_by_id("github") in search_mcps("GITHUB")
        assert search_mcps("zzz-no-match") == []

    def test_every_server_can_be_launched(self) -> None:
        assert {m.id for m in MCP_REGISTRY} == set(LAUNCH_SPECS)

    def test_launch_specs_never_inline_secrets(self) -> None:
        for spec in LAUNCH_SPECS.values():
            for value in spec.env.values():
                assert value.startswith("${") and value.endswith("}")


class TestTemplates:
    def test_lookup(self) -> None:
        template = get_template_by_id("saas-starter")
        assert template is not None
        assert template.type == "saas"
        assert get_template_by_id("nope") is None

    def test_popular(self) -> None:
        popular = get_popular_templates()
        assert len(popular) == 3
        assert all(t.popularity == 5 for t in popular)

    def test_by_tag_and_category(self) -> None:
        assert get_templates_by_category("all") == QUICK_START_TEMPLATES
        assert all(t.category == "api" for t in get_templates_by_category("api"))
        assert get_templates_by_tag("zzz") == []

    def test_category_counts(self) -> None:
        counts = get_category_counts()
        assert counts["all"] == len(QUICK_START_TEMPLATES)
        assert sum(v for k, v in counts.items() if k != "all") == counts["all"]

    @pytest.mark.parametrize("template", QUICK_START_TEMPLATES, ids=lambda t: t.id)
    def test_template_to_config(self, template) -> None:
        config = template_to_project_config(template, "My Project")

        assert config.name == "My Project"
        assert config.description == template.description
        assert config.type == template.type
        assert config.metadata.template_used == template.id
        assert [f.id for f in config.features] == [f.id for f in template.features]

    def test_to_dict_is_camel_case(self) -> None:
        data = get_template_by_id("api-microservice").to_dict()
        assert data["estimatedTime"]
        assert data["config"]["techStack"]["backend"]
        assert data["config"]["metadata"]["estimatedComplexity"]
