import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from openapi_autodoc.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
APP = "sample_app:create_docs"


def _generate(*args: str):
    runner = CliRunner()
    return runner.invoke(main, ["generate", APP, "--app-dir", str(FIXTURES), *args])


class TestCliGenerate:
    def test_generate_to_stdout(self):
        result = _generate()

        assert result.exit_code == 0, result.output
        schema = json.loads(result.output)
        assert schema["openapi"] == "3.0.0"
        assert schema["info"] == {"title": "Pet Store", "version": "2.0.0"}
        assert set(schema["paths"]) == {"/pets", "/pets/{pet_id}"}
        assert set(schema["paths"]["/pets"]) == {"get", "post"}
        assert "Pet" in schema["components"]["schemas"]

    def test_generated_operations(self):
        schema = json.loads(_generate().output)

        list_pets = schema["paths"]["/pets"]["get"]
        assert list_pets["tags"] == ["pets"]
        assert [p["name"] for p in list_pets["parameters"]] == ["species", "limit"]

        get_pet = schema["paths"]["/pets/{pet_id}"]["get"]
        assert get_pet["parameters"][0]["in"] == "path"
        assert get_pet["parameters"][0]["required"] is True
        assert get_pet["responses"]["200"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/Pet"
        }

        create_pet = schema["paths"]["/pets"]["post"]
        assert create_pet["requestBody"]["required"] is True

    def test_generate_json_file(self, tmp_path):
        output_file = tmp_path / "out" / "openapi.json"
        result = _generate("-o", str(output_file))

        assert result.exit_code == 0, result.output
        assert output_file.exists()
        assert "saved to" in result.output
        assert json.loads(output_file.read_text())["info"]["title"] == "Pet Store"

    def test_generate_yaml_by_suffix(self, tmp_path):
        output_file = tmp_path / "openapi.yaml"
        result = _generate("-o", str(output_file))

        assert result.exit_code == 0, result.output
        schema = yaml.safe_load(output_file.read_text())
        assert schema["paths"]["/pets"]["get"]["tags"] == ["pets"]

    def test_explicit_format_wins_over_suffix(self, tmp_path):
        output_file = tmp_path / "openapi.txt"
        result = _generate("-o", str(output_file), "--format", "yaml")

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(output_file.read_text())["openapi"] == "3.0.0"

    def test_generate_with_override(self):
        result = _generate("--merge", str(FIXTURES / "override.yaml"))

        assert result.exit_code == 0, result.output
        schema = json.loads(result.output)
        assert schema["info"]["title"] == "Pet Store (custom)"
        assert schema["info"]["version"] == "2.0.0"
        list_pets = schema["paths"]["/pets"]["get"]
        assert list_pets["summary"] == "List all pets"
        assert list_pets["tags"] == ["custom"]
        assert len(list_pets["parameters"]) == 2


class TestCliBadTarget:
    def test_missing_colon(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "sample_app", "--app-dir", str(FIXTURES)])
        assert result.exit_code != 0
        assert "module:attribute" in result.output

    def test_unknown_module(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "no_such_module_xyz:docs"])
        assert result.exit_code != 0
        assert "cannot import" in result.output

    def test_unknown_attribute(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "sample_app:missing", "--app-dir", str(FIXTURES)])
        assert result.exit_code != 0
        assert "has no attribute" in result.output

    def test_not_a_documentation(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "sample_app:NOT_DOCS", "--app-dir", str(FIXTURES)])
        assert result.exit_code != 0
        assert "not a Documentation" in result.output


class TestCliMerge:
    def test_merge_documents(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "merge", str(FIXTURES / "base.json"), str(FIXTURES / "override.yaml"),
        ])

        assert result.exit_code == 0, result.output
        schema = json.loads(result.output)
        assert schema["info"] == {"title": "Pet Store (custom)", "version": "1.0.0"}
        get = schema["paths"]["/pets"]["get"]
        assert get["tags"] == ["custom"]
        assert get["summary"] == "List all pets"
        assert get["responses"] == {"200": {"description": "200 response"}}

    def test_merge_single_route(self, tmp_path):
        route_override = tmp_path / "route.yaml"
        route_override.write_text("get:\n  description: Every pet in the store\n")
        output_file = tmp_path / "merged.yaml"

        runner = CliRunner()
        result = runner.invoke(main, [
            "merge", str(FIXTURES / "base.json"), str(route_override),
            "--route", "/pets",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        schema = yaml.safe_load(output_file.read_text())
        get = schema["paths"]["/pets"]["get"]
        assert get["description"] == "Every pet in the store"
        assert get["tags"] == ["auto"]
        assert schema["info"]["title"] == "Base"

    def test_merge_rejects_non_mapping(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("- just\n- a list\n")

        runner = CliRunner()
        result = runner.invoke(main, ["merge", str(FIXTURES / "base.json"), str(bad)])
        assert result.exit_code != 0
        assert "cannot read" in result.output

    def test_merge_requires_overrides(self):
        runner = CliRunner()
        result = runner.invoke(main, ["merge", str(FIXTURES / "base.json")])
        assert result.exit_code != 0
