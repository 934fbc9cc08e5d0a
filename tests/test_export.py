import json
from pathlib import Path

import pytest
import yaml

from openapi_autodoc.export import detect_format, dump_document, load_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_yaml_suffixes(self):
        assert detect_format(Path("openapi.yaml")) == "yaml"
        assert detect_format(Path("openapi.YML")) == "yaml"

    def test_everything_else_is_json(self):
        assert detect_format(Path("openapi.json")) == "json"
        assert detect_format(Path("openapi")) == "json"


class TestDumpDocument:
    def test_json_keeps_key_order(self):
        text = dump_document({"openapi": "3.0.0", "info": {"title": "Café"}}, "json")
        assert text.endswith("\n")
        assert text.index("openapi") < text.index("info")
        assert "Café" in text
        assert json.loads(text)["info"]["title"] == "Café"

    def test_yaml_keeps_key_order(self):
        text = dump_document({"paths": {}, "info": {"title": "x"}}, "yaml")
        assert text.index("paths") < text.index("info")
        assert yaml.safe_load(text) == {"paths": {}, "info": {"title": "x"}}


class TestLoadDocument:
    def test_load_json(self):
        assert load_document(FIXTURES / "base.json")["info"]["title"] == "Base"

    def test_load_yaml(self):
        assert load_document(FIXTURES / "override.yaml")["paths"]["/pets"]["get"]["tags"] == ["custom"]

    def test_empty_file(self, tmp_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        assert load_document(empty) == {}

    def test_non_mapping_is_rejected(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2]")
        with pytest.raises(ValueError, match="mapping"):
            load_document(bad)
