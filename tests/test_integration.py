"""End-to-end tests: contract text in, catalogue JSON out."""

import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from openapi_catalog.cli import main
from openapi_catalog.parser.swagger import parse_contract

FIXTURES = Path(__file__).parent / "fixtures"


class TestEndToEnd:
    def test_yaml_and_json_forms_agree(self):
        text = (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")
        as_json = json.dumps(yaml.safe_load(text))

        from_yaml = parse_contract(text)
        from_json = parse_contract(as_json)

        assert from_json.ok
        assert from_yaml.endpoints == from_json.endpoints

    def test_cli_catalogue_matches_library(self, tmp_path):
        output = tmp_path / "catalogue.json"
        runner = CliRunner()
        result = runner.invoke(main, ["-vv", "extract", str(FIXTURES / "swagger2.yaml"), "-o", str(output)])
        assert result.exit_code == 0

        expected = parse_contract((FIXTURES / "swagger2.yaml").read_text(encoding="utf-8")).endpoints
        written = json.loads(output.read_text(encoding="utf-8"))
        assert written == [ep.model_dump(mode="json", by_alias=True) for ep in expected]
