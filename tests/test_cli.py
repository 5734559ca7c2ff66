import json
from pathlib import Path

from click.testing import CliRunner

from openapi_catalog.cli import _filter_endpoints, main
from openapi_catalog.parser.base import EndpointRecord

FIXTURES = Path(__file__).parent / "fixtures"


def _make_endpoint(method: str, path: str) -> EndpointRecord:
    return EndpointRecord(method=method, path=path)


class TestCliExtract:
    def test_extract_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(main, ["extract", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0
        catalogue = json.loads(result.stdout)
        assert [(e["method"], e["path"]) for e in catalogue] == [
            ("GET", "/pets"),
            ("POST", "/pets"),
            ("GET", "/pets/{petId}"),
        ]
        assert catalogue[1]["requestBodyExample"].startswith('{\n  "name" : "Fido"')
        assert catalogue[0]["parameters"][0]["example"] == "20"

    def test_extract_to_file(self, tmp_path):
        output_file = tmp_path / "out" / "catalogue.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "extract", str(FIXTURES / "petstore.json"),
            "-o", str(output_file),
            "--format", "json",
        ])

        assert result.exit_code == 0
        catalogue = json.loads(output_file.read_text(encoding="utf-8"))
        assert len(catalogue) == 3
        assert catalogue[2]["method"] == "DELETE"
        assert catalogue[2]["responseExample"] is None

    def test_extract_with_filter(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "extract", str(FIXTURES / "petstore.yaml"),
            "--endpoint", "POST /pets",
        ])

        assert result.exit_code == 0
        catalogue = json.loads(result.stdout)
        assert len(catalogue) == 1
        assert catalogue[0]["method"] == "POST"

    def test_extract_unparseable_contract(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("openapi: [unclosed", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["extract", str(bad)])

        assert result.exit_code == 1
        assert json.loads(result.stdout) == []
        assert "degraded" in result.stderr


class TestCliList:
    def test_list_endpoints(self):
        runner = CliRunner()
        result = runner.invoke(main, ["list", str(FIXTURES / "swagger2.yaml")])

        assert result.exit_code == 0
        assert "GET     /orders  List orders" in result.output
        assert "POST    /orders  Place an order" in result.output
        assert "Found 2 endpoints." in result.output

    def test_list_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["list", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0


class TestFilterEndpoints:
    def test_filter_by_method_and_path(self):
        endpoints = [
            _make_endpoint("GET", "/pets"),
            _make_endpoint("POST", "/pets"),
            _make_endpoint("GET", "/users"),
        ]
        result = _filter_endpoints(endpoints, ("POST /pets",))
        assert len(result) == 1
        assert result[0].method == "POST"
        assert result[0].path == "/pets"

    def test_filter_by_path_only(self):
        endpoints = [
            _make_endpoint("GET", "/pets"),
            _make_endpoint("POST", "/pets/123"),
            _make_endpoint("GET", "/users"),
        ]
        result = _filter_endpoints(endpoints, ("/pets/*",))
        assert len(result) == 1
        assert result[0].path == "/pets/123"

    def test_filter_method_is_case_insensitive(self):
        endpoints = [_make_endpoint("DELETE", "/pets/{petId}")]
        assert len(_filter_endpoints(endpoints, ("delete /pets/*",))) == 1

    def test_filter_no_match(self):
        endpoints = [
            _make_endpoint("GET", "/pets"),
            _make_endpoint("POST", "/pets"),
        ]
        result = _filter_endpoints(endpoints, ("DELETE /orders",))
        assert len(result) == 0

    def test_no_patterns_keeps_all(self):
        endpoints = [_make_endpoint("GET", "/pets")]
        assert _filter_endpoints(endpoints, ()) == endpoints
