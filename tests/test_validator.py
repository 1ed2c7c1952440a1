import json

from postman_to_openapi import convert, serialize
from postman_to_openapi.generator.validator import (
    validate_files,
    validate_json,
    validate_openapi,
    validate_yaml,
)

SAMPLE = {
    "info": {"name": "Pets"},
    "item": [
        {"name": "Pets", "item": [
            {"name": "Get pet", "request": {"url": {"path": ["pets", ":petId"]}}},
            {
                "name": "Add pet",
                "request": {
                    "method": "POST",
                    "url": {"path": ["pets"]},
                    "body": {"mode": "raw", "raw": '{"name": "Fido", "age": 3}'},
                },
            },
        ]},
    ],
}


class TestValidateJson:
    def test_valid_json_passes(self):
        assert validate_json({"openapi.json": '{"a": 1}'}) == {}

    def test_invalid_json_detected(self):
        errors = validate_json({"openapi.json": '{"a": '})
        assert "openapi.json" in errors
        assert "JSONDecodeError" in errors["openapi.json"]

    def test_other_files_ignored(self):
        assert validate_json({"openapi.yaml": "{not json"}) == {}


class TestValidateYaml:
    def test_valid_yaml_passes(self):
        assert validate_yaml({"openapi.yaml": "key: value\nlist:\n  - a\n"}) == {}

    def test_invalid_yaml_detected(self):
        errors = validate_yaml({"openapi.yml": "key: [unclosed\n"})
        assert "openapi.yml" in errors
        assert "YAMLError" in errors["openapi.yml"]


class TestValidateOpenapi:
    def test_converted_document_is_valid(self):
        assert validate_openapi(convert(json.dumps(SAMPLE))) == []

    def test_not_a_mapping(self):
        assert validate_openapi(["x"]) == ["document is not a mapping"]

    def test_missing_keys(self):
        problems = validate_openapi({"paths": {}})
        assert "missing top-level key 'openapi'" in problems
        assert "missing top-level key 'info'" in problems

    def test_bad_path_and_method(self):
        doc = {
            "openapi": "3.0.3",
            "info": {},
            "paths": {"users": {"fetch": {}, "get": {"responses": {}}}},
        }
        problems = validate_openapi(doc)
        assert "path 'users' does not start with '/'" in problems
        assert "FETCH users: unknown HTTP method" in problems
        assert "GET users: no responses" in problems

    def test_undeclared_path_parameter(self):
        doc = {
            "openapi": "3.0.3",
            "info": {},
            "paths": {
                "/users": {
                    "get": {
                        "parameters": [{"name": "id", "in": "path"}],
                        "responses": {"200": {"description": "ok"}},
                    }
                },
                "/pets/{petId}": {
                    "get": {
                        "parameters": [{"name": "petId", "in": "path"}],
                        "responses": {"200": {"description": "ok"}},
                    }
                },
            },
        }
        assert validate_openapi(doc) == ["GET /users: path parameter 'id' not in path"]


class TestValidateFiles:
    def test_emitted_files_pass(self):
        doc = convert(json.dumps(SAMPLE))
        files = {
            "openapi.json": serialize(doc, "json"),
            "openapi.yaml": serialize(doc, "yaml"),
        }
        assert validate_files(files) == {}

    def test_emitted_yaml_loads_back(self):
        import yaml

        doc = convert(json.dumps(SAMPLE))
        loaded = yaml.safe_load(serialize(doc, "yaml"))
        post = loaded["paths"]["/pets"]["post"]
        assert post["requestBody"]["content"]["application/json"]["schema"]["example"] == {
            "name": "Fido",
            "age": 3,
        }
        assert loaded["tags"] == [{"name": "Pets", "description": None}]

    def test_syntax_error_skips_structure_check(self):
        errors = validate_files({"openapi.json": "{", "notes.txt": "anything"})
        assert list(errors) == ["openapi.json"]
        assert errors["openapi.json"].startswith("JSONDecodeError")

    def test_structural_problem_reported(self):
        errors = validate_files({"openapi.yaml": "openapi: 3.0.3\ninfo: {}\npaths:\n  users: {}\n"})
        assert "does not start with '/'" in errors["openapi.yaml"]
