"""Validates emitted OpenAPI documents for syntax and structural correctness."""

import json
import re
from typing import Any

import yaml

HTTP_METHODS = {"get", "put", "post", "delete", "options", "head", "patch", "trace"}
REQUIRED_KEYS = ("openapi", "info", "paths")

_PATH_PARAM = re.compile(r":(\w+)|\{(\w+)\}")


def validate_json(files: dict[str, str]) -> dict[str, str]:
    """Check JSON files for format errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith(".json"):
            continue
        try:
            json.loads(content)
        except json.JSONDecodeError as e:
            errors[filename] = f"JSONDecodeError: {e.msg} (line {e.lineno})"
    return errors


def validate_yaml(files: dict[str, str]) -> dict[str, str]:
    """Check YAML files for format errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith((".yaml", ".yml")):
            continue
        try:
            yaml.safe_load(content)
        except yaml.YAMLError as e:
            errors[filename] = f"YAMLError: {e}"
    return errors


def validate_openapi(document: Any) -> list[str]:
    """Check the structure of a decoded OpenAPI document.

    Returns a list of human-readable problems, empty when none were found.
    """
    if not isinstance(document, dict):
        return ["document is not a mapping"]

    problems = [f"missing top-level key '{key}'" for key in REQUIRED_KEYS if key not in document]

    paths = document.get("paths") or {}
    if not isinstance(paths, dict):
        return problems + ["'paths' is not a mapping"]

    for path, path_item in paths.items():
        path = str(path)
        if not path.startswith("/"):
            problems.append(f"path '{path}' does not start with '/'")
        if not isinstance(path_item, dict):
            problems.append(f"path '{path}' is not a mapping")
            continue
        declared = {a or b for a, b in _PATH_PARAM.findall(path)}
        for method, operation in path_item.items():
            where = f"{str(method).upper()} {path}"
            if method not in HTTP_METHODS:
                problems.append(f"{where}: unknown HTTP method")
                continue
            if not isinstance(operation, dict):
                problems.append(f"{where}: operation is not a mapping")
                continue
            if not operation.get("responses"):
                problems.append(f"{where}: no responses")
            for param in operation.get("parameters") or []:
                if not isinstance(param, dict) or param.get("in") != "path":
                    continue
                if param.get("name") not in declared:
                    problems.append(f"{where}: path parameter '{param.get('name')}' not in path")

    return problems


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run all validations on emitted files.

    Returns dict of {filename: error_message} for all files with errors.
    Runs syntax checks first, then structural checks on files that parsed.
    """
    errors = {}
    errors.update(validate_json(files))
    errors.update(validate_yaml(files))

    for filename, content in files.items():
        if filename in errors:
            continue
        if filename.endswith(".json"):
            document = json.loads(content)
        elif filename.endswith((".yaml", ".yml")):
            document = yaml.safe_load(content)
        else:
            continue
        problems = validate_openapi(document)
        if problems:
            errors[filename] = "\n".join(problems)

    return errors
