"""
Functional tests driven by the JSON test cases in test_data/functional.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from json_schema_to_ts.compiler import CompilerConfig, MappingSchemaLoader, compile_schema

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = TEST_DATA_DIR / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _generate_code(test_case):
    """Helper to compile a test case's schema with its config and documents."""
    config = CompilerConfig.from_dict(test_case.get("config", {}))
    loader = MappingSchemaLoader(test_case.get("documents", {}))
    return compile_schema(test_case["schema"], config=config, loader=loader)


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda tc: tc["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    generated_code = _generate_code(test_case)

    for pattern in test_case.get("expected_contains", []):
        assert pattern in generated_code, f"Expected pattern '{pattern}' not found in output ({test_case['_source_file']})"

    for pattern in test_case.get("expected_not_contains", []):
        assert pattern not in generated_code, f"Unexpected pattern '{pattern}' found in output ({test_case['_source_file']})"


if __name__ == "__main__":
    pytest.main([__file__])
