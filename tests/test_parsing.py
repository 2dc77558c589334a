"""Tests for model output parsing."""

import json

import pytest

from agents.parsing import load_json, parse_payload, strip_code_fence
from contracts import PrerequisiteSet, ProjectIdeaList
from errors import ParseError

from conftest import prerequisite_json, project_json


class TestStripCodeFence:
    """Test strip_code_fence."""

    def test_plain_text_untouched(self):
        assert strip_code_fence('[{"a": 1}]') == '[{"a": 1}]'

    def test_json_fence(self):
        assert strip_code_fence('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace(self):
        assert strip_code_fence('  \n```json\n{"a": 1}\n```\n ') == '{"a": 1}'

    def test_idempotent(self):
        once = strip_code_fence('```json\n{"a": 1}\n```')
        assert strip_code_fence(once) == once

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"nested": {"list": ["x", "```"]}}, "text"])
    def test_fenced_payload_decodes_identically(self, payload):
        text = json.dumps(payload, indent=2)
        assert json.loads(strip_code_fence(f"```json\n{text}\n```")) == payload


class TestLoadJson:
    """Test load_json."""

    def test_invalid_json(self):
        with pytest.raises(ParseError) as exc:
            load_json("Sure! Here are some projects.")
        assert exc.value.raw_text == "Sure! Here are some projects."

    def test_fenced(self):
        assert load_json('```json\n{"ok": true}\n```') == {"ok": True}


class TestParsePayload:
    """Test parse_payload against the output contracts."""

    def test_projects(self):
        projects = parse_payload(project_json(3), ProjectIdeaList)
        assert [p.title for p in projects] == ["Project 1", "Project 2", "Project 3"]

    def test_prerequisites(self):
        prereqs = parse_payload(prerequisite_json(), PrerequisiteSet)
        assert prereqs.prerequisites[0].category == "Core Concepts"

    def test_shape_mismatch(self):
        with pytest.raises(ParseError, match="expected shape"):
            parse_payload('[{"title": "No steps"}]', ProjectIdeaList)
