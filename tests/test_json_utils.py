import pytest

from src.llm.json_utils import EXCERPT_LIMIT, JSONExtractionError, extract_json, strip_fences


def test_plain_json():
    assert extract_json('{"a": 1}') == {"a": 1}


def test_fenced_json():
    assert extract_json('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}


def test_json_wrapped_in_prose():
    raw = 'Sure! Here is the result:\n{"sections": {"TITLE": "Stake"}}\nHope that helps.'
    assert extract_json(raw) == {"sections": {"TITLE": "Stake"}}


def test_array_wrapped_in_prose():
    assert extract_json('Questions: [{"order": 1}] done') == [{"order": 1}]


def test_unparseable_output_raises_with_bounded_excerpt():
    raw = "not json " * 100
    with pytest.raises(JSONExtractionError) as exc_info:
        extract_json(raw, "draft sections")
    err = exc_info.value
    assert err.label == "draft sections"
    assert err.excerpt == raw[:EXCERPT_LIMIT]
    assert len(err.excerpt) == 300
    assert "draft sections" in str(err)


def test_extraction_error_is_a_value_error():
    with pytest.raises(ValueError):
        extract_json("")


def test_strip_fences():
    assert strip_fences("```\n[1]\n```") == "[1]"
