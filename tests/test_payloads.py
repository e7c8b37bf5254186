"""Tests for cdplog/payloads.py"""

from cdplog.payloads import compact_json, is_truthy, native_id, try_parse_json

DEPTH = 100000


class TestTryParseJson:
    def test_valid(self):
        assert try_parse_json('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_malformed(self):
        assert try_parse_json("{nope") is None

    def test_not_a_string(self):
        assert try_parse_json(None) is None

    def test_deeply_nested_array(self):
        assert try_parse_json("[" * DEPTH + "]" * DEPTH) is None

    def test_deeply_nested_object(self):
        assert try_parse_json('{"a":' * DEPTH + "1" + "}" * DEPTH) is None


class TestIsTruthy:
    def test_empty_containers_are_present(self):
        assert is_truthy({})
        assert is_truthy([])

    def test_scalars(self):
        assert not is_truthy(0)
        assert not is_truthy("")
        assert not is_truthy(None)
        assert not is_truthy(False)
        assert is_truthy("x")


class TestNativeId:
    def test_int(self):
        assert native_id(5) == 5

    def test_digit_string(self):
        assert native_id("5") == 5

    def test_other_strings(self):
        assert native_id("-5") is None
        assert native_id("5a") is None
        assert native_id("") is None
        assert native_id("٥") is None

    def test_bool_and_float(self):
        assert native_id(True) is None
        assert native_id(1.0) is None


class TestCompactJson:
    def test_none(self):
        assert compact_json(None) == ""

    def test_compact_separators(self):
        assert compact_json({"a": [1, "é"]}) == '{"a":[1,"é"]}'

    def test_too_deep_to_encode(self):
        value = []
        for _ in range(DEPTH):
            value = [value]
        assert compact_json(value) == ""
