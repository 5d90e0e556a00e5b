import unittest

from toolguard.core.errors import MissingParametersError, MissingRequiredParameterError
from toolguard.core.tools.params import (
    CLAUDE_PARAM_GROUPS,
    RequiredParamGroup,
    as_param_record,
    assert_required_params,
    normalize_tool_params,
)


class NormalizeToolParamsTests(unittest.TestCase):
    def test_alias_only_keys_become_canonical(self) -> None:
        normalized = normalize_tool_params(
            {"file_path": "a.txt", "old_string": "before", "new_string": "after"}
        )

        self.assertEqual(normalized, {"path": "a.txt", "oldText": "before", "newText": "after"})

    def test_canonical_key_wins_and_alias_is_dropped(self) -> None:
        normalized = normalize_tool_params({"path": "keep.txt", "file_path": "drop.txt"})

        self.assertEqual(normalized, {"path": "keep.txt"})

    def test_unrelated_keys_are_preserved(self) -> None:
        normalized = normalize_tool_params({"file_path": "a.txt", "offset": 10, "limit": 5})

        self.assertEqual(normalized, {"path": "a.txt", "offset": 10, "limit": 5})

    def test_input_mapping_is_not_mutated(self) -> None:
        params = {"file_path": "a.txt"}

        normalize_tool_params(params)

        self.assertEqual(params, {"file_path": "a.txt"})

    def test_non_mapping_input_returns_none(self) -> None:
        for value in (None, "a.txt", ["path"], 42):
            with self.subTest(value=value):
                self.assertIsNone(normalize_tool_params(value))

    def test_as_param_record_falls_back_to_raw_mapping(self) -> None:
        self.assertEqual(as_param_record({"path": "x"}, None), {"path": "x"})
        self.assertIsNone(as_param_record("x", None))


class AssertRequiredParamsTests(unittest.TestCase):
    def test_missing_record_raises_missing_parameters(self) -> None:
        with self.assertRaises(MissingParametersError) as ctx:
            assert_required_params(None, CLAUDE_PARAM_GROUPS["read"], "read")

        self.assertEqual(str(ctx.exception), "Missing parameters for read")

    def test_alias_key_satisfies_group(self) -> None:
        assert_required_params({"file_path": "a.txt"}, CLAUDE_PARAM_GROUPS["read"], "read")

    def test_blank_value_is_rejected_with_group_label(self) -> None:
        with self.assertRaises(MissingRequiredParameterError) as ctx:
            assert_required_params({"path": "   "}, CLAUDE_PARAM_GROUPS["write"], "write")

        self.assertEqual(ctx.exception.label, "path (path or file_path)")
        self.assertEqual(str(ctx.exception), "Missing required parameter: path (path or file_path)")

    def test_non_string_value_is_rejected(self) -> None:
        with self.assertRaises(MissingRequiredParameterError):
            assert_required_params({"path": 12}, CLAUDE_PARAM_GROUPS["read"], "read")

    def test_first_unsatisfied_group_is_reported(self) -> None:
        with self.assertRaises(MissingRequiredParameterError) as ctx:
            assert_required_params({"path": "a.txt"}, CLAUDE_PARAM_GROUPS["edit"], "edit")

        self.assertEqual(ctx.exception.label, "oldText (oldText or old_string)")

    def test_allow_empty_accepts_empty_string(self) -> None:
        groups = (RequiredParamGroup(keys=("newText", "new_string"), allow_empty=True),)

        assert_required_params({"newText": ""}, groups, "edit")

    def test_label_defaults_to_joined_keys(self) -> None:
        groups = (RequiredParamGroup(keys=("content",)),)

        with self.assertRaises(MissingRequiredParameterError) as ctx:
            assert_required_params({}, groups, "write")

        self.assertEqual(ctx.exception.label, "content")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
