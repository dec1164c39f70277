import unittest

from varschema import validator, MISSING, VariableScope
from varschema.errors import RequiredError, SchemaError, TypeMismatch, ValidationError
from tests._util import check


class RequiredTests(unittest.TestCase):
    def test_absent_value_passes_when_not_required(self):
        for stype in validator.registered_types():
            with self.subTest(type=stype):
                self.assertTrue(check({"type": stype, "required": False}))
                self.assertTrue(check({"type": stype}))  # default is False

    def test_absent_value_raises_when_required(self):
        for stype in validator.registered_types():
            with self.subTest(type=stype):
                with self.assertRaises(RequiredError):
                    check({"type": stype, "required": True})

    def test_absent_value_skips_type_specific_checks(self):
        # a malformed match list is never looked at when nothing is there
        schema = {"type": "number", "match": [1, {"min": 2}]}
        self.assertTrue(check(schema))

    def test_none_is_not_absent(self):
        with self.assertRaises(TypeMismatch):
            check({"type": "string", "required": True}, None)
        self.assertTrue(check({"type": "null", "required": True}, None))

    def test_required_from_variable(self):
        schema = {"type": "string", "required": "$needed", "use$": True}
        with self.assertRaises(RequiredError):
            check(schema, needed=True)
        self.assertTrue(check(schema, needed=False))

    def test_required_must_resolve_to_boolean(self):
        with self.assertRaises(SchemaError):
            check({"type": "string", "required": "yes"})
        with self.assertRaises(SchemaError):
            check({"type": "string", "required": "$n", "use$": True}, n=1)

    def test_required_reference_without_use_flag_is_literal(self):
        with self.assertRaises(SchemaError):
            check({"type": "string", "required": "$needed"}, needed=True)


class TypeTests(unittest.TestCase):
    def test_array_type(self):
        with self.assertRaises(TypeMismatch):
            check({"type": "array"}, 0)
        self.assertTrue(check({"type": "array"}, []))

    def test_type_mismatch_is_also_a_type_error(self):
        with self.assertRaises(TypeError):
            check({"type": "string"}, 1)

    def test_kinds(self):
        accepted = {
            "any": [0, "", None, [], {}],
            "null": [None],
            "function": [len, lambda: None],
            "boolean": [True, False],
            "integer": [0, -3, 2.0],
            "number": [0, 1.5, float("inf")],
            "string": ["", "abc"],
            "array": [[], (1, 2)],
            "object": [{}, {"a": 1}],
        }
        rejected = {
            "null": [0, "", False],
            "function": ["len", 1],
            "boolean": [0, 1, "true"],
            "integer": [1.5, float("inf"), float("nan"), True, "1"],
            "number": [True, "1", None],
            "string": [1, None, ["a"]],
            "array": ["abc", {}, 0],
            "object": [[], "a", None],
        }
        for stype, values in accepted.items():
            for value in values:
                with self.subTest(type=stype, value=value):
                    self.assertTrue(check({"type": stype}, value))
        for stype, values in rejected.items():
            for value in values:
                with self.subTest(type=stype, value=value):
                    with self.assertRaises(TypeMismatch):
                        check({"type": stype}, value)


class DispatchTests(unittest.TestCase):
    def test_unknown_type_is_schema_error(self):
        with self.assertRaisesRegex(SchemaError, "unknown schema type 'date'"):
            check({"type": "date"}, "2025-01-01")
        with self.assertRaises(SchemaError):
            check({}, 1)

    def test_non_mapping_schema_is_schema_error(self):
        with self.assertRaises(SchemaError):
            validator.validate(["string"], "a")

    def test_schema_error_is_not_a_validation_error(self):
        with self.assertRaises(SchemaError) as ctx:
            check({"type": "nope"}, 1)
        self.assertNotIsInstance(ctx.exception, ValidationError)

    def test_validate_creates_isolated_scope(self):
        schema = {"type": "number", "$": "n"}
        self.assertTrue(validator.validate(schema, 1))
        scope = VariableScope()
        validator.validate(schema, 2, scope)
        self.assertEqual(scope, {"$n": 2})

    def test_default_value_is_missing(self):
        self.assertTrue(validator.validate({"type": "string"}))
        self.assertIs(MISSING, MISSING.__class__())


class ErrorDetailTests(unittest.TestCase):
    def test_target_name_defaults_to_rendered_value(self):
        with self.assertRaisesRegex(TypeMismatch, r"^\[1,2\]: expected string, got list$"):
            check({"type": "string"}, [1, 2])

    def test_explicit_target_name(self):
        with self.assertRaises(TypeMismatch) as ctx:
            validator.validate({"type": "string"}, 3, target_name="root.count")
        err = ctx.exception
        self.assertEqual(str(err), "root.count: expected string, got int")
        self.assertEqual(err.target_name, "root.count")
        self.assertEqual(err.target_value, 3)
        self.assertEqual(err.constraint, "type")
        self.assertEqual(err.expected, "string")
        self.assertEqual(err.schema, {"type": "string"})
        self.assertEqual(err.schema_json, '{"type":"string"}')

    def test_self_containing_value(self):
        looped = []
        looped.append(looped)
        self.assertTrue(validator.validate({"type": "array"}, looped))
        with self.assertRaises(TypeMismatch) as ctx:
            validator.validate({"type": "string"}, looped)
        self.assertIsInstance(ctx.exception.target_name, str)
        self.assertEqual(str(ctx.exception), '["<cycle>"]: expected string, got list')

    def test_element_names_of_self_containing_value(self):
        looped = {"n": 1}
        looped["self"] = looped
        schema = {"type": "object", "match": {"n": {"type": "string"}}}
        with self.assertRaises(TypeMismatch) as ctx:
            validator.validate(schema, looped)
        self.assertEqual(ctx.exception.target_name, '{"n":1,"self":"<cycle>"}.n')

    def test_required_error_details(self):
        with self.assertRaises(RequiredError) as ctx:
            validator.validate({"type": "integer", "required": True}, target_name="age")
        self.assertEqual(ctx.exception.constraint, "required")
        self.assertIs(ctx.exception.target_value, MISSING)


class BindingTests(unittest.TestCase):
    def test_binding_is_normalised_with_sigil(self):
        for name in ("x", "$x"):
            with self.subTest(name=name):
                scope = VariableScope()
                validator.validate({"type": "string", "$": name}, "v", scope)
                self.assertEqual(scope, {"$x": "v"})

    def test_failed_node_does_not_bind(self):
        scope = VariableScope()
        with self.assertRaises(ValidationError):
            validator.validate({"type": "number", "match": 1, "$": "x"}, 2, scope)
        self.assertEqual(scope, {})

    def test_absent_value_does_not_bind(self):
        scope = VariableScope()
        validator.validate({"type": "number", "$": "x"}, MISSING, scope)
        self.assertNotIn("$x", scope)

    def test_every_type_binds(self):
        values = {"any": 1, "null": None, "function": len, "boolean": True, "integer": 2,
                  "number": 2.5, "string": "s", "array": [1], "object": {"a": 1}}
        for stype, value in values.items():
            with self.subTest(type=stype):
                scope = VariableScope()
                validator.validate({"type": stype, "$": "v"}, value, scope)
                self.assertIs(scope["$v"], value)

    def test_last_write_wins(self):
        scope = VariableScope()
        schema = {"type": "array", "match": [{"type": "number", "$": "x"},
                                             {"type": "number", "$": "x"}]}
        validator.validate(schema, [1, 2], scope)
        self.assertEqual(scope["$x"], 2)

    def test_invalid_binding_name(self):
        for name in ("", 3, True):
            with self.subTest(name=name):
                with self.assertRaises(SchemaError):
                    check({"type": "string", "$": name}, "a")

    def test_later_sibling_reads_earlier_binding(self):
        schema = {
            "type": "array",
            "match": [
                {"type": "number", "$": "x"},
                {"type": "number", "match": "$x", "use$": True},
            ],
        }
        self.assertTrue(check(schema, [4, 4]))
        with self.assertRaises(ValidationError):
            check(schema, [4, 5])

    def test_reference_to_later_sibling_is_unbound(self):
        schema = {
            "type": "array",
            "match": [
                {"type": "number", "match": "$x", "use$": True},
                {"type": "number", "$": "x"},
            ],
        }
        with self.assertRaisesRegex(SchemaError, r"variable '\$x' is not bound"):
            check(schema, [4, 4])


if __name__ == "__main__":
    unittest.main()
