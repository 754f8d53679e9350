"""
Unit tests for validation rule objects and the validation generator.
"""

import unittest

from schema_struct.pipeline.analyzer import NameResolver, TypeResolver
from schema_struct.pipeline.schema_ast import SchemaParser
from schema_struct.validation_rules import (
    ArrayTypeRule,
    EnumRule,
    ExclusiveMinimumRule,
    MinimumRule,
    NotNullRule,
    NumberTypeRule,
    ObjectTypeRule,
    RequiredRule,
)
from schema_struct.validator import ValidationGenerator


class TestValidationRules(unittest.TestCase):
    """Test the code rendered by each rule"""

    def test_object_type_rule(self):
        code = ObjectTypeRule("data", "Product").generate_code()
        self.assertEqual(len(code), 2)
        self.assertEqual(code[0], "if not isinstance(data, dict):")
        self.assertIn("raise runtime.ValidationError(", code[1])
        self.assertIn('"Product"', code[1])

    def test_required_rule(self):
        code = RequiredRule("data", "Product", "name").generate_code()
        self.assertEqual(code[0], 'if "name" not in data:')
        self.assertIn("missing required field 'name'", code[1])

    def test_minimum_rule(self):
        code = MinimumRule('data["price"]', "Product.price", 0).generate_code()
        self.assertEqual(code[0], 'if data["price"] < 0:')
        self.assertIn("must be >= 0", code[1])
        self.assertIn('"Product.price"', code[1])

    def test_exclusive_minimum_rule(self):
        code = ExclusiveMinimumRule("item0", "Order.weights[]", 0.5).generate_code()
        self.assertEqual(code[0], "if item0 <= 0.5:")
        self.assertIn("must be > 0.5", code[1])

    def test_enum_rule(self):
        code = EnumRule("value", "Color", ["red", "green"]).generate_code()
        self.assertEqual(code[0], 'if value not in ("red", "green",):')
        self.assertIn("must be one of 'red', 'green'", code[1])

    def test_number_type_rule(self):
        code = NumberTypeRule('data["age"]', "Person.age").generate_code()
        self.assertEqual(
            code[0], 'if not isinstance(data["age"], (int, float)) or isinstance(data["age"], bool):'
        )
        self.assertIn("expected a number", code[1])
        self.assertIn('"Person.age"', code[1])

    def test_array_type_rule(self):
        code = ArrayTypeRule("data", "Scores").generate_code()
        self.assertEqual(code[0], "if not isinstance(data, list):")
        self.assertIn("expected a JSON array", code[1])

    def test_array_type_rule_with_length(self):
        code = ArrayTypeRule("data", "Range", 2).generate_code()
        self.assertEqual(code[0], "if not isinstance(data, list) or len(data) != 2:")
        self.assertIn("expected a JSON array of 2 elements", code[1])

    def test_not_null_rule(self):
        code = NotNullRule('data["name"]', "Person.name").generate_code()
        self.assertEqual(code[0], 'if data["name"] is None:')
        self.assertIn("must not be null", code[1])

    def test_rules_compile(self):
        rules = [
            ObjectTypeRule("data", "A"),
            RequiredRule("data", "A", 'quote"key'),
            MinimumRule("x", "A.x", -1.5),
            NumberTypeRule("x", "A.x"),
            ArrayTypeRule("x", "A.x", 3),
            NotNullRule("x", "A.x"),
            EnumRule("value", "E", ["it's"]),
        ]
        for rule in rules:
            compile("\n".join(rule.generate_code()), "<rule>", "exec")


class TestValidationGenerator(unittest.TestCase):
    """Test the checks generated for whole types"""

    def _model(self, schema):
        model = TypeResolver().resolve(SchemaParser().parse(schema))
        NameResolver().resolve(model)
        return model

    def test_struct_validation(self):
        model = self._model(
            {
                "title": "Product",
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "price": {"type": "number", "minimum": 0},
                    "weights": {"type": "array", "items": {"type": "number", "exclusiveMinimum": 0}},
                },
                "required": ["name", "price"],
            }
        )
        lines = ValidationGenerator().generate_struct_validation(model.root)
        self.assertEqual(lines[0], "if not isinstance(data, dict):")
        self.assertIn('if "name" not in data:', lines)
        self.assertIn('if "price" not in data:', lines)
        self.assertNotIn('if "weights" not in data:', lines)
        self.assertIn('if data["price"] < 0:', lines)
        self.assertIn('if "weights" in data:', lines)
        self.assertIn('    if data["weights"] is not None:', lines)
        self.assertIn('        for item0 in data["weights"]:', lines)
        self.assertIn("            if item0 <= 0:", lines)

    def test_type_checks_guard_comparisons(self):
        model = self._model(
            {
                "title": "Product",
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "price": {"type": "number", "minimum": 0},
                    "weights": {"type": "array", "items": {"type": "number", "exclusiveMinimum": 0}},
                },
                "required": ["name", "price", "weights"],
            }
        )
        lines = ValidationGenerator().generate_struct_validation(model.root)
        number_check = 'if not isinstance(data["price"], (int, float)) or isinstance(data["price"], bool):'
        self.assertLess(lines.index(number_check), lines.index('if data["price"] < 0:'))
        array_check = 'if not isinstance(data["weights"], list):'
        self.assertLess(lines.index(array_check), lines.index('for item0 in data["weights"]:'))
        self.assertIn('if data["name"] is None:', lines)

    def test_enum_fields_are_checked_inline(self):
        model = self._model(
            {
                "title": "Order",
                "type": "object",
                "properties": {"status": {"enum": ["open", "closed"]}},
                "required": ["status"],
            }
        )
        lines = ValidationGenerator().generate_struct_validation(model.root)
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[4], 'if data["status"] not in ("open", "closed",):')

    def test_nested_structs_use_their_own_validator(self):
        model = self._model(
            {
                "title": "Order",
                "type": "object",
                "properties": {"customer": {"type": "object", "properties": {"id": {"type": "integer"}}}},
                "required": ["customer"],
            }
        )
        lines = ValidationGenerator().generate_struct_validation(model.root)
        self.assertEqual(lines[-1], 'OrderCustomer.validate_dict(data["customer"])')

    def test_enum_validation(self):
        model = self._model({"title": "Color", "enum": ["red"]})
        lines = ValidationGenerator().generate_enum_validation(model.root)
        self.assertEqual(lines[0], 'if value not in ("red",):')

    def test_alias_validation_through_tuple(self):
        model = self._model(
            {
                "title": "Range",
                "type": "array",
                "prefixItems": [{"type": "integer", "minimum": 0}, {"type": "integer", "minimum": 1}],
            }
        )
        lines = ValidationGenerator().generate_alias_validation(model.root)
        self.assertEqual(lines[0], "if not isinstance(data, list) or len(data) != 2:")
        self.assertIn("if data[0] < 0:", lines)
        self.assertIn("if data[1] < 1:", lines)
        self.assertLess(lines.index("if data[0] < 0:"), lines.index("if data[1] < 1:"))


if __name__ == "__main__":
    unittest.main()
