"""Tests for the AST serializer."""

import json

import pytest

from ast_benchmark import serializer
from ast_benchmark.errors import OutputError
from ast_benchmark.models import NodeKind, Program, StatementBlock, TokenKind, WhileStatement
from ast_benchmark.parsers import parse_source
from ast_benchmark.serializer import deserialize, from_json, serialize, to_json


SAMPLE_PROGRAM = """var x;
x = 0;
while (x < 10) {
    x = x + 1
};
if (x = 10) {
    var done;
    done = "yes"
} else {
    done = "no"
}"""


def chain_source(terms):
    """An assignment whose value is a right-nested chain of the given length."""
    return "x = " + " + ".join(str(i) for i in range(terms))


def nested_whiles(depth):
    """A program of loops nested the given number of levels deep."""
    return "while (a < 1) { " * depth + "a = 1" + " }" * depth


class TestSerializeShape:
    """Tests for the structured output contract."""

    def test_declaration(self):
        """Test the full structure of a one-statement program."""
        assert serialize(parse_source("var x")) == {
            "type": 0,
            "data": {
                "block": {
                    "type": 1,
                    "data": {
                        "statements": [
                            {"type": 2, "data": {"identifier": "x"}},
                        ]
                    },
                }
            },
        }

    def test_expression_with_token(self):
        """Test leftToken serialization and null optionals."""
        statement = serialize(parse_source("x = 1"))["data"]["block"]["data"]["statements"][0]

        assert statement == {
            "type": 5,
            "data": {
                "identifier": "x",
                "value": {
                    "type": 7,
                    "data": {
                        "leftToken": {"type": 17, "value": "1", "line": 1, "column": 5},
                        "operator": None,
                        "right": None,
                    },
                },
            },
        }

    def test_else_block_key(self):
        """Test the elseBlock spelling and null when absent."""
        with_else = serialize(parse_source("if (a > 1) { b = 1 } else { b = 2 }"))
        without_else = serialize(parse_source("if (a > 1) { b = 1 }"))

        if_with = with_else["data"]["block"]["data"]["statements"][0]
        if_without = without_else["data"]["block"]["data"]["statements"][0]

        assert if_with["type"] == NodeKind.IF_STATEMENT
        assert list(if_with["data"]) == ["condition", "block", "elseBlock"]
        assert if_with["data"]["elseBlock"]["type"] == NodeKind.STATEMENT_BLOCK
        assert if_without["data"]["elseBlock"] is None

    def test_condition_payload(self):
        """Test condition fields."""
        loop = serialize(parse_source("while (i < n) { i = i + 1 }"))["data"]["block"]["data"]["statements"][0]
        condition = loop["data"]["condition"]

        assert loop["type"] == 4
        assert condition["type"] == 6
        assert list(condition["data"]) == ["left", "operator", "right"]
        assert condition["data"]["operator"] == "<"
        assert condition["data"]["right"]["data"]["leftToken"]["value"] == "n"

    def test_codes_are_plain_integers(self):
        """Test kind codes serialize as ints, not enum members or names."""
        data = serialize(parse_source('s = "t"'))
        token = data["data"]["block"]["data"]["statements"][0]["data"]["value"]["data"]["leftToken"]

        assert type(data["type"]) is int
        assert type(token["type"]) is int
        assert token["type"] == TokenKind.STRING

    def test_nested_right_operand(self):
        """Test right-associative chains nest under 'right'."""
        value = serialize(parse_source("x = 1 + 2 * 3"))["data"]["block"]["data"]["statements"][0]["data"]["value"]

        assert value["data"]["operator"] == "+"
        assert value["data"]["right"]["data"]["operator"] == "*"
        assert value["data"]["right"]["data"]["right"]["data"]["leftToken"]["value"] == "3"


class TestJsonOutput:
    """Tests for JSON text rendering."""

    def test_deterministic(self):
        """Test the same input always yields the same output."""
        outputs = {to_json(parse_source(SAMPLE_PROGRAM)) for _ in range(5)}
        assert len(outputs) == 1

    def test_valid_json(self):
        """Test rendered text parses back to the structured form."""
        program = parse_source(SAMPLE_PROGRAM)
        assert json.loads(to_json(program)) == serialize(program)

    def test_compact_output(self):
        """Test indent=None gives a single line."""
        assert "\n" not in to_json(parse_source(SAMPLE_PROGRAM), indent=None)

    def test_serialize_subtree(self):
        """Test any node can be serialized on its own."""
        block = parse_source("var a").block
        assert to_json(block, indent=None) == '{"type": 1, "data": {"statements": [{"type": 2, "data": {"identifier": "a"}}]}}'


class TestDeserialize:
    """Tests for loading structured output back into nodes."""

    def test_round_trip(self):
        """Test deserialize inverts serialize."""
        program = parse_source(SAMPLE_PROGRAM)
        restored = deserialize(serialize(program))

        assert isinstance(restored, Program)
        assert restored == program

    def test_from_json(self):
        """Test loading from JSON text."""
        program = parse_source("if (a > 1) { b = \"x\" - c }")
        assert from_json(to_json(program)) == program

    def test_subtree(self):
        """Test a non-root node."""
        restored = deserialize({"type": 1, "data": {"statements": [{"type": 2, "data": {"identifier": "q"}}]}})

        assert isinstance(restored, StatementBlock)
        assert restored.statements[0].identifier == "q"

    def test_statement_variant_chosen_by_type(self):
        """Test statement variants are picked by type code."""
        data = {
            "type": 1,
            "data": {
                "statements": [
                    {
                        "type": 5,
                        "data": {
                            "identifier": "x",
                            "value": {
                                "type": 7,
                                "data": {
                                    "leftToken": {"type": 19, "value": "y", "line": 1, "column": 5},
                                    "operator": None,
                                    "right": None,
                                },
                            },
                        },
                    }
                ]
            },
        }
        block = deserialize(data)
        assert type(block.statements[0]).__name__ == "AssignmentStatement"

    @pytest.mark.parametrize("data", [
        {"type": 99, "data": {}},
        {"data": {}},
        {"type": 2, "data": {}},
        {"type": 1, "data": {"statements": []}},
        "not a node",
    ])
    def test_invalid_input(self, data):
        """Test malformed structures are rejected."""
        with pytest.raises(ValueError):
            deserialize(data)


class TestDeepTrees:
    """Tests for long expression chains and deep nesting."""

    def test_long_chain_serializes(self):
        """Test a 500-term chain nests under 'right' all the way down."""
        program = parse_source(chain_source(500))
        value = serialize(program)["data"]["block"]["data"]["statements"][0]["data"]["value"]

        depth = 0
        while value is not None:
            assert value["type"] == NodeKind.EXPRESSION
            last = value
            value = value["data"]["right"]
            depth += 1
        assert depth == 500
        assert last["data"]["leftToken"]["value"] == "499"
        assert last["data"]["operator"] is None

    def test_long_chain_round_trip(self):
        """Test a 500-term chain survives serialize and deserialize."""
        program = parse_source(chain_source(500))
        original = program.block.statements[0].value
        restored = deserialize(serialize(program)).block.statements[0].value

        while original is not None:
            assert restored.left_token == original.left_token
            assert restored.operator == original.operator
            original, restored = original.right, restored.right
        assert restored is None

    def test_long_chain_json(self):
        """Test a 200-term chain renders as JSON and loads back."""
        program = parse_source(chain_source(200))
        restored = from_json(to_json(program))

        assert to_json(restored, indent=None) == to_json(program, indent=None)

    def test_nested_whiles_serialize(self):
        """Test 100 nested loops serialize one level per loop."""
        data = serialize(parse_source(nested_whiles(100)))

        statement = data["data"]["block"]["data"]["statements"][0]
        depth = 0
        while statement["type"] == NodeKind.WHILE_STATEMENT:
            statement = statement["data"]["block"]["data"]["statements"][0]
            depth += 1
        assert depth == 100
        assert statement["type"] == NodeKind.ASSIGNMENT_STATEMENT

    def test_nested_whiles_round_trip(self):
        """Test 100 nested loops survive a JSON round trip."""
        program = parse_source(nested_whiles(100))
        text = to_json(program)
        restored = from_json(text)

        assert isinstance(restored.block.statements[0], WhileStatement)
        assert to_json(restored) == text

    def test_encoder_depth_limit_is_an_output_error(self, monkeypatch):
        """Test running out of stack while encoding raises OutputError."""
        def exhausted(*args, **kwargs):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(serializer.json, "dumps", exhausted)

        with pytest.raises(OutputError, match="PROGRAM tree is nested too deeply"):
            to_json(parse_source("var a"))
