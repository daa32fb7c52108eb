"""Tests for the compiled tree models and their introspection helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from exprcalc.core.expression_lang import compile_program
from exprcalc.core.ir import (
    Call,
    Divide,
    Location,
    Minus,
    Negate,
    Node,
    NumberValue,
    Plus,
    Times,
    ValueAtom,
    VariableValue,
    iter_nodes,
)


def _num(x: float) -> Node:
    return Node(atom=ValueAtom(value=NumberValue(value=x)))


class TestLocation:
    def test_text(self) -> None:
        loc = Location(source="1 + 2", start=4, end=5)
        assert loc.text == "2"
        assert str(loc) == "4..5"

    def test_empty_range_allowed(self) -> None:
        assert Location(source="abc", start=3, end=3).text == ""

    def test_end_past_source_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Location(source="1", start=0, end=2)

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Location(source="1 + 2", start=3, end=1)

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Location(source="1", start=-1, end=1)

    def test_byte_range_counts_utf8(self) -> None:
        loc = Location(source="é + 1", start=4, end=5)
        assert loc.text == "1"
        assert loc.byte_range == (5, 6)


class TestAtomIntrospection:
    def test_value_atom(self) -> None:
        atom = ValueAtom(value=VariableValue(name="x"))
        assert atom.children == ()
        assert atom.label == "x"

    @pytest.mark.parametrize(
        ("cls", "label"),
        [
            (Plus, "operator +"),
            (Minus, "operator -"),
            (Times, "operator *"),
            (Divide, "operator /"),
        ],
    )
    def test_binary_atoms(self, cls, label) -> None:
        left, right = _num(1), _num(2)
        atom = cls(left=left, right=right)
        assert atom.children == (left, right)
        assert atom.label == label

    def test_negate(self) -> None:
        operand = _num(1)
        atom = Negate(operand=operand)
        assert atom.children == (operand,)
        assert atom.label == "operator unary -"

    def test_call_children_are_callee_then_arguments(self) -> None:
        callee = Node(atom=ValueAtom(value=VariableValue(name="f")))
        args = (_num(1), _num(2))
        atom = Call(callee=callee, arguments=args)
        assert atom.children == (callee, *args)
        assert atom.label == "function"

    def test_plus_and_minus_stay_distinct(self) -> None:
        left, right = _num(1), _num(2)
        node = Node(atom=Minus(left=left, right=right))
        assert isinstance(node.atom, Minus)
        assert Plus(left=left, right=right) != Minus(left=left, right=right)

    def test_nodes_are_frozen(self) -> None:
        node = _num(1)
        with pytest.raises(ValidationError):
            node.location = Location(source="1", start=0, end=1)  # type: ignore[misc]

    def test_str(self) -> None:
        node = Node(atom=Times(left=_num(2), right=Node(atom=Negate(operand=_num(3)))))
        assert str(node) == "(2.0 * -3.0)"


class TestTraversal:
    def test_iter_nodes_breadth_first(self) -> None:
        program = compile_program("1 + 2 * 3")
        labels = [node.atom.label for node in iter_nodes(program.root)]
        assert labels == ["operator +", "1.0", "operator *", "2.0", "3.0"]

    def test_program_iter_nodes_matches(self) -> None:
        program = compile_program("f(1, x)")
        assert list(program.iter_nodes()) == list(iter_nodes(program.root))
        assert len(list(program.iter_nodes())) == 4

    def test_node_text(self) -> None:
        program = compile_program("sin(1) * 10")
        texts = [node.text for node in program.iter_nodes()]
        assert texts == ["sin(1) * 10", "sin(1)", "10", "sin", "1"]
        assert _num(1).text is None

    def test_dump(self) -> None:
        program = compile_program("1 + x")
        assert program.dump() == "operator + [0..5]\n  1.0 [0..1]\n  x [4..5]"

    def test_dump_without_locations(self) -> None:
        from exprcalc.core.ir import CompiledProgram

        program = CompiledProgram(source="", root=Node(atom=Negate(operand=_num(1))))
        assert program.dump() == "operator unary -\n  1.0"
