import pytest

from intbase import ErrorType, InterpreterBase, InterpreterError
from jsparse import parse_program


def test_function_declaration():
    program = parse_program("function add(a, b) { return a + b; }")
    func = program.get("statements")[0]
    assert func.elem_type == InterpreterBase.FUNC_DEF
    assert func.get("name") == "add"
    assert func.get("args") == ["a", "b"]
    ret = func.get("statements")[0]
    assert ret.elem_type == InterpreterBase.RETURN_DEF
    assert ret.get("expression").elem_type == "+"


def test_precedence():
    expr = parse_program("1 + 2 * 3;").get("statements")[0].get("expression")
    assert expr.elem_type == "+"
    assert expr.get("op1").get("val") == 1.0
    assert expr.get("op2").elem_type == "*"


def test_call_on_call_result():
    expr = parse_program("make()(1, 2);").get("statements")[0].get("expression")
    assert expr.elem_type == InterpreterBase.FCALL_DEF
    assert len(expr.get("args")) == 2
    inner = expr.get("callee")
    assert inner.elem_type == InterpreterBase.FCALL_DEF
    assert inner.get("callee").get("name") == "make"
    assert inner.get("args") == []


def test_anonymous_function_expression():
    let = parse_program("let f = function(x) { print x; };").get("statements")[0]
    assert let.elem_type == InterpreterBase.LET_DEF
    lam = let.get("expression")
    assert lam.elem_type == InterpreterBase.LAMBDA_DEF
    assert lam.get("name") is None
    assert lam.get("args") == ["x"]


def test_keyword_prefix_is_identifier():
    let = parse_program("let letter = 1;").get("statements")[0]
    assert let.get("name") == "letter"


def test_line_numbers():
    program = parse_program("let a = 1;\n\nprint a;")
    assert [s.line_num for s in program.get("statements")] == [1, 3]


def test_element_str_is_readable():
    text = str(parse_program("print 1;"))
    assert text.splitlines()[0] == "program"
    assert "print" in text


@pytest.mark.parametrize("source", ["let = 1;", "print 1", "function () {}", "x = ;", "let s = \"open;"])
def test_syntax_errors(source):
    with pytest.raises(InterpreterError) as excinfo:
        parse_program(source)
    assert excinfo.value.error_type == ErrorType.SYNTAX_ERROR
