from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput

from element import Element
from intbase import ErrorType, InterpreterBase, InterpreterError

GRAMMAR = r"""
    program: statement*

    ?statement: let_stmt
              | func_decl
              | if_stmt
              | while_stmt
              | block
              | return_stmt
              | print_stmt
              | expr_stmt

    let_stmt: "let" NAME ["=" expr] ";"
    func_decl: "function" NAME "(" [params] ")" block
    params: NAME ("," NAME)*
    if_stmt: "if" "(" expr ")" statement ["else" statement]
    while_stmt: "while" "(" expr ")" statement
    block: "{" statement* "}"
    return_stmt: "return" [expr] ";"
    print_stmt: "print" expr ";"
    expr_stmt: expr ";"

    ?expr: assignment

    ?assignment: NAME "=" assignment -> assign
               | logic_or

    ?logic_or: logic_or "||" logic_and -> or_op
             | logic_and

    ?logic_and: logic_and "&&" equality -> and_op
              | equality

    ?equality: equality "==" comparison -> eq
             | equality "!=" comparison -> ne
             | comparison

    ?comparison: comparison "<" term -> lt
               | comparison "<=" term -> le
               | comparison ">" term -> gt
               | comparison ">=" term -> ge
               | term

    ?term: term "+" factor -> add
         | term "-" factor -> sub
         | factor

    ?factor: factor "*" unary -> mul
           | factor "/" unary -> div
           | unary

    ?unary: "!" unary -> not_op
          | "-" unary -> neg
          | call

    ?call: call "(" [args] ")" -> fcall
         | atom

    args: expr ("," expr)*

    ?atom: NUMBER -> number
         | STRING -> string
         | "true" -> true
         | "false" -> false
         | "null" -> null
         | NAME -> var
         | "function" "(" [params] ")" block -> lambda_expr
         | "(" expr ")"

    NAME: /[A-Za-z_$][A-Za-z0-9_$]*/
    NUMBER: /\d+(\.\d+)?/
    STRING: /"[^"\n]*"/ | /'[^'\n]*'/
    COMMENT: /\/\/[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


def _element(elem_type, meta, **fields):
    node = Element(elem_type, getattr(meta, "line", None))
    node.dict.update(fields)
    return node


def _binary(op):
    def build(self, meta, children):
        return _element(op, meta, op1=children[0], op2=children[1])

    return build


# turns the lark parse tree into Element nodes, bottom-up
@v_args(meta=True)
class ElementBuilder(Transformer):
    def program(self, meta, children):
        return _element(InterpreterBase.PROGRAM_DEF, meta, statements=children)

    def let_stmt(self, meta, children):
        name, expression = children
        return _element(
            InterpreterBase.LET_DEF, meta, name=str(name), expression=expression
        )

    def func_decl(self, meta, children):
        name, params, body = children
        return _element(
            InterpreterBase.FUNC_DEF,
            meta,
            name=str(name),
            args=params or [],
            statements=body.get("statements"),
        )

    def params(self, meta, children):
        return [str(name) for name in children]

    def if_stmt(self, meta, children):
        condition, statement, else_statement = children
        return _element(
            InterpreterBase.IF_DEF,
            meta,
            condition=condition,
            statement=statement,
            else_statement=else_statement,
        )

    def while_stmt(self, meta, children):
        condition, statement = children
        return _element(
            InterpreterBase.WHILE_DEF, meta, condition=condition, statement=statement
        )

    def block(self, meta, children):
        return _element(InterpreterBase.BLOCK_DEF, meta, statements=children)

    def return_stmt(self, meta, children):
        return _element(InterpreterBase.RETURN_DEF, meta, expression=children[0])

    def print_stmt(self, meta, children):
        return _element(InterpreterBase.PRINT_DEF, meta, expression=children[0])

    def expr_stmt(self, meta, children):
        return _element(InterpreterBase.EXPR_DEF, meta, expression=children[0])

    def assign(self, meta, children):
        name, expression = children
        return _element(
            InterpreterBase.ASSIGN_DEF, meta, name=str(name), expression=expression
        )

    or_op = _binary("||")
    and_op = _binary("&&")
    eq = _binary("==")
    ne = _binary("!=")
    lt = _binary("<")
    le = _binary("<=")
    gt = _binary(">")
    ge = _binary(">=")
    add = _binary("+")
    sub = _binary("-")
    mul = _binary("*")
    div = _binary("/")

    def not_op(self, meta, children):
        return _element("!", meta, op1=children[0])

    def neg(self, meta, children):
        return _element("neg", meta, op1=children[0])

    def fcall(self, meta, children):
        callee, args = children
        return _element(
            InterpreterBase.FCALL_DEF, meta, callee=callee, args=args or []
        )

    def args(self, meta, children):
        return list(children)

    def number(self, meta, children):
        return _element(InterpreterBase.NUMBER_DEF, meta, val=float(children[0]))

    def string(self, meta, children):
        return _element(InterpreterBase.STRING_DEF, meta, val=str(children[0])[1:-1])

    def true(self, meta, children):
        return _element(InterpreterBase.BOOL_DEF, meta, val=True)

    def false(self, meta, children):
        return _element(InterpreterBase.BOOL_DEF, meta, val=False)

    def null(self, meta, children):
        return _element(InterpreterBase.NIL_DEF, meta)

    def var(self, meta, children):
        return _element(InterpreterBase.VAR_DEF, meta, name=str(children[0]))

    def lambda_expr(self, meta, children):
        params, body = children
        return _element(
            InterpreterBase.LAMBDA_DEF,
            meta,
            name=None,
            args=params or [],
            statements=body.get("statements"),
        )


_parser = Lark(GRAMMAR, start="program", parser="lalr", propagate_positions=True)


# parses program text into a program Element whose "statements" field holds the
# top-level statements
def parse_program(program):
    try:
        tree = _parser.parse(program)
    except UnexpectedInput as e:
        line = e.line if isinstance(e.line, int) and e.line > 0 else None
        raise InterpreterError(
            ErrorType.SYNTAX_ERROR,
            f"Unexpected input at column {e.column}",
            line,
        ) from e
    return ElementBuilder().transform(tree)
