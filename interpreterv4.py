import sys

from env_v4 import Scope
from functionv4 import NATIVES, Closure, Function, NativeFunction
from intbase import ErrorType, InterpreterBase, InterpreterError
from jsparse import parse_program
from type_valuev4 import Type, Value, create_value, get_printable, is_truthy


# Main interpreter class
class Interpreter(InterpreterBase):
    # constants
    NIL_VALUE = create_value(None)
    BIN_OPS = {"+", "-", "*", "/", "==", "!=", "<", "<=", ">", ">="}
    LOGIC_OPS = {"&&", "||"}
    UN_OPS = {"!", "neg"}
    MAX_CALL_DEPTH = 500
    # python frames used per language-level call, with room for nested expressions
    FRAMES_PER_CALL = 16

    # methods
    def __init__(self, console_output=True, trace_output=False):
        super().__init__(console_output)
        self.trace_output = trace_output
        self.globals = None
        self.call_depth = 0
        frames = Interpreter.MAX_CALL_DEPTH * Interpreter.FRAMES_PER_CALL
        if sys.getrecursionlimit() < frames:
            sys.setrecursionlimit(frames)
        self.__setup_ops()

    # run a program that's provided in a string, in a fresh global scope
    def run(self, program):
        self.reset()
        self.globals = self.__new_globals()
        self.__run_program(program)

    # run a piece of program text in the global scope left by earlier calls; used by the repl
    def run_line(self, line):
        if self.globals is None:
            self.globals = self.__new_globals()
        self.__run_program(line)

    def __run_program(self, program):
        try:
            ast = parse_program(program)
        except InterpreterError as e:
            super().error(e.error_type, e.description, e.line_num)
        self.__run_statements(ast.get("statements"), self.globals)

    def __new_globals(self):
        env = Scope()
        for native in NATIVES:
            env.declare(native.name(), Value(Type.FUNCTION, native))
        return env

    # runs statements in order. returns the Value of a return statement, or None when
    # the statements run to the end without returning
    def __run_statements(self, statements, env):
        for statement in statements:
            if self.trace_output:
                print(statement)
            val = self.__run_statement(statement, env)
            if val is not None:
                return val
        return None

    def __run_statement(self, statement, env):
        kind = statement.elem_type
        if kind == InterpreterBase.LET_DEF:
            self.__declare(statement, env)
        elif kind == InterpreterBase.FUNC_DEF:
            closure = self.__make_closure(statement, env)
            env.declare(statement.get("name"), Value(Type.FUNCTION, closure))
        elif kind == InterpreterBase.PRINT_DEF:
            result = self.__eval_expr(statement.get("expression"), env)
            super().output(get_printable(result))
        elif kind == InterpreterBase.EXPR_DEF:
            self.__eval_expr(statement.get("expression"), env)
        elif kind == InterpreterBase.IF_DEF:
            return self.__handle_if(statement, env)
        elif kind == InterpreterBase.WHILE_DEF:
            return self.__handle_while(statement, env)
        elif kind == InterpreterBase.BLOCK_DEF:
            return self.__run_statements(statement.get("statements"), env.child())
        elif kind == InterpreterBase.RETURN_DEF:
            expr = statement.get("expression")
            if expr is None:
                return Interpreter.NIL_VALUE
            return self.__eval_expr(expr, env)
        return None

    def __declare(self, let_ast, env):
        var_name = let_ast.get("name")
        expr = let_ast.get("expression")
        if expr is None:
            value_obj = Interpreter.NIL_VALUE
        else:
            value_obj = self.__eval_bound_expr(expr, var_name, env)
        env.declare(var_name, value_obj)

    def __assign(self, assign_ast, env):
        var_name = assign_ast.get("name")
        slot = self.__resolve(assign_ast, env)
        value_obj = self.__eval_bound_expr(assign_ast.get("expression"), var_name, env)
        slot.write(value_obj)
        return value_obj

    # a function literal written directly as the value of a let or an assignment is
    # named after the variable when it is created; existing closures are never renamed
    def __eval_bound_expr(self, expr_ast, var_name, env):
        if expr_ast.elem_type == InterpreterBase.LAMBDA_DEF:
            return Value(Type.FUNCTION, self.__make_closure(expr_ast, env, var_name))
        return self.__eval_expr(expr_ast, env)

    # finds the slot the variable refers to, failing right away when no enclosing scope declares it
    def __resolve(self, node, env):
        var_name = node.get("name")
        slot = env.resolve(var_name)
        if slot is None:
            super().error(
                ErrorType.NAME_ERROR, f"Variable {var_name} not found", node.line_num
            )
        return slot

    def __make_closure(self, func_ast, env, name=None):
        func = Function(
            func_ast.get("name"), func_ast.get("args"), func_ast.get("statements")
        )
        return Closure(func, env, name)

    def __eval_expr(self, expr_ast, env):
        kind = expr_ast.elem_type
        if kind == InterpreterBase.NUMBER_DEF:
            return Value(Type.NUMBER, expr_ast.get("val"))
        if kind == InterpreterBase.STRING_DEF:
            return Value(Type.STRING, expr_ast.get("val"))
        if kind == InterpreterBase.BOOL_DEF:
            return Value(Type.BOOL, expr_ast.get("val"))
        if kind == InterpreterBase.NIL_DEF:
            return Interpreter.NIL_VALUE
        if kind == InterpreterBase.VAR_DEF:
            return self.__resolve(expr_ast, env).read()
        if kind == InterpreterBase.ASSIGN_DEF:
            return self.__assign(expr_ast, env)
        if kind == InterpreterBase.LAMBDA_DEF:
            return Value(Type.FUNCTION, self.__make_closure(expr_ast, env))
        if kind == InterpreterBase.FCALL_DEF:
            return self.__call_func(expr_ast, env)
        if kind in Interpreter.LOGIC_OPS:
            return self.__eval_logic(expr_ast, env)
        if kind in Interpreter.BIN_OPS or kind in Interpreter.UN_OPS:
            return self.__eval_op(expr_ast, env)
        super().error(
            ErrorType.SYNTAX_ERROR, f"Unknown expression {kind}", expr_ast.line_num
        )

    def __call_func(self, call_ast, env):
        callee = self.__eval_expr(call_ast.get("callee"), env)
        if callee.type() != Type.FUNCTION:
            super().error(
                ErrorType.TYPE_ERROR,
                f"Can only call functions, got {get_printable(callee)}",
                call_ast.line_num,
            )
        func = callee.value()
        args = [self.__eval_expr(arg, env) for arg in call_ast.get("args")]
        if func.arity() != len(args):
            super().error(
                ErrorType.TYPE_ERROR,
                f"{func} expected {func.arity()} arguments but got {len(args)}",
                call_ast.line_num,
            )
        if isinstance(func, NativeFunction):
            return func.call(args)
        if self.call_depth >= Interpreter.MAX_CALL_DEPTH:
            super().error(
                ErrorType.FAULT_ERROR, "Maximum call depth exceeded", call_ast.line_num
            )
        self.call_depth += 1
        try:
            return self.__call_closure(func, args)
        except RecursionError:
            super().error(
                ErrorType.FAULT_ERROR, "Maximum call depth exceeded", call_ast.line_num
            )
        finally:
            self.call_depth -= 1

    # each call gets a fresh scope whose parent is the scope the closure captured,
    # not the caller's scope
    def __call_closure(self, closure, args):
        env = Scope(closure.lenv())
        for arg_name, value_obj in zip(closure.args(), args):
            env.declare(arg_name, value_obj)
        val = self.__run_statements(closure.stats(), env)
        if val is None:
            return Interpreter.NIL_VALUE
        return val

    # && and || only evaluate the right side when needed, and yield the deciding operand
    def __eval_logic(self, logic_ast, env):
        left_value_obj = self.__eval_expr(logic_ast.get("op1"), env)
        if is_truthy(left_value_obj) == (logic_ast.elem_type == "||"):
            return left_value_obj
        return self.__eval_expr(logic_ast.get("op2"), env)

    def __eval_op(self, arith_ast, env):
        left_value_obj = self.__eval_expr(arith_ast.get("op1"), env)
        if arith_ast.elem_type == "!":
            return Value(Type.BOOL, not is_truthy(left_value_obj))
        if arith_ast.elem_type not in self.op_to_lambda[left_value_obj.type()]:
            super().error(
                ErrorType.TYPE_ERROR,
                f"Incompatible operator {arith_ast.elem_type} for type {left_value_obj.type()}",
                arith_ast.line_num,
            )
        f = self.op_to_lambda[left_value_obj.type()][arith_ast.elem_type]
        if arith_ast.elem_type in Interpreter.UN_OPS:
            return f(left_value_obj)
        right_value_obj = self.__eval_expr(arith_ast.get("op2"), env)
        if left_value_obj.type() != right_value_obj.type():
            if arith_ast.elem_type == "==":
                return Value(Type.BOOL, False)
            elif arith_ast.elem_type == "!=":
                return Value(Type.BOOL, True)
            super().error(
                ErrorType.TYPE_ERROR,
                f"Incompatible types for {arith_ast.elem_type} operation",
                arith_ast.line_num,
            )
        if arith_ast.elem_type == "/" and right_value_obj.value() == 0:
            super().error(ErrorType.FAULT_ERROR, "Division by zero", arith_ast.line_num)
        return f(left_value_obj, right_value_obj)

    def __setup_ops(self):
        self.op_to_lambda = {}
        # set up operations on numbers
        self.op_to_lambda[Type.NUMBER] = {}
        self.op_to_lambda[Type.NUMBER]["+"] = lambda x, y: Value(x.type(), x.value() + y.value())
        self.op_to_lambda[Type.NUMBER]["-"] = lambda x, y: Value(x.type(), x.value() - y.value())
        self.op_to_lambda[Type.NUMBER]["*"] = lambda x, y: Value(x.type(), x.value() * y.value())
        self.op_to_lambda[Type.NUMBER]["/"] = lambda x, y: Value(x.type(), x.value() / y.value())
        self.op_to_lambda[Type.NUMBER]["=="] = lambda x, y: Value(Type.BOOL, x.value() == y.value())
        self.op_to_lambda[Type.NUMBER]["!="] = lambda x, y: Value(Type.BOOL, x.value() != y.value())
        self.op_to_lambda[Type.NUMBER]["<"] = lambda x, y: Value(Type.BOOL, x.value() < y.value())
        self.op_to_lambda[Type.NUMBER]["<="] = lambda x, y: Value(Type.BOOL, x.value() <= y.value())
        self.op_to_lambda[Type.NUMBER][">"] = lambda x, y: Value(Type.BOOL, x.value() > y.value())
        self.op_to_lambda[Type.NUMBER][">="] = lambda x, y: Value(Type.BOOL, x.value() >= y.value())
        self.op_to_lambda[Type.NUMBER]["neg"] = lambda x: Value(Type.NUMBER, -x.value())

        # set up operations on strings
        self.op_to_lambda[Type.STRING] = {}
        self.op_to_lambda[Type.STRING]["+"] = lambda x, y: Value(x.type(), x.value() + y.value())
        self.op_to_lambda[Type.STRING]["=="] = lambda x, y: Value(Type.BOOL, x.value() == y.value())
        self.op_to_lambda[Type.STRING]["!="] = lambda x, y: Value(Type.BOOL, x.value() != y.value())

        # set up operations on booleans
        self.op_to_lambda[Type.BOOL] = {}
        self.op_to_lambda[Type.BOOL]["=="] = lambda x, y: Value(Type.BOOL, x.value() == y.value())
        self.op_to_lambda[Type.BOOL]["!="] = lambda x, y: Value(Type.BOOL, x.value() != y.value())

        # setup operations on null
        self.op_to_lambda[Type.NIL] = {}
        self.op_to_lambda[Type.NIL]["=="] = lambda x, y: Value(Type.BOOL, True)
        self.op_to_lambda[Type.NIL]["!="] = lambda x, y: Value(Type.BOOL, False)

        # functions are only equal to themselves
        self.op_to_lambda[Type.FUNCTION] = {}
        self.op_to_lambda[Type.FUNCTION]["=="] = lambda x, y: Value(Type.BOOL, x.value() is y.value())
        self.op_to_lambda[Type.FUNCTION]["!="] = lambda x, y: Value(Type.BOOL, x.value() is not y.value())

    def __handle_if(self, if_ast, env):
        cond = self.__eval_expr(if_ast.get("condition"), env)
        if is_truthy(cond):
            return self.__run_statement(if_ast.get("statement"), env)
        if if_ast.get("else_statement") is not None:
            return self.__run_statement(if_ast.get("else_statement"), env)
        return None

    def __handle_while(self, while_ast, env):
        while is_truthy(self.__eval_expr(while_ast.get("condition"), env)):
            val = self.__run_statement(while_ast.get("statement"), env)
            if val is not None:
                return val
        return None


def repl(interpreter):
    while True:
        try:
            line = input(">> ")
        except EOFError:
            print()
            return
        # output of earlier lines was already printed; only keep the current line's
        interpreter.reset()
        try:
            interpreter.run_line(line)
        except InterpreterError as e:
            print(e, file=sys.stderr)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    trace = "--trace" in args
    show_ast = "--ast" in args
    paths = [arg for arg in args if not arg.startswith("--")]
    if len(paths) > 1:
        print("Usage: jsclosure [--trace] [--ast] [file.js]", file=sys.stderr)
        return 2

    interpreter = Interpreter(trace_output=trace)
    if not paths:
        repl(interpreter)
        return 0

    try:
        with open(paths[0], encoding="utf-8") as f:
            program = f.read()
    except OSError as e:
        print(e, file=sys.stderr)
        return 1
    try:
        if show_ast:
            print(parse_program(program))
        else:
            interpreter.run(program)
    except InterpreterError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
