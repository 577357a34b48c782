from enum import Enum


class ErrorType(Enum):
    TYPE_ERROR = 1
    NAME_ERROR = 2  # if a variable can't be found in any enclosing scope
    FAULT_ERROR = 3  # used for runtime faults like division by zero
    SYNTAX_ERROR = 4


class InterpreterError(Exception):
    def __init__(self, error_type, description=None, line_num=None):
        self.error_type = error_type
        self.description = description
        self.line_num = line_num
        message = str(error_type)
        if line_num is not None:
            message += f" on line {line_num}"
        if description:
            message += f": {description}"
        super().__init__(message)


# Base class for the interpreter; owns the output channel and error reporting
class InterpreterBase:
    # AST node types produced by jsparse
    PROGRAM_DEF = "program"
    LET_DEF = "let"
    FUNC_DEF = "func"
    LAMBDA_DEF = "lambda"
    FCALL_DEF = "fcall"
    VAR_DEF = "var"
    NUMBER_DEF = "number"
    STRING_DEF = "string"
    BOOL_DEF = "bool"
    NIL_DEF = "nil"
    IF_DEF = "if"
    WHILE_DEF = "while"
    BLOCK_DEF = "block"
    RETURN_DEF = "return"
    PRINT_DEF = "print"
    EXPR_DEF = "expr"
    ASSIGN_DEF = "="

    # printable literals
    TRUE_DEF = "true"
    FALSE_DEF = "false"
    NULL_DEF = "null"

    def __init__(self, console_output=True):
        self.console_output = console_output
        self.reset()

    def reset(self):
        self.output_log = []
        self.error_type = None
        self.error_line = None

    def run(self, program):
        raise NotImplementedError

    # log the error before we throw
    def error(self, error_type, description=None, line_num=None):
        self.error_type = error_type
        self.error_line = line_num
        raise InterpreterError(error_type, description, line_num)

    def output(self, v):
        if self.console_output:
            print(v)
        self.output_log.append(v)

    def get_output(self):
        return self.output_log
