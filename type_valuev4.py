from intbase import InterpreterBase


# Enumerated type for our different language data types
class Type:
    NUMBER = "number"
    BOOL = "bool"
    STRING = "string"
    NIL = "nil"
    FUNCTION = "function"


# Represents a value, which has a type and its value
class Value:
    def __init__(self, type, value=None):
        self.t = type
        self.v = value

    def value(self):
        return self.v

    def type(self):
        return self.t

    def __repr__(self):
        return f"Value({self.t}, {self.v!r})"


# builds a Value from a plain python value
def create_value(val):
    if val is None:
        return Value(Type.NIL, None)
    if isinstance(val, bool):
        return Value(Type.BOOL, val)
    if isinstance(val, (int, float)):
        return Value(Type.NUMBER, float(val))
    if isinstance(val, str):
        return Value(Type.STRING, val)
    raise ValueError(f"Unknown value type {type(val).__name__}")


def get_printable(val):
    if val.type() == Type.NUMBER:
        num = val.value()
        # very large numbers keep exponent notation
        if num.is_integer() and abs(num) < 1e21:
            return str(int(num))
        return repr(num)
    if val.type() == Type.STRING:
        return val.value()
    if val.type() == Type.BOOL:
        if val.value() is True:
            return InterpreterBase.TRUE_DEF
        return InterpreterBase.FALSE_DEF
    if val.type() == Type.NIL:
        return InterpreterBase.NULL_DEF
    if val.type() == Type.FUNCTION:
        return str(val.value())
    return None


# false, null and 0 are falsy; everything else is truthy
def is_truthy(val):
    if val.type() == Type.BOOL:
        return val.value()
    if val.type() == Type.NIL:
        return False
    if val.type() == Type.NUMBER:
        return val.value() != 0
    return True
