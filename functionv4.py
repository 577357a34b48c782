import random as _random
import time

from type_valuev4 import Type, Value


# Function holds the code of a user-defined function: its name (None when
# anonymous), its parameter names and its body statements
class Function:
    def __init__(self, name, args, statements):
        self.n = name
        self.a = args
        self.s = statements

    def name(self):
        return self.n

    def args(self):
        return self.a

    def stats(self):
        return self.s

    def arity(self):
        return len(self.a)


# Closure pairs a Function with the Scope that was active where it was defined.
# The scope is held by reference, never copied, so later writes to captured
# variables are visible inside the body.
class Closure:
    def __init__(self, func, env, name=None):
        self.f = func
        self.e = env
        self.n = name

    def func(self):
        return self.f

    def lenv(self):
        return self.e

    def name(self):
        if self.n is not None:
            return self.n
        return self.f.name()

    def args(self):
        return self.f.args()

    def stats(self):
        return self.f.stats()

    def arity(self):
        return self.f.arity()

    def __str__(self):
        if self.name() is None:
            return "<anonymous function>"
        return f"<function {self.name()}>"


# built-in function implemented in python; impl takes a list of Values and returns a Value
class NativeFunction:
    def __init__(self, name, arity, impl):
        self.n = name
        self.ar = arity
        self.impl = impl

    def name(self):
        return self.n

    def arity(self):
        return self.ar

    def call(self, args):
        return self.impl(args)

    def __str__(self):
        return f"<native function {self.n}>"


def clock(args):
    return Value(Type.NUMBER, time.time())


def random(args):
    return Value(Type.NUMBER, _random.random())


NATIVES = [
    NativeFunction("clock", 0, clock),
    NativeFunction("random", 0, random),
]
