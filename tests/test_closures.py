import os

import pytest

from intbase import ErrorType, InterpreterError
from interpreterv4 import Interpreter

BASE = os.path.dirname(__file__)

MAKE_COUNTER = """
function makeCounter() {
    let i = 0;
    function count() {
        i = i + 1;
        return i;
    }
    return count;
}
"""


def run(program):
    interpreter = Interpreter(console_output=False)
    interpreter.run(program)
    return interpreter.get_output()


def test_counter_program():
    with open(os.path.join(BASE, "programs", "make_counter.js"), encoding="utf-8") as f:
        out = run(f.read())
    assert out[:2] == ["1", "2"]
    assert len(out) == 3
    assert out[2] == "<function count>"


@pytest.mark.parametrize("calls", [1, 2, 5, 20])
def test_kth_call_sees_k(calls):
    program = MAKE_COUNTER + "let c = makeCounter();\n" + "print c();\n" * calls
    assert run(program) == [str(k) for k in range(1, calls + 1)]


def test_factory_invocations_are_independent():
    out = run(MAKE_COUNTER + """
        let a = makeCounter();
        let b = makeCounter();
        print a();
        print a();
        print b();
        print a();
        print b();
    """)
    assert out == ["1", "2", "1", "3", "2"]


def test_closures_from_one_call_share_slot():
    out = run("""
        let inc;
        let get;
        function make() {
            let n = 0;
            inc = function() { n = n + 1; };
            get = function() { return n; };
        }
        make();
        inc();
        inc();
        print get();
    """)
    assert out == ["2"]


def test_resolution_is_lexical_not_dynamic():
    out = run("""
        let x = "global";
        function show() {
            return x;
        }
        function caller() {
            let x = "caller";
            return show();
        }
        print caller();
    """)
    assert out == ["global"]


def test_closure_outlives_defining_call():
    out = run("""
        function adder(n) {
            return function(m) { return n + m; };
        }
        let add2 = adder(2);
        let add10 = adder(10);
        print add2(1);
        print add10(1);
        print add2(5);
    """)
    assert out == ["3", "11", "7"]


def test_outer_write_visible_inside_closure():
    out = run("""
        let a = 1;
        function read() { return a; }
        print read();
        a = 41 + 1;
        print read();
    """)
    assert out == ["1", "42"]


def test_closure_repr_is_stable_and_not_numeric():
    out = run(MAKE_COUNTER + """
        let c = makeCounter();
        print c;
        c();
        print c;
    """)
    assert out[0] == out[1]
    with pytest.raises(ValueError):
        float(out[0])


def test_anonymous_function_takes_binding_name():
    out = run("""
        let foo = function() { return 1; };
        print foo;
        print function() {};
    """)
    assert out == ["<function foo>", "<anonymous function>"]


def test_each_call_gets_fresh_scope():
    out = run("""
        function f() {
            let local = 0;
            local = local + 1;
            return local;
        }
        print f();
        print f();
    """)
    assert out == ["1", "1"]


def test_recursive_function():
    out = run("""
        function fib(n) {
            if (n < 3) {
                return 1;
            } else {
                return fib(n - 2) + fib(n - 1);
            }
        }
        print fib(10);
    """)
    assert out == ["55"]


def test_unbound_captured_variable_fails_at_call():
    program = """
        function f() { return missing; }
        print "before";
        f();
    """
    interpreter = Interpreter(console_output=False)
    with pytest.raises(InterpreterError) as excinfo:
        interpreter.run(program)
    assert excinfo.value.error_type == ErrorType.NAME_ERROR
    assert interpreter.get_output() == ["before"]


def test_closure_text_does_not_change_after_binding():
    out = run("""
        function show(f) {
            print f;
            return f;
        }
        let k = show(function() {});
        print k;
        let other = k;
        print other;
    """)
    assert out == ["<anonymous function>"] * 3


def test_function_literal_bound_by_assignment_is_named():
    out = run("""
        let g;
        g = function() {};
        print g;
    """)
    assert out == ["<function g>"]


def test_deep_recursion():
    out = run("""
        function down(n) {
            if (n == 0) return 0;
            return down(n - 1);
        }
        print down(300);
    """)
    assert out == ["0"]


def test_runaway_recursion_is_a_fault():
    interpreter = Interpreter(console_output=False)
    with pytest.raises(InterpreterError) as excinfo:
        interpreter.run("function forever(n) { return forever(n + 1); }\nforever(0);")
    assert excinfo.value.error_type == ErrorType.FAULT_ERROR
    assert "call depth" in str(excinfo.value)
    assert interpreter.call_depth == 0
