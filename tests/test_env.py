from env_v4 import Scope, Slot
from type_valuev4 import create_value


def test_slot_write_is_seen_by_every_holder():
    slot = Slot(create_value(0))
    alias = slot
    slot.write(create_value(1))
    assert alias.read().value() == 1


def test_resolve_walks_outward():
    outer = Scope()
    outer.declare("x", create_value(1))
    inner = outer.child().child()
    assert inner.resolve("x") is outer.resolve("x")


def test_resolve_unbound_returns_none():
    assert Scope().child().resolve("nope") is None


def test_shadowing_uses_innermost():
    outer = Scope()
    outer.declare("x", create_value("outer"))
    inner = outer.child()
    inner.declare("x", create_value("inner"))
    assert inner.resolve("x").read().value() == "inner"
    assert outer.resolve("x").read().value() == "outer"


def test_redeclare_rebinds_in_same_scope():
    env = Scope()
    first = env.declare("x", create_value(1))
    second = env.declare("x", create_value(2))
    assert first is not second
    assert env.resolve("x") is second
    assert first.read().value() == 1


def test_child_sees_later_writes_to_parent():
    env = Scope()
    slot = env.declare("n", create_value(0))
    child = env.child()
    slot.write(create_value(5))
    assert child.resolve("n").read().value() == 5
    assert "n" in env
    assert "n" not in child
