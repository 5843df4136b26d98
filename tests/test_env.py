"""Environment table and frame tests."""

import pytest

from exline import parse
from exline.env import Environment
from exline.values import VInt, VString


def test_print_is_preregistered():
    env = Environment()
    fn = env.get_function("print")
    assert fn is not None
    assert fn.builtin
    assert [p.name for p in fn.params] == ["value"]


def test_missing_names_are_none():
    env = Environment()
    assert env.get_variable("x") is None
    assert env.get_function("f") is None
    assert env.get_class("C") is None
    assert env.get_interface("I") is None


def test_last_write_wins():
    env = Environment()
    env.define_variable("x", VInt(1))
    env.define_variable("x", VString("two"))
    assert env.get_variable("x") == VString("two")


def test_frame_restores_snapshot():
    env = Environment()
    env.define_variable("x", VInt(1))
    env.push_frame()
    assert env.depth == 1
    env.define_variable("x", VInt(2))
    env.define_variable("y", VInt(3))
    assert env.get_variable("x") == VInt(2)
    env.pop_frame()
    assert env.depth == 0
    assert env.variables == {"x": VInt(1)}


def test_nested_frames():
    env = Environment()
    env.define_variable("a", VInt(0))
    env.push_frame()
    env.define_variable("a", VInt(1))
    env.push_frame()
    env.define_variable("a", VInt(2))
    env.pop_frame()
    assert env.get_variable("a") == VInt(1)
    env.pop_frame()
    assert env.get_variable("a") == VInt(0)


def test_frames_do_not_touch_other_tables():
    env = Environment()
    env.push_frame()
    env.define_class("C", parse("class C\nend").statements[0])
    env.pop_frame()
    assert "C" in env.classes


def test_pop_without_push():
    with pytest.raises(RuntimeError, match="no frame"):
        Environment().pop_frame()
