"""Emitter and debug dump tests."""

import pytest

from exline import emit, parse, tokenize
from exline.debug import dump_ast, dump_tokens

SAMPLE = """Int n1 = 1
String s = "hi #{n1}"
def add(a: Int b: Int) -> Int
    a + b
end
interface Pet
    def speak(): String
end
class Dog implements Pet
    Int age
    Dog friend
    def speak(): String
        "woof"
    end
end
Dog d = Dog.new()
if add(n1 2) == 3
    print(d.speak())
else
    print("no")
end
d.age = 4
n1 = (n1 + 2) * 3
"""


def test_canonical_source_is_reproduced():
    assert emit(parse(SAMPLE)) == SAMPLE


def test_emit_is_stable():
    messy = 'Int x=1 def f(a:Int b :String):Int\n a end\nprint( f(x "s") )'
    once = emit(parse(messy))
    assert emit(parse(once)) == once
    assert once == 'Int x = 1\ndef f(a: Int b: String) -> Int\n    a\nend\nprint(f(x "s"))\n'


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(1 + 2) * 3", "(1 + 2) * 3"),
        ("1 + 2 * 3", "1 + 2 * 3"),
        ("1 - (2 - 3)", "1 - (2 - 3)"),
        ("(1 - 2) - 3", "1 - 2 - 3"),
        ("(1 == 2) == 0", "1 == 2 == 0"),
        ("(a + b).c", "(a + b).c"),
        ("P.new().m(1 2)", "P.new().m(1 2)"),
    ],
)
def test_parentheses(source, expected):
    assert emit(parse(source)) == expected + "\n"


def test_empty_program():
    assert emit(parse("")) == ""


def test_dump_tokens():
    text = dump_tokens(tokenize("Int x"))
    assert text == "0: Int 'Int' 1:1\n1: IDENT 'x' 1:5\n2: EOF '' 1:6\n"


def test_dump_ast():
    text = dump_ast(parse("Int x = 1 + y"))
    assert text.splitlines() == [
        "Program",
        "  statements: [",
        "    VariableDeclaration @1:1",
        "      name: 'x'",
        "      typ: Int",
        "      value: Binary @1:9",
        "        op: '+'",
        "        left: IntegerLiteral @1:9",
        "          value: 1",
        "        right: Identifier @1:13",
        "          name: 'y'",
        "  ]",
    ]
