"""Data-driven tests for Exline: parser/*.tests and programs/*.tests.

Each .tests file holds cases of the form:

    === test name
    source code
    ---
    expected
    ---

Parser cases expect `ok` or `error: <message substring>`. Program cases
expect the exact stdout, or `error: <ErrorClass>` for a runtime error.
"""

import io
import signal
from pathlib import Path

import pytest

from exline import ExlineRuntimeError, ParseError, parse, run

RUN_TIMEOUT = 5
TESTS_DIR = Path(__file__).parent


def _timeout_handler(signum, frame):
    raise TimeoutError("test case timed out")


signal.signal(signal.SIGALRM, _timeout_handler)


def parse_tests_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse a .tests file into (name, input, expected) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result


def discover_cases(test_dir: Path) -> list:
    """Glob *.tests in test_dir, return pytest params with file/name ids."""
    params = []
    for test_file in sorted(test_dir.glob("*.tests")):
        for name, input_code, expected in parse_tests_file(test_file):
            params.append(
                pytest.param(input_code, expected, id=f"{test_file.stem}/{name}")
            )
    return params


@pytest.mark.parametrize("source,expected", discover_cases(TESTS_DIR / "parser"))
def test_parse(source: str, expected: str):
    try:
        signal.alarm(RUN_TIMEOUT)
        parse(source)
        error = None
    except ParseError as e:
        error = e
    finally:
        signal.alarm(0)

    if expected == "ok":
        if error is not None:
            pytest.fail(f"Expected ok, got parse error: {error}")
    elif expected.startswith("error:"):
        expected_msg = expected[6:].strip()
        if error is None:
            pytest.fail(f"Expected error containing '{expected_msg}', but parsing succeeded")
        assert expected_msg in str(error)
    else:
        pytest.fail(f"Unknown expected format: {expected}")


@pytest.mark.parametrize("source,expected", discover_cases(TESTS_DIR / "programs"))
def test_program(source: str, expected: str):
    out = io.StringIO()
    try:
        signal.alarm(RUN_TIMEOUT)
        run(source, stdout=out)
        error = None
    except ExlineRuntimeError as e:
        error = e
    finally:
        signal.alarm(0)

    if expected.startswith("error:"):
        expected_cls = expected[6:].strip()
        if error is None:
            pytest.fail(f"Expected {expected_cls}, but the program ran to completion")
        assert type(error).__name__ == expected_cls, str(error)
    else:
        if error is not None:
            pytest.fail(f"Unexpected runtime error: {error}")
        assert out.getvalue().strip() == expected
