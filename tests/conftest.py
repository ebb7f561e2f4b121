# tests/conftest.py
"""
Shared Go sources and fixtures for the tinystringer test-suite.
"""

import logging
from pathlib import Path

import pytest

from tinystringer.config import StringerConfig
from tinystringer.parser import parse_source


# ───────────────────────────────────────────────────────────────────
#  Go sources
# ───────────────────────────────────────────────────────────────────

COLOR_GO = '''\
package painting

import "fmt"

type Color int

const (
\tRed Color = iota
\tGreen
\tBlue
)

func (c Color) Describe() string {
\treturn fmt.Sprintf("color %d {", int(c))
}
'''

OFFSET_GO = '''\
package kinds

type Kind uint8

const (
\tK_A Kind = iota + 1
\tK_B
)
'''

COMMENT_GO = '''\
package pill

type Pill int

const (
\tPlacebo Pill = iota // sugar
\tAspirin           // acetylsalicylic acid
\tIbuprofen
)
'''

ALIAS_GO = '''\
package alias

type Level int

const (
\tDebug Level = iota
\tInfo
\tDefault = Info
\tWarn Level = iota
\tError
)
'''

NEGATIVE_GO = '''\
package neg

type Delta int

const (
\tBack Delta = iota - 2
\tStay
\tForward
)
'''

CHAR_GO = r'''
package runes

type Key rune

const (
	KeyA Key = 'A'
	KeyNext
	KeyNewline Key = '\n'
	KeyHex Key = '\x7f'
)
'''

MIXED_GO = '''\
package mixed

import (
\t"fmt"
\t"strings"
)

type (
\tPoint struct {
\t\tX, Y int
\t}
\tMode int32
)

var registry = map[string]int{"a": 1, "b": 2}

const Version = "1.2.3"

const (
\tModeOff Mode = iota
\tmaxRetries int = 3
\tModeOn Mode = iota
)

func helper(s string) string {
\t// a ( stray paren and a ' quote inside a comment
\treturn strings.TrimSpace(fmt.Sprint(s, `raw } string`, '}'))
}
'''


# ───────────────────────────────────────────────────────────────────
#  Fixtures
# ───────────────────────────────────────────────────────────────────

def make_config(type_name, **kwargs):
    """Build a StringerConfig with test-friendly defaults."""
    return StringerConfig(type_name=type_name, **kwargs)


def parse(text, filename="test.go"):
    return parse_source(text, filename=filename)


@pytest.fixture
def write_go(tmp_path):
    """Write Go source into tmp_path and return the file path as str."""

    def _write(name, text, subdir=None):
        directory = tmp_path / subdir if subdir else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def color_file(write_go):
    return write_go("color.go", COLOR_GO)


@pytest.fixture
def color_output(tmp_path):
    return Path(tmp_path) / "color_string.go"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI installs so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("tinystringer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
