# tests/test_config.py
"""
Tests for StringerConfig: option validation and destination naming.
"""

import argparse
import os

import pytest

from tinystringer.config import STDOUT, StringerConfig
from tinystringer.errors import ConfigurationError, ErrorCodes


class TestValidate:

    def test_requires_type(self):
        with pytest.raises(ConfigurationError) as info:
            StringerConfig(type_name="", files=("a.go",)).validate()
        assert info.value.message == "must provide --type"
        assert info.value.code == ErrorCodes.CONFIGURATION

    def test_requires_files(self):
        with pytest.raises(ConfigurationError) as info:
            StringerConfig(type_name="Color").validate()
        assert info.value.message == "must provide at least one file argument"

    def test_same_directory_ok(self):
        StringerConfig(type_name="Color", files=("pkg/a.go", "pkg/b.go")).validate()

    @pytest.mark.parametrize("files", [
        ("./a.go", "b.go"),
        ("a.go", "./b.go"),
        ("pkg/a.go", "pkg/./b.go"),
        ("pkg/a.go", "pkg//b.go"),
        ("pkg/sub/../a.go", "pkg/b.go"),
    ])
    def test_same_directory_spelled_differently(self, files):
        StringerConfig(type_name="Color", files=files).validate()

    def test_mismatch_reports_current_directory(self):
        config = StringerConfig(type_name="Color", files=("a.go", "other/b.go"))
        with pytest.raises(ConfigurationError) as info:
            config.validate()
        assert "got input file a.go in directory ., " in info.value.message

    def test_directory_mismatch(self):
        config = StringerConfig(type_name="Color", files=("pkg/a.go", "other/b.go"))
        with pytest.raises(ConfigurationError) as info:
            config.validate()
        assert info.value.message == (
            "all input files must be in the same source directory; "
            "got input file pkg/a.go in directory pkg, "
            "but input file other/b.go in directory other"
        )


class TestDestination:

    def test_default_next_to_sources(self):
        config = StringerConfig(type_name="Color", files=("pkg/color.go",))
        assert config.destination() == os.path.join("pkg", "color_string.go")

    def test_default_lowercases_type(self):
        config = StringerConfig(type_name="HTTPMethod", files=("m.go",))
        assert config.destination() == "httpmethod_string.go"

    def test_explicit_output(self):
        config = StringerConfig(type_name="Color", files=("pkg/c.go",), output="out/x.go")
        assert config.destination() == "out/x.go"
        assert not config.writes_stdout

    def test_stdout(self):
        config = StringerConfig(type_name="Color", files=("c.go",), output=STDOUT)
        assert config.writes_stdout


class TestConstruction:

    def test_files_normalised_to_str_tuple(self, tmp_path):
        config = StringerConfig(type_name="Color", files=[tmp_path / "a.go"])
        assert config.files == (str(tmp_path / "a.go"),)

    def test_frozen(self):
        config = StringerConfig(type_name="Color")
        with pytest.raises(AttributeError):
            config.type_name = "Other"

    def test_from_namespace(self):
        args = argparse.Namespace(
            type_name="Kind",
            files=["k.go"],
            output=None,
            trim_prefix="Kind",
            line_comment=True,
            map_name="KindByName",
            slice_name="",
        )
        config = StringerConfig.from_namespace(args)
        assert config == StringerConfig(
            type_name="Kind",
            files=("k.go",),
            trim_prefix="Kind",
            line_comment=True,
            map_name="KindByName",
        )
