# tests/test_main.py
"""
End-to-end tests: Go files on disk → CLI → ``<type>_string.go``.
"""

import os
import stat

import pytest

from tinystringer import StringerConfig, __version__, stringify
from tinystringer.errors import ConfigurationError
from tinystringer.main import (
    EXIT_ERROR,
    EXIT_INFRA,
    EXIT_OK,
    Stringer,
    main,
)
from tests.conftest import ALIAS_GO, COLOR_GO, COMMENT_GO
from tests.test_codegen import COLOR_STRING_GO


class TestCLISuccess:

    def test_writes_default_destination(self, color_file, color_output):
        assert main(["-type", "Color", color_file]) == EXIT_OK
        assert color_output.read_text(encoding="utf-8") == COLOR_STRING_GO

    @pytest.mark.parametrize("umask,expected", [
        (0o022, 0o644),
        (0o027, 0o640),
        (0o002, 0o664),
    ])
    def test_output_mode_follows_umask(self, color_file, color_output, umask, expected):
        previous = os.umask(umask)
        try:
            assert main(["-type", "Color", color_file]) == EXIT_OK
        finally:
            os.umask(previous)
        assert stat.S_IMODE(os.stat(color_output).st_mode) == expected

    def test_no_temp_files_left(self, tmp_path, color_file):
        main(["-type", "Color", color_file])
        assert sorted(os.listdir(tmp_path)) == ["color.go", "color_string.go"]

    def test_overwrites_previous_output(self, color_file, color_output):
        color_output.write_text("stale\n", encoding="utf-8")
        assert main(["-type", "Color", color_file]) == EXIT_OK
        assert color_output.read_text(encoding="utf-8") == COLOR_STRING_GO

    def test_explicit_output(self, tmp_path, color_file):
        target = tmp_path / "gen" / "colors.go"
        target.parent.mkdir()
        assert main(["-type", "Color", "-output", str(target), color_file]) == EXIT_OK
        assert target.read_text(encoding="utf-8") == COLOR_STRING_GO

    def test_stdout(self, capsys, color_file, color_output):
        assert main(["-type", "Color", "-output", "-", color_file]) == EXIT_OK
        assert capsys.readouterr().out == COLOR_STRING_GO
        assert not color_output.exists()

    def test_double_dash_flags(self, capsys, color_file):
        assert main(["--type", "Color", "--output", "-", color_file]) == EXIT_OK
        assert capsys.readouterr().out == COLOR_STRING_GO

    def test_all_options(self, capsys, write_go):
        path = write_go("pill.go", COMMENT_GO)
        argv = [
            "-type", "Pill",
            "-linecomment",
            "-trimprefix", "Ibu",
            "-stringtovaluemapname", "PillByName",
            "-enumvaluesslicename", "AllPills",
            "-output", "-",
            path,
        ]
        assert main(argv) == EXIT_OK
        out = capsys.readouterr().out
        assert '\t\treturn "sugar"\n' in out
        assert '\t\treturn "profen"\n' in out
        assert "var PillByName = map[string]Pill{\n" in out
        assert out.endswith("var AllPills = []Pill{\n\tAspirin,\n\tIbuprofen,\n\tPlacebo,\n}\n")

    def test_type_split_across_files(self, capsys, write_go):
        a = write_go("a.go", "package lv\n\ntype Level int\n")
        b = write_go("b.go", ALIAS_GO.replace("package alias", "package lv"))
        assert main(["-type", "Level", "-output", "-", a, b]) == EXIT_OK
        assert "package lv\n" in capsys.readouterr().out

    def test_verbose_logs_to_stderr(self, capsys, color_file):
        assert main(["-vv", "-type", "Color", color_file]) == EXIT_OK
        err = capsys.readouterr().err
        assert "Resolved 3 constant(s) of type Color" in err
        assert "[DEBUG]" in err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestCLIFailure:

    def test_missing_type(self, capsys, color_file):
        assert main([color_file]) == EXIT_ERROR
        assert "must provide --type" in capsys.readouterr().err

    def test_missing_files(self, capsys):
        assert main(["-type", "Color"]) == EXIT_ERROR
        assert "must provide at least one file argument" in capsys.readouterr().err

    def test_unknown_type(self, capsys, color_file, color_output):
        assert main(["-type", "Shape", color_file]) == EXIT_ERROR
        assert "did not find enough constant values for type Shape" in capsys.readouterr().err
        assert not os.path.exists(os.path.join(os.path.dirname(color_file), "shape_string.go"))

    def test_non_integer_type(self, write_go):
        path = write_go("s.go", "package p\n\ntype Name string\n\nconst A Name = \"a\"\n")
        assert main(["-type", "Name", path]) == EXIT_ERROR

    def test_failure_keeps_previous_output(self, write_go, tmp_path):
        path = write_go("t.go", "package p\n\ntype T int\n\nconst (\n\tA T = 1 << iota\n)\n")
        previous = tmp_path / "t_string.go"
        previous.write_text("previous\n", encoding="utf-8")
        assert main(["-type", "T", path]) == EXIT_ERROR
        assert previous.read_text(encoding="utf-8") == "previous\n"
        assert sorted(os.listdir(tmp_path)) == ["t.go", "t_string.go"]

    def test_package_mismatch(self, capsys, write_go, tmp_path):
        a = write_go("a.go", COLOR_GO)
        b = write_go("b.go", "package other\n")
        assert main(["-type", "Color", a, b]) == EXIT_ERROR
        assert "same package name" in capsys.readouterr().err
        assert not (tmp_path / "color_string.go").exists()

    def test_directory_mismatch(self, capsys, write_go):
        a = write_go("a.go", COLOR_GO, subdir="one")
        b = write_go("b.go", COLOR_GO, subdir="two")
        assert main(["-type", "Color", a, b]) == EXIT_ERROR
        assert "same source directory" in capsys.readouterr().err

    def test_reference_in_later_file_hints_at_order(self, capsys, write_go):
        a = write_go("a.go", "package lv\n\ntype Level int\n\nconst Default Level = Info\n")
        b = write_go("b.go", "package lv\n\nconst (\n\tDebug Level = iota\n\tInfo\n)\n")
        assert main(["-type", "Level", "-output", "-", a, b]) == EXIT_ERROR
        err = capsys.readouterr().err
        assert "could not find value of Info referenced by constant Default" in err
        assert "hint: constants are resolved in declaration order; declare Info before Default" in err
        assert main(["-type", "Level", "-output", "-", b, a]) == EXIT_OK

    def test_parse_error(self, capsys, write_go):
        path = write_go("bad.go", "not go at all\n")
        assert main(["-type", "T", path]) == EXIT_ERROR
        assert "STR-1001" in capsys.readouterr().err

    def test_unreadable_input(self, tmp_path):
        missing = str(tmp_path / "missing.go")
        assert main(["-type", "Color", missing]) == EXIT_INFRA

    def test_unwritable_output(self, tmp_path, color_file):
        target = str(tmp_path / "no" / "such" / "dir" / "out.go")
        assert main(["-type", "Color", "-output", target, color_file]) == EXIT_INFRA
        assert not os.path.exists(target)


class TestProgrammaticAPI:

    def test_stringify(self, color_file):
        config = StringerConfig(type_name="Color", files=(color_file,))
        assert stringify(config) == COLOR_STRING_GO

    def test_analyze(self, color_file):
        files, package, table = Stringer(
            StringerConfig(type_name="Color", files=(color_file,))
        ).analyze()
        assert package == "painting"
        assert len(files) == 1
        assert table.names == ("Red", "Green", "Blue")

    def test_run_returns_path(self, color_file, color_output):
        path = Stringer(StringerConfig(type_name="Color", files=(color_file,))).run()
        assert path == color_output

    def test_run_validates_config(self):
        with pytest.raises(ConfigurationError):
            Stringer(StringerConfig(type_name="Color")).run()
