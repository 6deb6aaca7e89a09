"""Tests for the builtins module."""

import os
import stat

import pytest

from mysh.builtins import (
    BUILTIN_REGISTRY,
    builtin_cd,
    builtin_exit,
    builtin_pwd,
    builtin_which,
)
from mysh.config import ShellConfig
from mysh.shell import Shell


@pytest.fixture
def shell():
    return Shell()


class TestBuiltinRegistry:
    def test_names(self):
        assert set(BUILTIN_REGISTRY) == {"cd", "pwd", "which", "exit"}

    def test_handlers_are_callable(self):
        for name, handler in BUILTIN_REGISTRY.items():
            assert callable(handler), f"handler for '{name}' is not callable"


class TestCd:
    def test_cd_to_directory(self, tmp_path, shell, monkeypatch):
        monkeypatch.chdir(os.getcwd())
        assert builtin_cd([str(tmp_path)], shell) == 0
        assert os.getcwd() == str(tmp_path)

    def test_cd_no_args(self, tmp_path, shell, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert builtin_cd([], shell) == 1
        assert "wrong number of arguments" in capsys.readouterr().err
        assert os.getcwd() == str(tmp_path)

    def test_cd_too_many_args(self, tmp_path, shell, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert builtin_cd(["/", "/tmp"], shell) == 1
        assert "wrong number of arguments" in capsys.readouterr().err
        assert os.getcwd() == str(tmp_path)

    def test_cd_nonexistent(self, shell, capsys):
        assert builtin_cd(["/nonexistent_dir_xyz"], shell) == 1
        assert "cd: No such file or directory: /nonexistent_dir_xyz" in capsys.readouterr().err

    def test_cd_to_file(self, tmp_path, shell, capsys):
        f = tmp_path / "afile.txt"
        f.touch()
        assert builtin_cd([str(f)], shell) == 1
        assert "Not a directory" in capsys.readouterr().err

    def test_cd_name_too_long(self, tmp_path, shell, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert builtin_cd(["a" * 300], shell) == 1
        assert "File name too long" in capsys.readouterr().err
        assert os.getcwd() == str(tmp_path)

    def test_cd_symlink_loop(self, tmp_path, shell, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "loop").symlink_to(tmp_path / "loop")
        assert builtin_cd(["loop"], shell) == 1
        assert "Too many levels of symbolic links" in capsys.readouterr().err
        assert os.getcwd() == str(tmp_path)

    def test_cd_relative(self, tmp_path, shell, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sub").mkdir()
        assert builtin_cd(["sub"], shell) == 0
        assert os.getcwd() == str(tmp_path / "sub")


class TestPwd:
    def test_pwd(self, tmp_path, shell, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert builtin_pwd([], shell) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path)

    def test_pwd_with_args(self, shell, capsys):
        assert builtin_pwd(["extra"], shell) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "wrong number of arguments" in captured.err


class TestWhich:
    def test_which_existing(self, shell, capsys):
        assert builtin_which(["sh"], shell) == 0
        assert capsys.readouterr().out.strip().endswith("/sh")

    def test_which_nonexistent(self, shell, capsys):
        assert builtin_which(["doesnotexist"], shell) == 1
        assert "command not found: doesnotexist" in capsys.readouterr().err

    def test_which_uses_configured_dirs(self, tmp_path, capsys):
        tool = tmp_path / "mytool"
        tool.touch()
        tool.chmod(stat.S_IRWXU)
        shell = Shell(ShellConfig(search_dirs=(str(tmp_path),)))
        assert builtin_which(["mytool"], shell) == 0
        assert capsys.readouterr().out.strip() == str(tool)

    def test_which_path(self, shell, capsys):
        assert builtin_which(["/bin/sh"], shell) == 0
        assert capsys.readouterr().out.strip() == "/bin/sh"

    def test_which_no_args(self, shell, capsys):
        assert builtin_which([], shell) == 1
        assert "wrong number of arguments" in capsys.readouterr().err

    def test_which_two_args(self, shell, capsys):
        assert builtin_which(["ls", "cat"], shell) == 1
        assert "wrong number of arguments" in capsys.readouterr().err


class TestExit:
    def test_exit(self, shell, capsys):
        with pytest.raises(SystemExit) as info:
            builtin_exit([], shell)
        assert info.value.code == 0
        assert "exiting" in capsys.readouterr().out
