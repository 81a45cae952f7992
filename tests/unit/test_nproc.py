# tests/unit/test_nproc.py
from __future__ import annotations

import subprocess
from unittest.mock import MagicMock

import pytest

from container_limits.nproc import NprocSource


@pytest.fixture
def nproc_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda x: f"/usr/bin/{x}")


def test_count_parses_output(monkeypatch: pytest.MonkeyPatch, nproc_on_path: None) -> None:
    mock = MagicMock(return_value=subprocess.CompletedProcess([], 0, stdout="8\n"))
    monkeypatch.setattr("subprocess.run", mock)
    assert NprocSource().count() == 8
    mock.assert_called_once_with(
        ["/usr/bin/nproc"], capture_output=True, text=True, check=True
    )


def test_count_utility_not_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing utility is 'no candidate', and nothing is spawned."""
    monkeypatch.setattr("shutil.which", lambda x: None)
    mock = MagicMock()
    monkeypatch.setattr("subprocess.run", mock)
    assert NprocSource().count() is None
    mock.assert_not_called()


def test_count_utility_vanished(monkeypatch: pytest.MonkeyPatch, nproc_on_path: None) -> None:
    monkeypatch.setattr("subprocess.run", MagicMock(side_effect=FileNotFoundError("nproc")))
    assert NprocSource().count() is None


def test_count_permission_error_propagates(
    monkeypatch: pytest.MonkeyPatch, nproc_on_path: None
) -> None:
    monkeypatch.setattr("subprocess.run", MagicMock(side_effect=PermissionError("denied")))
    with pytest.raises(PermissionError):
        NprocSource().count()


def test_count_nonzero_exit_propagates(
    monkeypatch: pytest.MonkeyPatch, nproc_on_path: None
) -> None:
    error = subprocess.CalledProcessError(1, ["/usr/bin/nproc"], stderr="boom")
    monkeypatch.setattr("subprocess.run", MagicMock(side_effect=error))
    with pytest.raises(subprocess.CalledProcessError):
        NprocSource().count()


@pytest.mark.parametrize("stdout", ["", "four\n", "0\n"])
def test_count_unparseable_output_warns(
    monkeypatch: pytest.MonkeyPatch,
    nproc_on_path: None,
    capsys: pytest.CaptureFixture[str],
    stdout: str,
) -> None:
    mock = MagicMock(return_value=subprocess.CompletedProcess([], 0, stdout=stdout))
    monkeypatch.setattr("subprocess.run", mock)
    assert NprocSource().count() is None
    assert "Warning: Can't detect number of processors" in capsys.readouterr().err


def test_custom_executable(monkeypatch: pytest.MonkeyPatch, nproc_on_path: None) -> None:
    mock = MagicMock(return_value=subprocess.CompletedProcess([], 0, stdout="2\n"))
    monkeypatch.setattr("subprocess.run", mock)
    source = NprocSource("getconf-nproc")
    assert source.count() == 2
    assert mock.call_args.args[0] == ["/usr/bin/getconf-nproc"]
    assert repr(source) == "<NprocSource getconf-nproc>"
