import pytest

from batchsched import version


def test_info_lines_in_order():
    lines = version.info("v1alpha1")
    assert len(lines) == 6
    assert lines[0] == "API Version: v1alpha1"
    assert lines[1] == "Version: Not provided."
    assert lines[2] == "Git SHA: Not provided."
    assert lines[3] == "Built At: Not provided."


def test_info_runtime_lines_have_prefixes():
    lines = version.info("x")
    assert lines[4].startswith("Python Version: ")
    assert lines[5].startswith("Python OS/Arch: ")
    assert "/" in lines[5]


def test_print_version_and_exit(capsys):
    with pytest.raises(SystemExit) as excinfo:
        version.print_version_and_exit("v2")
    assert excinfo.value.code == 0
    out = capsys.readouterr().out.splitlines()
    assert out == version.info("v2")