import pytest

from vcalentry.dump import main

from .common import get_test_path


def test_calentry_dump_arguments():
    # Test --version argument
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0

    # Test missing required arguments
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_calentry_dump(capsys):
    assert main([get_test_path("outlook_invite.ics")]) == 0
    out = capsys.readouterr().out
    assert "<VCALENDAR|" in out
    assert "SUMMARY: eAArly DETECT data" in out
    assert "Participants Details" in out


def test_calentry_dump_broken_file(capsys):
    assert main([get_test_path("truncated.ics")]) == 1
    assert "END:VCALENDAR" in capsys.readouterr().out
